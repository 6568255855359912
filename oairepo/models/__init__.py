from oairepo.models.resumption_token import ResumptionToken

__all__ = (
    'ResumptionToken',
)
