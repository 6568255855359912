from django.conf import settings
from django.core import checks


def check_oaipmh_settings(app_configs, **kwargs):
    from oairepo.oaipmh.tokens import TOKEN_STORES
    from oairepo.util import extensions
    errors = []
    try:
        _known_formats = set(extensions.get_names(extensions.METADATA_FORMATS))
        _known_set_formats = set(extensions.get_names(extensions.OAI_SETS))
    except extensions.ExtensionsError as exception:
        return [checks.Error(
            'Could not load OAI-PMH plugins',
            hint=str(exception),
            id='oairepo.E000',
        )]
    _unknown_formats = set(settings.OAIPMH_METADATA_FORMATS) - _known_formats
    if _unknown_formats:
        errors.append(checks.Error(
            'Unknown metadata formats in OAIPMH_METADATA_FORMATS',
            hint=f'unknown: {sorted(_unknown_formats)}; known: {sorted(_known_formats)}',
            id='oairepo.E001',
        ))
    if settings.OAIPMH_SET_FORMAT and settings.OAIPMH_SET_FORMAT not in _known_set_formats:
        errors.append(checks.Error(
            'Unknown set format in OAIPMH_SET_FORMAT',
            hint=f'known: {sorted(_known_set_formats)}',
            id='oairepo.E002',
        ))
    if settings.OAIPMH_LIST_LIMIT < 1 or settings.OAIPMH_TOKEN_EXPIRATION_MINUTES < 1:
        errors.append(checks.Error(
            'OAIPMH_LIST_LIMIT and OAIPMH_TOKEN_EXPIRATION_MINUTES must be positive',
            id='oairepo.E003',
        ))
    if settings.OAIPMH_TOKEN_STORE not in TOKEN_STORES:
        errors.append(checks.Error(
            'Unknown resumption token store in OAIPMH_TOKEN_STORE',
            hint=f'known: {sorted(TOKEN_STORES)}',
            id='oairepo.E004',
        ))
    if not settings.OAIPMH_NAMESPACE_ID:
        errors.append(checks.Warning(
            'OAIPMH_NAMESPACE_ID is empty; OAI identifiers will be "oai::<id>"',
            id='oairepo.W001',
        ))
    return errors
