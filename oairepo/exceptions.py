class OaiRepoException(Exception):
    pass


class ConfigurationError(OaiRepoException):
    pass


class ItemDoesNotExist(OaiRepoException):
    """The item source has no (non-deleted) item with the requested identifier.
    """
    pass


class ResumptionTokenNotFound(OaiRepoException):
    """A resumption token is unknown, malformed or expired.
    """
    pass
