"""Geotab client exceptions."""


class GeotabError(Exception):
    """Base exception for Geotab client errors."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code


class ApiError(GeotabError):
    """The API reported an error for the request."""

    pass


class IncorrectCredentialsError(GeotabError):
    """The API rejected the supplied login credentials."""

    pass


class ConfigurationError(GeotabError):
    """Connection settings are missing or invalid."""

    pass
