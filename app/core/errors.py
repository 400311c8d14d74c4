from typing import Optional


class IntegrationError(Exception):
    """Base class for failures surfaced at the HTTP boundary."""


class ValidationError(IntegrationError):
    """A required request field is missing or malformed."""


class NotInstalledError(IntegrationError):
    def __init__(self, location_id: str):
        super().__init__(f"App not installed for location {location_id}")
        self.location_id = location_id


class TokenExchangeError(IntegrationError):
    pass


class UploadError(IntegrationError):
    pass


class GHLAPIError(IntegrationError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.upstream_status = status_code


def public_detail(exc: Exception, production: bool, fallback: str = "Internal server error") -> str:
    # Never leak upstream messages in production
    if production:
        return fallback
    return str(exc) or fallback
