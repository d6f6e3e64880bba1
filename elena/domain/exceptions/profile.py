"""Profile store-related domain exceptions."""

from .base import DomainException


class ProfileStoreException(DomainException):
    """Raised when the profile store returns an error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            message=message,
            code="PROFILE_STORE_ERROR",
        )
        self.status_code = status_code


class ProfileStoreTimeoutException(ProfileStoreException):
    """Raised when the profile store times out."""

    def __init__(self):
        super().__init__(
            message="Profile store request timed out",
            status_code=None,
        )
        self.code = "PROFILE_STORE_TIMEOUT"
