"""Base domain exception."""

from typing import Any, Dict, Optional


class DomainException(Exception):
    """
    Base exception for all domain-level errors.

    Business gaps in an affordability request are never raised; domain
    exceptions cover requests that can't be processed at all and failures
    of the profile store.
    """

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def to_dict(self, request_id: Optional[str] = None) -> Dict[str, Any]:
        """Error body returned by the API."""
        return {
            "error": self.code,
            "message": self.message,
            "request_id": request_id,
        }
