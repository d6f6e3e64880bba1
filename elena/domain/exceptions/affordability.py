"""Affordability request-related domain exceptions."""

from .base import DomainException


class InvalidAffordabilityRequestException(DomainException):
    """Raised when an affordability request body can't be used at all."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_AFFORDABILITY_REQUEST",
        )
