"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .affordability import InvalidAffordabilityRequestException
from .profile import (
    ProfileStoreException,
    ProfileStoreTimeoutException,
)

__all__ = [
    "DomainException",
    "InvalidAffordabilityRequestException",
    "ProfileStoreException",
    "ProfileStoreTimeoutException",
]
