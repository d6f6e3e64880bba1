"""Data Transfer Objects for application layer."""

from .affordability import AffordabilityRequest, AffordabilityResponse

__all__ = [
    "AffordabilityRequest",
    "AffordabilityResponse",
]
