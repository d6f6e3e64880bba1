"""Application services (use cases)."""

from .affordability_service import AffordabilityService

__all__ = [
    "AffordabilityService",
]
