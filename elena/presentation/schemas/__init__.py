"""Pydantic schemas for API request/response validation."""

from .affordability import (
    AffordabilityRequestSchema,
    AffordabilityResponseSchema,
    InputsUsedSchema,
    MortgageSchema,
    NextActionSchema,
    QuickRailsSchema,
    VerdictSchema,
)
from .error import ErrorResponseSchema

__all__ = [
    "AffordabilityRequestSchema",
    "AffordabilityResponseSchema",
    "InputsUsedSchema",
    "MortgageSchema",
    "NextActionSchema",
    "QuickRailsSchema",
    "VerdictSchema",
    "ErrorResponseSchema",
]
