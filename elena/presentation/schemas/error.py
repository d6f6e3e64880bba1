"""Pydantic schema for API error responses."""

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response format for all API errors."""
    error: str = Field(
        ...,
        description="Error code",
        examples=["PROFILE_STORE_ERROR"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Profile store request timed out"],
    )
    request_id: str | None = Field(
        None,
        description="Request ID for tracing",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "INVALID_AFFORDABILITY_REQUEST",
                    "message": "request body must be a JSON object",
                    "request_id": "abc123",
                }
            ]
        }
    }
