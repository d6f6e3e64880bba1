"""Affordability API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from elena.application.dto import AffordabilityRequest
from elena.application.services import AffordabilityService
from elena.core.dependencies import get_affordability_service
from elena.core.metrics import record_evaluation, track_affordability_latency
from elena.presentation.schemas import (
    AffordabilityRequestSchema,
    AffordabilityResponseSchema,
    ErrorResponseSchema,
)

affordability_router = APIRouter(
    prefix="/affordability",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        500: {"model": ErrorResponseSchema, "description": "Unexpected error"},
    },
)

DEBUG_QUERY_VALUES = {"1", "true"}


def _estimate_outcome(mortgage_source: str) -> str:
    if mortgage_source == "deterministic_estimate":
        return "ok"
    if mortgage_source.endswith(":failed"):
        return "failed"
    return "skipped"


@affordability_router.post(
    "",
    response_model=AffordabilityResponseSchema,
    response_model_exclude_unset=True,
    status_code=200,
    summary="Check Affordability",
    description="""
    Evaluate whether a home scenario is affordable.

    Merges overrides, the upstream financial snapshot, the baseline scenario
    and the user's profile into one scenario, then returns the mortgage
    estimate, quick rails, verdict and a single recommended next action.
    Missing inputs are reported in the body rather than as an error.
    """,
    responses={
        200: {"description": "Affordability evaluated (possibly INSUFFICIENT)"},
    },
)
async def check_affordability(
    request: AffordabilityRequestSchema,
    affordability_service: Annotated[
        AffordabilityService, Depends(get_affordability_service)
    ],
    debug: Annotated[
        str | None,
        Query(description="Set to 1 or true to include the debug block"),
    ] = None,
) -> AffordabilityResponseSchema:
    """
    Run an affordability check.

    Returns the verdict, next action and a plain-language summary.
    """
    dto = AffordabilityRequest(
        body=request.model_dump(exclude_none=True),
        debug=(debug or "").strip().lower() in DEBUG_QUERY_VALUES,
    )

    with track_affordability_latency():
        response = await affordability_service.assess(dto)

    # Record business metrics
    record_evaluation(
        status=response.verdict["status"],
        next_action_type=response.next_action["type"],
        estimate_outcome=_estimate_outcome(response.mortgage["source"]),
    )

    return AffordabilityResponseSchema.model_validate(response.to_dict())
