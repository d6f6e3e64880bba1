"""Health check endpoint for service monitoring."""

from fastapi import APIRouter
from pydantic import BaseModel

from elena import __version__
from elena.core.config import settings

health_router = APIRouter()


class HealthResponse(BaseModel):
    status: str = "healthy"
    service: str
    version: str
    profile_store: str


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Returns the health status of the service and whether the profile store is configured.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        service=settings.app_name,
        version=__version__,
        profile_store="configured" if settings.profile_store_configured else "not_configured",
    )
