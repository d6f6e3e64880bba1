"""Dependency injection for FastAPI."""

from typing import Annotated, Optional

from fastapi import Depends

from elena.core.config import settings
from elena.domain.interfaces import ProfileStore
from elena.infrastructure.clients import SupabaseProfileStore
from elena.application.services import AffordabilityService
from elena.service.affordability import AffordabilitySettings, affordability_settings


# External client dependencies
def get_profile_store() -> Optional[ProfileStore]:
    """Get a ProfileStore instance, or None when Supabase isn't configured."""
    if not settings.profile_store_configured:
        return None
    return SupabaseProfileStore()


# Engine policy
def get_affordability_settings() -> AffordabilitySettings:
    """Get the affordability policy settings."""
    return affordability_settings


# Service dependencies
async def get_affordability_service(
    profile_store: Annotated[Optional[ProfileStore], Depends(get_profile_store)],
    engine_settings: Annotated[AffordabilitySettings, Depends(get_affordability_settings)],
) -> AffordabilityService:
    """Get an AffordabilityService instance with all dependencies."""
    return AffordabilityService(
        profile_store=profile_store,
        settings=engine_settings,
    )
