from fastapi import APIRouter

from .affordability import affordability_router
from .health import health_router

router = APIRouter()

router.include_router(health_router, tags=["Health"])
router.include_router(affordability_router, tags=["Affordability"])
