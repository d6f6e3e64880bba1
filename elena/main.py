"""
Elena Gateway - Main Application Entry Point

The deterministic affordability service behind the Elena real-estate
assistant: resolves a home-buying scenario, estimates the all-in mortgage
payment and returns a verdict with one recommended next action.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from elena import __version__
from elena.core.config import settings
from elena.core.logging import setup_logging
from elena.core.metrics import get_metrics, get_metrics_content_type
from elena.presentation.api import api_router
from elena.presentation.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    error_handler_middleware,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Sets up logging on startup and reports whether the profile store
    is configured.
    """
    setup_logging()

    logger = structlog.get_logger(__name__)
    logger.info(
        "application_started",
        version=__version__,
        profile_store_configured=settings.profile_store_configured,
        allow_origins_count=len(settings.allow_origins_list),
    )

    yield

    logger.info("application_stopped")


app = FastAPI(
    title="Elena Gateway",
    description="Deterministic home affordability and mortgage service",
    version=__version__,
    debug=settings.debug,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allow_origins_list,
    allow_credentials=False,
    allow_methods=["POST", "GET", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestContextMiddleware)

error_handler_middleware(app)

app.include_router(api_router)


@app.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    if not settings.metrics_enabled:
        return Response(status_code=404)
    return Response(
        content=get_metrics(),
        media_type=get_metrics_content_type(),
    )


@app.get("/", include_in_schema=False)
async def root():
    """Redirect to API documentation."""

    return RedirectResponse(url="/docs")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "elena.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
