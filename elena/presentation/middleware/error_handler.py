"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from elena.domain.exceptions import (
    DomainException,
    InvalidAffordabilityRequestException,
    ProfileStoreException,
    ProfileStoreTimeoutException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": code,
            "message": message,
            "request_id": get_request_id(),
        },
    )


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses.
    """

    @app.exception_handler(InvalidAffordabilityRequestException)
    async def invalid_request_handler(
        request: Request,
        exc: InvalidAffordabilityRequestException,
    ) -> JSONResponse:
        """Handle invalid request errors."""
        return JSONResponse(status_code=400, content=exc.to_dict(get_request_id()))

    @app.exception_handler(ProfileStoreTimeoutException)
    async def profile_store_timeout_handler(
        request: Request,
        exc: ProfileStoreTimeoutException,
    ) -> JSONResponse:
        """Handle profile store timeouts that escaped the service."""
        logger.error(
            "profile_store_timeout",
            request_id=get_request_id(),
        )
        return _error_response(
            503,
            exc.code,
            "Service temporarily unavailable. Please try again.",
        )

    @app.exception_handler(ProfileStoreException)
    async def profile_store_error_handler(
        request: Request,
        exc: ProfileStoreException,
    ) -> JSONResponse:
        """Handle profile store errors that escaped the service."""
        logger.error(
            "profile_store_error",
            request_id=get_request_id(),
            message=exc.message,
            status_code=exc.status_code,
        )
        return _error_response(
            503,
            exc.code,
            "Unable to process request. Please try again later.",
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning(
            "domain_exception",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
        )
        return JSONResponse(status_code=400, content=exc.to_dict(get_request_id()))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            request_id=get_request_id(),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred.")
