"""Request/response logging middleware with timing."""

import time
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from elena.core.config import settings
from elena.core.metrics import record_http_request
from .request_context import get_request_id

logger = structlog.get_logger(__name__)

# Not worth a log line or a metric sample
QUIET_PATHS = {"/metrics", "/v1/health"}


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs request start, completion, and duration, and records HTTP metrics."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        method = request.method
        path = request.url.path

        if path in QUIET_PATHS:
            return await call_next(request)

        log = logger.bind(
            request_id=get_request_id(),
            method=method,
            path=path,
        )

        log.info("request_started", has_query=bool(request.query_params))

        try:
            response = await call_next(request)
            duration = time.perf_counter() - start_time

            log.info(
                "request_completed",
                status_code=response.status_code,
                duration_ms=round(duration * 1000, 2),
            )
            if settings.metrics_enabled:
                record_http_request(method, path, response.status_code, duration)

            return response

        except Exception as e:
            duration = time.perf_counter() - start_time

            log.error(
                "request_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round(duration * 1000, 2),
            )
            if settings.metrics_enabled:
                record_http_request(method, path, 500, duration)
            raise
