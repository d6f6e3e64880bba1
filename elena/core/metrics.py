"""Prometheus metrics for the Elena gateway service.

Metrics are organized into two categories:

Business Metrics (for Product dashboards):
- elena_affordability_verdict_total: Verdicts by status
- elena_next_action_total: Recommended next actions by type
- elena_mortgage_estimate_total: Mortgage estimates by outcome

Technical Metrics (for Engineering/SRE dashboards):
- elena_affordability_latency_seconds: Affordability request latency
- elena_profile_fetch_total: Profile store lookups by status
- elena_profile_fetch_failures_total: Profile store failures
- elena_profile_fetch_latency_seconds: Profile store latency
- elena_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics (Product dashboards)
# =============================================================================

verdict_total = Counter(
    "elena_affordability_verdict_total",
    "Total number of affordability verdicts",
    ["status"],  # GREEN, CAUTION, NO-GO, INSUFFICIENT
)

next_action_total = Counter(
    "elena_next_action_total",
    "Recommended next actions by type",
    ["type"],
)

mortgage_estimate_total = Counter(
    "elena_mortgage_estimate_total",
    "Mortgage estimates by outcome",
    ["outcome"],  # ok, failed, skipped
)


# =============================================================================
# Technical Metrics (Engineering/SRE dashboards)
# =============================================================================

affordability_latency = Histogram(
    "elena_affordability_latency_seconds",
    "Affordability request latency in seconds",
    buckets=[0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

profile_fetch_latency = Histogram(
    "elena_profile_fetch_latency_seconds",
    "Profile store fetch latency in seconds",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

profile_fetch_failures = Counter(
    "elena_profile_fetch_failures_total",
    "Total number of profile store failures",
    ["error_type"],  # timeout, error
)

profile_fetch_total = Counter(
    "elena_profile_fetch_total",
    "Total number of profile store requests",
    ["status"],  # success, failure
)

http_requests_total = Counter(
    "elena_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "elena_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_evaluation(status: str, next_action_type: str, estimate_outcome: str) -> None:
    """Record one affordability evaluation in metrics."""
    verdict_total.labels(status=status).inc()
    next_action_total.labels(type=next_action_type).inc()
    mortgage_estimate_total.labels(outcome=estimate_outcome).inc()


@contextmanager
def track_affordability_latency() -> Generator[None, None, None]:
    """Context manager to track affordability request latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        affordability_latency.observe(duration)


@contextmanager
def track_profile_fetch_latency() -> Generator[None, None, None]:
    """Context manager to track profile store fetch latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        profile_fetch_latency.observe(duration)


def record_profile_fetch_success() -> None:
    """Record a successful profile store fetch."""
    profile_fetch_total.labels(status="success").inc()


def record_profile_fetch_failure(error_type: str) -> None:
    """Record a profile store fetch failure."""
    profile_fetch_total.labels(status="failure").inc()
    profile_fetch_failures.labels(error_type=error_type).inc()


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
