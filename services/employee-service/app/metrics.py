"""
Prometheus metrics for Employee Service.

Tracks HTTP requests, cache-aside behaviour and store operations.
"""

from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

# Request metrics
http_requests_total = Counter(
    "employee_http_requests_total", "Total HTTP requests", ["method", "endpoint", "status"]
)

http_request_duration_seconds = Histogram(
    "employee_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.075, 0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0),
)

# Cache metrics
employee_cache_hits_total = Counter(
    "employee_cache_hits_total", "Total cache hits", ["cache_type"]
)

employee_cache_misses_total = Counter(
    "employee_cache_misses_total", "Total cache misses", ["cache_type"]
)

employee_cache_errors_total = Counter(
    "employee_cache_errors_total", "Total cache backend errors", ["operation"]
)

employee_cache_invalidations_total = Counter(
    "employee_cache_invalidations_total", "Total cache invalidations", ["cache_type", "status"]
)

# Store metrics
employee_store_operations_total = Counter(
    "employee_store_operations_total", "Total store operations", ["operation", "status"]
)

employee_store_operation_duration_seconds = Histogram(
    "employee_store_operation_duration_seconds",
    "Store operation duration in seconds",
    ["operation"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)


def cache_type_for_key(key: str) -> str:
    """Collapse per-id keys into one label value."""
    return key.split(":", 1)[0]


def track_request_metrics(method: str, endpoint: str, status_code: int, duration: float):
    """Track HTTP request metrics."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=status_code).inc()
    http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)


def track_cache_hit(key: str):
    """Track cache hits."""
    employee_cache_hits_total.labels(cache_type=cache_type_for_key(key)).inc()


def track_cache_miss(key: str):
    """Track cache misses."""
    employee_cache_misses_total.labels(cache_type=cache_type_for_key(key)).inc()


def track_cache_error(operation: str):
    """Track cache backend failures."""
    employee_cache_errors_total.labels(operation=operation).inc()


def track_cache_invalidation(key: str, success: bool):
    """Track cache invalidations."""
    status = "success" if success else "failure"
    employee_cache_invalidations_total.labels(
        cache_type=cache_type_for_key(key), status=status
    ).inc()


def track_store_operation(operation: str, success: bool, duration: float):
    """Track store operation metrics."""
    status = "success" if success else "failure"
    employee_store_operations_total.labels(operation=operation, status=status).inc()
    employee_store_operation_duration_seconds.labels(operation=operation).observe(duration)


async def metrics_endpoint():
    """
    Prometheus metrics endpoint.

    Returns:
        Response with Prometheus metrics in text format
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
