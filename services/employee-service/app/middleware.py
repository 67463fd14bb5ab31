"""
Middleware components for request handling.

Request ID propagation and Prometheus request metrics.
"""

import time
from typing import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from .logging_config import bind_request_id, clear_request_context

logger = structlog.get_logger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Bind a request ID to every log line emitted while handling a request.

    Reuses an incoming ``X-Request-ID`` header when present and echoes the
    ID back on the response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = bind_request_id(request.headers.get("X-Request-ID"))
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start_time) * 1000
            response.headers["X-Request-ID"] = request_id
            logger.debug(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2),
            )
            return response
        finally:
            clear_request_context()


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Middleware to automatically track Prometheus metrics for all HTTP requests.

    Tracks:
    - Request count by method, endpoint, and status code
    - Request duration by method and endpoint
    """

    def __init__(self, app: ASGIApp, track_func: Callable):
        """
        Initialize the middleware.

        Args:
            app: FastAPI application
            track_func: Function to call for tracking metrics (method, endpoint, status, duration)
        """
        super().__init__(app)
        self.track_func = track_func

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        response = await call_next(request)
        duration = time.time() - start_time

        # Use the route template so /employees/1 and /employees/2 share a label
        route = request.scope.get("route")
        endpoint = getattr(route, "path", request.url.path)

        self.track_func(
            method=request.method,
            endpoint=endpoint,
            status_code=response.status_code,
            duration=duration,
        )
        return response
