"""Request logging middleware.

Logs one line when a request starts and one when it completes, with the
request context bound for every log line emitted in between. The measured
duration is also returned to the caller in the ``X-Process-Time`` header
and compared against the slow-request threshold.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from recipe_extractor.observability.logging import bind_context, get_logger


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response


logger = get_logger(__name__)

# Extraction waits on a completion round trip, so the bar is high
SLOW_REQUEST_THRESHOLD = 30.0


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for structured request/response logging.

    Every response gets the process time header; excluded paths (probes,
    metrics scrapes) are timed but not logged. Request bodies are never
    logged; recipe text can be large.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        exclude_paths: set[str] | None = None,
        process_time_header: str = "X-Process-Time",
        slow_threshold: float = SLOW_REQUEST_THRESHOLD,
    ) -> None:
        super().__init__(app)
        self.exclude_paths = exclude_paths or {"/health", "/metrics", "/favicon.ico"}
        self.process_time_header = process_time_header
        self.slow_threshold = slow_threshold

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log the request, time it and report the duration."""
        should_log = request.url.path not in self.exclude_paths

        if should_log:
            bind_context(
                method=request.method,
                path=request.url.path,
                client_ip=self._get_client_ip(request),
            )
            logger.info(
                "Request started",
                content_length=request.headers.get("content-length"),
            )

        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        duration_ms = round(elapsed * 1000, 2)

        response.headers[self.process_time_header] = f"{duration_ms}ms"

        if should_log:
            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=duration_ms,
            )

        if elapsed > self.slow_threshold:
            logger.warning(
                "Slow request detected",
                method=request.method,
                path=request.url.path,
                duration_ms=duration_ms,
                threshold_ms=self.slow_threshold * 1000,
            )

        return response

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP from request, considering proxies."""
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host

        return "unknown"
