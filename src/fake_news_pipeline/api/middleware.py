"""FastAPI middleware for request tracing, deadline propagation and security headers."""

import re
import time
import uuid
from typing import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from fake_news_pipeline.deadline import (
    DEADLINE_HEADER,
    REQUEST_ID_HEADER,
    parse_deadline,
    request_deadline,
    request_id,
)

logger = structlog.get_logger(__name__)

# Inbound request ids are reused only if they look like ids
REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
}


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """Middleware to add request ID tracing and a deadline to all requests.

    Features:
    - Reuses an inbound X-Request-ID from the upstream stage, or generates one
    - Binds request_id to structlog context (appears in all logs)
    - Restores the request deadline from X-Request-Deadline, or starts one
      `default_timeout` seconds from now
    - Adds X-Request-ID response header for client correlation
    - Logs request start/end with duration
    """

    def __init__(self, app: ASGIApp, default_timeout: float = 30.0):
        super().__init__(app)
        self.default_timeout = default_timeout

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        """Process request with tracing context."""
        inbound_id = request.headers.get(REQUEST_ID_HEADER)
        current_id = inbound_id if inbound_id and REQUEST_ID_PATTERN.match(inbound_id) else uuid.uuid4().hex
        request.state.request_id = current_id

        deadline = parse_deadline(request.headers.get(DEADLINE_HEADER))
        if deadline is None:
            deadline = time.time() + self.default_timeout

        id_token = request_id.set(current_id)
        deadline_token = request_deadline.set(deadline)

        # Bind to structlog context (will appear in all subsequent logs)
        structlog.contextvars.bind_contextvars(
            request_id=current_id,
            method=request.method,
            path=request.url.path,
            client_host=request.client.host if request.client else None,
        )

        logger.info("Request started")

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start_time) * 1000

            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2),
            )

            response.headers[REQUEST_ID_HEADER] = current_id
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                "Request failed",
                exc_info=exc,
                duration_ms=round(duration_ms, 2),
            )
            raise

        finally:
            # Clear context after request (prevent leakage to other requests)
            request_id.reset(id_token)
            request_deadline.reset(deadline_token)
            structlog.contextvars.clear_contextvars()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add hardening headers to every response."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response
