"""
RapidShyp Relay — Request Logging Middleware
==============================================

What:  One access-log line per relayed request:
           POST /api/rapidshyp/check 200 412.3ms [a1b2c3d4] from 10.0.0.7
When:  Runs inside RequestIDMiddleware and outside UnhandledErrorMiddleware,
       so every request, including one that crashed, is logged with its ID.

Request bodies are never logged here; ServiceabilityService logs the
outbound payload it builds.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import get_request_id

logger = logging.getLogger("rapidshyp.access")

# Polled by load balancers every few seconds
QUIET_PATHS = frozenset({"/health"})


def status_log_level(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING, everything else → INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def client_address(request: Request) -> str:
    return request.client.host if request.client else "unknown"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log keyed by request ID, levelled by response status."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)

        entry = {
            "request_id": get_request_id(),
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "duration_ms": elapsed_ms,
            "client_ip": client_address(request),
        }
        logger.log(
            status_log_level(response.status_code),
            "%(method)s %(path)s %(status)d %(duration_ms).1fms [%(request_id)s] from %(client_ip)s",
            entry,
            extra=entry,
        )
        return response
