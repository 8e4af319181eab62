"""
RapidShyp Relay — Unhandled Error Middleware
==============================================

What:  Turns any exception that escapes the route and exception handlers into
       the generic `{"success": false, "message": "Internal server error"}`
       500 response.
Why here: Starlette's own catch-all sits outside every user middleware, so a
       response produced there skips the request-ID header and the access
       log. Registered innermost, this one answers while both still apply.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.middleware.request_id import get_request_id

logger = logging.getLogger(__name__)

INTERNAL_ERROR_BODY = {"success": False, "message": "Internal server error"}


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Last line of defence for request handling; the stack trace is logged only."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "[%s] Unexpected error: %s", get_request_id(), str(exc), exc_info=True
            )
            return JSONResponse(status_code=500, content=dict(INTERNAL_ERROR_BODY))
