"""
RapidShyp Relay — Request ID Middleware
=========================================

What:  Assigns a correlation ID to each request and returns it in the
       X-Request-ID response header.
How:   A caller-supplied X-Request-ID is reused when it is a short token of
       letters, digits, '.', '_' or '-'; anything else is replaced by a fresh
       8-character ID so arbitrary header text never reaches the logs.
       The ID lives in a ContextVar for the duration of the request and is
       also exposed on request.state.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._\-]{1,64}")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def get_request_id() -> str:
    """ID of the request being handled, "" outside a request."""
    return request_id_var.get()


def resolve_request_id(supplied: Optional[str]) -> str:
    """Reuse an acceptable caller-supplied ID, otherwise mint a new one."""
    if supplied:
        candidate = supplied.strip()
        if _VALID_REQUEST_ID.fullmatch(candidate):
            return candidate
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Scope a request ID around the request and echo it on the response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = rid

        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
