"""
RapidShyp Relay — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for every way a serviceability check
       can fail.
How:   Each exception carries the caller-facing message, the HTTP status it
       maps to, and an optional context dict that is logged but never
       returned. Global handlers registered in main.py turn them into the
       `{success: false, message, ...}` envelope.
Who:   Raised by ServiceabilityService; caught by the handlers in main.py.

Exception Hierarchy:
    RelayError (base)                → 500
    ├── InputValidationError         → 400 (missing required field)
    ├── UpstreamAuthError            → 401 (RapidShyp rejected the API key)
    ├── UpstreamBadRequestError      → 400 (RapidShyp rejected the payload)
    ├── UpstreamUnavailableError     → 500 (network, timeout, 5xx, bad body)
    ├── RoutingError                 → 404 (no such endpoint)
    └── MalformedBodyError           → 500 (request body is not usable JSON)

The outbound client itself does not raise for upstream failures; it returns
an UpstreamResult (see services/rapidshyp_client.py) and the service decides
which of these exceptions applies.
"""

from typing import Any, Dict, Optional


class RelayError(Exception):
    """
    Base exception for all relay errors.

    Attributes:
        message:      Caller-facing description (safe to return in API response)
        context:      Debug info (logged, NOT returned to the caller)
        status_code:  HTTP status the global handler responds with
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Internal server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class InputValidationError(RelayError):
    """
    Raised when a required request field is missing.

    Presence only: the field was absent or falsy. No outbound call has been
    made when this is raised.
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class UpstreamAuthError(RelayError):
    """
    Raised when RapidShyp answers 401.

    Terminal for the request: the key is never refreshed or retried.
    """

    status_code = 401

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            message="Unauthorized: Invalid RapidShyp API key",
            context=context,
        )


class UpstreamBadRequestError(RelayError):
    """
    Raised when RapidShyp answers 400.

    `details` is RapidShyp's error body, relayed to the caller verbatim.
    """

    status_code = 400

    def __init__(self, details: Any = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Bad request to RapidShyp API", context=context)
        self.details = details


class UpstreamUnavailableError(RelayError):
    """
    Raised for every other upstream failure: transport errors, timeouts,
    5xx or unexpected 4xx statuses, and success responses whose body is
    not JSON.

    `cause` is the underlying error text. It is only echoed to the caller
    when the relay runs in development mode.
    """

    status_code = 500

    def __init__(self, cause: str = "", context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Internal server error", context=context)
        self.cause = cause


class RoutingError(RelayError):
    """Raised for any path/method combination the relay does not serve."""

    status_code = 404

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Endpoint not found", context=context)


class MalformedBodyError(RelayError):
    """
    Raised when a JSON request body cannot be decoded, or decodes to a bare
    string, number, boolean or null.

    Answered like any other internal failure: a generic 500.
    """

    status_code = 500

    def __init__(self, reason: str = "", context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        if reason:
            ctx["reason"] = reason
        super().__init__(message="Internal server error", context=ctx)
