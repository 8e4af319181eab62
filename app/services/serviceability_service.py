"""
RapidShyp Relay — Serviceability Service (Orchestrator)
=========================================================

What:  The relay itself: validate → build payload → call RapidShyp →
       translate the outcome.
Who:   Called by the POST /api/rapidshyp/check route handler.

Request Lifecycle:
    validating
      └─ missing field → InputValidationError (no outbound call)
    calling-upstream
      └─ one RapidShypClient.check_serviceability() call
    responding
      ├─ UpstreamSuccess                 → ServiceabilityResponse
      ├─ UpstreamClientError(401)        → UpstreamAuthError
      ├─ UpstreamClientError(400)        → UpstreamBadRequestError
      ├─ UpstreamClientError(other 4xx)  → UpstreamUnavailableError
      └─ UpstreamServerError             → UpstreamUnavailableError

Nothing is kept between requests.
"""

import logging
from typing import Any, Dict

from app.exceptions import (
    InputValidationError,
    UpstreamAuthError,
    UpstreamBadRequestError,
    UpstreamUnavailableError,
)
from app.schemas.serviceability import (
    ServiceabilityRequest,
    ServiceabilityResponse,
    UpstreamPayload,
)
from app.services.coercion import is_present, parse_float, parse_int
from app.services.rapidshyp_client import (
    RapidShypClient,
    UpstreamClientError,
    UpstreamServerError,
    UpstreamSuccess,
)

logger = logging.getLogger(__name__)

# Checked in this order; the first missing field wins
REQUIRED_FIELDS = (
    ("pincode", "Pincode is required"),
    ("weight", "Weight (in kg) is required"),
    ("pickup_pincode", "Pickup pincode is required"),
)


class ServiceabilityService:
    """Relays pincode serviceability checks to RapidShyp."""

    def __init__(self, client: RapidShypClient):
        self.client = client

    def validate(self, request: ServiceabilityRequest) -> None:
        """
        Presence-only validation.

        Raises:
            InputValidationError naming the first missing required field.
        """
        for field, message in REQUIRED_FIELDS:
            if not is_present(getattr(request, field)):
                raise InputValidationError(message=message, field=field)

    def build_payload(self, request: ServiceabilityRequest) -> Dict[str, Any]:
        """Map the inbound fields onto RapidShyp's request body."""
        payload = UpstreamPayload(
            to_pincode=parse_int(request.pincode),
            from_pincode=parse_int(request.pickup_pincode),
            weight=parse_float(request.weight),
            cod=request.order_value if is_present(request.order_value) else 0,
        )
        return payload.model_dump()

    async def check_serviceability(
        self, request: ServiceabilityRequest
    ) -> ServiceabilityResponse:
        """
        Run one serviceability check end to end.

        Returns:
            ServiceabilityResponse wrapping RapidShyp's body.

        Raises:
            InputValidationError, UpstreamAuthError, UpstreamBadRequestError,
            UpstreamUnavailableError. The global handlers in main.py turn
            these into error envelopes.
        """
        self.validate(request)

        payload = self.build_payload(request)
        logger.info("Sending RapidShyp request with payload: %s", payload)

        result = await self.client.check_serviceability(payload)

        match result:
            case UpstreamSuccess(body=body):
                return ServiceabilityResponse(data=body)
            case UpstreamClientError(status_code=401):
                raise UpstreamAuthError()
            case UpstreamClientError(status_code=400, body=body):
                raise UpstreamBadRequestError(details=body)
            case UpstreamClientError(status_code=status, body=body):
                raise UpstreamUnavailableError(
                    cause=f"Request failed with status code {status}",
                    context={"upstream_status": status, "upstream_body": body},
                )
            case UpstreamServerError(cause=cause, status_code=status):
                raise UpstreamUnavailableError(
                    cause=cause, context={"upstream_status": status}
                )
            case _:
                raise TypeError(f"Unexpected upstream result: {result!r}")
