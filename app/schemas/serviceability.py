"""
RapidShyp Relay — Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models for the inbound check request, the payload sent to
       RapidShyp, and the JSON envelopes returned to callers.
Why:   FastAPI uses these for body parsing, response serialization and the
       OpenAPI docs.

Design Decision:
    The inbound fields are typed `Any` on purpose. Validation is presence
    only (see ServiceabilityService.validate) and the numeric fields are
    coerced permissively when the payload is built, so a schema-level type
    check here would reject requests the relay is meant to forward.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

SUCCESS_MESSAGE = "Serviceability check completed"


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ServiceabilityRequest(BaseModel):
    """
    What:  Body of POST /api/rapidshyp/check.
    Who:   Built by FastAPI from the caller's JSON body, discarded once the
           upstream payload has been built.
    """
    pincode: Any = Field(default=None, description="Delivery pincode (required)")
    pickup_pincode: Any = Field(default=None, description="Pickup pincode (required)")
    weight: Any = Field(default=None, description="Package weight in kg (required)")
    order_value: Any = Field(
        default=None,
        description="Order value, sent to RapidShyp as `cod`. Defaults to 0.",
    )

    model_config = {
        "extra": "ignore",
        "json_schema_extra": {
            "example": {
                "pincode": "110001",
                "pickup_pincode": "560001",
                "weight": 0.5,
                "order_value": 999,
            }
        },
    }


class UpstreamPayload(BaseModel):
    """
    What:  JSON body POSTed to RapidShyp.
    How:   Built by ServiceabilityService.build_payload. A `None` pincode or
           weight means the inbound value did not parse as a number; it is
           sent as JSON null.
    """
    to_pincode: Optional[int] = None
    from_pincode: Optional[int] = None
    weight: Optional[float] = None
    cod: Any = 0


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ServiceabilityResponse(BaseModel):
    """Successful check: RapidShyp's body is echoed under `data`."""
    success: bool = Field(default=True)
    data: Any = Field(default=None, description="RapidShyp response body, unmodified")
    message: str = Field(default=SUCCESS_MESSAGE)


class ErrorResponse(BaseModel):
    """
    What:  Envelope for every failed request.

    Fields:
        message: Human-readable description
        details: RapidShyp's error body (upstream 400 only)
        error:   Internal error text (500 only, development mode only)
    """
    success: bool = Field(default=False)
    message: str
    details: Optional[Any] = None
    error: Optional[str] = None


class HealthResponse(BaseModel):
    """Fixed liveness payload returned by GET /health."""
    status: str = Field(default="OK")
    message: str = Field(default="RapidShyp API server is running")
