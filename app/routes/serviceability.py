"""
RapidShyp Relay — Serviceability Route Handler
================================================

What:  Handles POST /api/rapidshyp/check.
How:   Hands the request body to ServiceabilityService and returns its
       response. Failures are raised as RelayError subclasses and formatted
       by the global exception handlers in main.py.

Request Flow:
    1. read_check_request() turns the raw body into ServiceabilityRequest
    2. ServiceabilityService validates, builds the payload, calls RapidShyp
    3. 200 with the success envelope, or an error envelope via the handlers

Body Handling:
    - Non-JSON content type, empty body, or a JSON array → empty request
      (the caller then gets the first missing-field message)
    - Undecodable JSON, or a bare string/number/boolean/null → generic 500
"""

import json
import logging

from fastapi import APIRouter, Depends, Request

from app.exceptions import MalformedBodyError
from app.schemas.serviceability import (
    ErrorResponse,
    ServiceabilityRequest,
    ServiceabilityResponse,
)
from app.services.serviceability_service import ServiceabilityService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/rapidshyp", tags=["Serviceability"])


def get_serviceability_service(request: Request) -> ServiceabilityService:
    """
    FastAPI dependency returning the service built by create_app().

    Why app.state: the service is constructed from the Settings passed to the
    factory, so each app instance (including test apps) carries its own.
    """
    return request.app.state.serviceability_service


async def read_check_request(request: Request) -> ServiceabilityRequest:
    """
    FastAPI dependency parsing the check body without schema validation.

    Raises:
        MalformedBodyError: JSON content type with an unusable body.
    """
    content_type = request.headers.get("content-type", "")
    if "json" not in content_type.lower():
        return ServiceabilityRequest()

    raw = await request.body()
    if not raw.strip():
        return ServiceabilityRequest()

    try:
        body = json.loads(raw)
    except ValueError as e:
        raise MalformedBodyError(reason=str(e))

    if isinstance(body, list):
        return ServiceabilityRequest()
    if not isinstance(body, dict):
        raise MalformedBodyError(reason=f"Top-level JSON {type(body).__name__} is not accepted")
    return ServiceabilityRequest.model_validate(body)


@router.post(
    "/check",
    response_model=ServiceabilityResponse,
    responses={
        200: {"description": "RapidShyp answered", "model": ServiceabilityResponse},
        400: {"description": "Missing field or rejected by RapidShyp", "model": ErrorResponse},
        401: {"description": "RapidShyp rejected the API key", "model": ErrorResponse},
        500: {"description": "RapidShyp unreachable or failed", "model": ErrorResponse},
    },
    openapi_extra={
        "requestBody": {
            "required": False,
            "content": {
                "application/json": {"schema": ServiceabilityRequest.model_json_schema()}
            },
        }
    },
    summary="Check pincode serviceability",
    description=(
        "Forwards a pickup/delivery pincode pair with weight and order value to "
        "RapidShyp's serviceability API and relays the answer."
    ),
)
async def check_serviceability(
    body: ServiceabilityRequest = Depends(read_check_request),
    service: ServiceabilityService = Depends(get_serviceability_service),
) -> ServiceabilityResponse:
    return await service.check_serviceability(body)
