"""
RapidShyp Relay — Health Check Route
======================================

What:  Liveness endpoint for load balancers and container health checks.
How:   Returns a fixed payload. RapidShyp is never contacted here, so the
       answer does not depend on upstream availability.
"""

import logging

from fastapi import APIRouter

from app.schemas.serviceability import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Returns 200 with a fixed status payload while the process is running.",
)
async def health_check() -> HealthResponse:
    return HealthResponse()
