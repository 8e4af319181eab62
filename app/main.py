"""
RapidShyp Relay — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app(settings) wires the RapidShyp client,
       the serviceability service, middleware, routes and exception handlers.
Who:   uvicorn (`uvicorn app.main:app`), `python -m app`, and the tests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → GZip → CORS    │
    │               → Unhandled Error (innermost)         │
    │                                                     │
    │  Routes:                                            │
    │    POST /api/rapidshyp/check    GET /health         │
    │                                                     │
    │  Exception Handlers:                                │
    │    missing field→400  upstream 401→401              │
    │    upstream 400→400   upstream failure→500          │
    │    unknown route→404  anything else→500             │
    └─────────────────────────────────────────────────────┘

Every error leaves the app as `{"success": false, "message": ...}` with
`details` (upstream 400) or `error` (500 in development mode) when relevant.

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration; a missing RAPIDSHYP_API_KEY aborts startup
    3. Log the listening URL and endpoints
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import Settings, get_settings
from app.exceptions import (
    InputValidationError,
    RelayError,
    RoutingError,
    UpstreamAuthError,
    UpstreamBadRequestError,
    UpstreamUnavailableError,
)
from app.middleware.errors import UnhandledErrorMiddleware
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, get_request_id
from app.routes import health, serviceability
from app.services.rapidshyp_client import RapidShypClient
from app.services.serviceability_service import ServiceabilityService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (container log collectors read it from there)
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party libraries log every connection at INFO/DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def log_startup_banner(settings: Settings) -> None:
    base_url = f"http://localhost:{settings.port}"
    logger.info("RapidShyp Pincode Checker API running on %s", base_url)
    logger.info("Endpoint: POST %s/api/rapidshyp/check", base_url)
    logger.info("Health check: GET %s/health", base_url)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging and validate settings.

    A missing API key re-raises here, which makes uvicorn abort startup and
    exit with a non-zero status instead of serving requests that can only
    fail upstream.
    """
    settings: Settings = app.state.settings
    setup_logging(settings)

    try:
        settings.validate_required()
    except ValueError as e:
        logger.error("ERROR: %s", str(e))
        raise

    log_startup_banner(settings)

    yield

    logger.info("RapidShyp relay shutting down.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _envelope(
    status_code: int, message: str, extra: Optional[Dict[str, Any]] = None
) -> JSONResponse:
    content: Dict[str, Any] = {"success": False, "message": message}
    if extra:
        content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the relay's exceptions onto error envelopes.

    Handler hierarchy:
        InputValidationError       → 400 with the missing-field message
        UpstreamAuthError          → 401
        UpstreamBadRequestError    → 400 with RapidShyp's body as `details`
        UpstreamUnavailableError   → 500, `error` only in development mode
        RelayError (incl. Routing,
                    MalformedBody) → its own status_code
        HTTPException 404/405      → 404 "Endpoint not found"
        Exception                  → 500 "Internal server error"

    Exceptions that escape these handlers are caught by
    UnhandledErrorMiddleware, inside the request-ID scope.
    """

    @app.exception_handler(InputValidationError)
    async def handle_input_validation_error(request: Request, exc: InputValidationError):
        rid = get_request_id()
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return _envelope(exc.status_code, exc.message)

    @app.exception_handler(UpstreamAuthError)
    async def handle_upstream_auth_error(request: Request, exc: UpstreamAuthError):
        rid = get_request_id()
        logger.error("[%s] RapidShyp rejected the API key", rid)
        return _envelope(exc.status_code, exc.message)

    @app.exception_handler(UpstreamBadRequestError)
    async def handle_upstream_bad_request(request: Request, exc: UpstreamBadRequestError):
        rid = get_request_id()
        logger.warning("[%s] RapidShyp rejected the request: %s", rid, exc.details)
        return _envelope(exc.status_code, exc.message, {"details": exc.details})

    @app.exception_handler(UpstreamUnavailableError)
    async def handle_upstream_unavailable(request: Request, exc: UpstreamUnavailableError):
        rid = get_request_id()
        logger.error("[%s] RapidShyp error: %s | Context: %s", rid, exc.cause, exc.context)
        # Internal detail is only echoed outside production
        extra = {"error": exc.cause} if request.app.state.settings.is_development else None
        return _envelope(exc.status_code, exc.message, extra)

    @app.exception_handler(RelayError)
    async def handle_relay_error(request: Request, exc: RelayError):
        logger.warning(
            "[%s] %s: %s | Context: %s", get_request_id(), type(exc).__name__, exc.message, exc.context
        )
        return _envelope(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        # Unknown path and known path with the wrong method look the same to callers
        if exc.status_code in (404, 405):
            not_found = RoutingError(context={"path": request.url.path, "method": request.method})
            return _envelope(not_found.status_code, not_found.message)
        return _envelope(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Outermost fallback, only reached when the middleware stack itself
        fails. Route errors are answered by UnhandledErrorMiddleware first.
        """
        logger.error("Unexpected error outside request handling: %s", str(exc), exc_info=True)
        return _envelope(500, "Internal server error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    client: Optional[RapidShypClient] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration; read from the environment when omitted.
        client:   RapidShyp client; built from `settings` when omitted.
                  Tests pass one backed by httpx.MockTransport.

    Returns:
        Fully configured FastAPI instance.
    """
    settings = settings or get_settings()
    client = client or RapidShypClient(
        api_key=settings.rapidshyp_api_key,
        api_url=settings.rapidshyp_api_url,
    )

    app = FastAPI(
        title="RapidShyp Pincode Checker API",
        description="Relays pincode serviceability checks to the RapidShyp API.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.serviceability_service = ServiceabilityService(client)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS → UnhandledError
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(serviceability.router)

    return app


# uvicorn expects `app.main:app` to be importable
app = create_app()
