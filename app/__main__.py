"""
RapidShyp Relay — Command-line Entrypoint
===========================================

Usage:
    python -m app
    rapidshyp-relay

Reads Settings from the environment, refuses to start (exit status 1) when
RAPIDSHYP_API_KEY is missing, then serves the app with uvicorn on HOST:PORT.
"""

import logging
import sys

import uvicorn

from app.config import get_settings
from app.main import create_app, setup_logging

logger = logging.getLogger("app")


def main() -> None:
    settings = get_settings()
    setup_logging(settings)

    try:
        settings.validate_required()
    except ValueError as e:
        logger.error("ERROR: %s", str(e))
        sys.exit(1)

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
