"""
RapidShyp Relay — Application Configuration
=============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a `Settings` object that is
       handed explicitly to the application factory.
Who:   `create_app()` and the `python -m app` entrypoint. Request handling
       never reads the environment; it only sees the Settings instance it was
       built with.
When:  Loaded once at startup.

Environment variables:
    RAPIDSHYP_API_KEY   Required. Token sent as `Authorization: Token <key>`.
    RAPIDSHYP_API_URL   Upstream serviceability endpoint.
    HOST / PORT         Bind address (default 0.0.0.0:3001).
    ENVIRONMENT         "development" echoes internal error detail to callers.
                        NODE_ENV is accepted as an alias.
    CORS_ORIGINS        Comma-separated origins, "*" by default.
    LOG_LEVEL           DEBUG, INFO, WARNING, ERROR or CRITICAL.
"""

from typing import List

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

DEFAULT_RAPIDSHYP_API_URL = "https://apiv2.rapidshyp.com/v1/serviceability/check"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Everything except the RapidShyp API key has a default that works for
    local development.
    """

    # ── RapidShyp ─────────────────────────────────────────────────────────
    # Required: the relay refuses to start without it
    rapidshyp_api_key: str = Field(
        default="",
        description="RapidShyp API token sent with every serviceability check",
    )
    rapidshyp_api_url: str = Field(
        default=DEFAULT_RAPIDSHYP_API_URL,
        description="RapidShyp serviceability endpoint (POST)",
    )

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3001, ge=1, le=65535)

    # What: Deployment environment; only "development" changes behavior
    # (internal error text is included in 500 responses)
    environment: str = Field(
        default="production",
        validation_alias=AliasChoices("environment", "node_env"),
    )

    # ── CORS ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Logging ───────────────────────────────────────────────────────────
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("environment")
    @classmethod
    def normalize_environment(cls, v: str) -> str:
        return v.strip().lower()

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def validate_required(self) -> None:
        """
        What:  Validates that settings the relay cannot run without are set.
        When:  Called during startup, before the server accepts traffic.
        Raises:
            ValueError listing every missing setting.
        """
        errors = []
        if not self.rapidshyp_api_key.strip():
            errors.append("RAPIDSHYP_API_KEY is not set in environment variables")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


def get_settings() -> Settings:
    """Build a fresh Settings instance from the current environment."""
    return Settings()
