"""
RapidShyp Relay — Configuration and Startup Tests
===================================================

What we test:
    ✅ Defaults (port 3001, production mode, open CORS)
    ✅ NODE_ENV / ENVIRONMENT select development mode
    ✅ Missing API key fails validation, aborts the lifespan and exits 1
"""

from unittest.mock import patch

import pytest

from app.config import Settings
from app.main import create_app, lifespan


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("PORT", "ENVIRONMENT", "NODE_ENV", "CORS_ORIGINS", "RAPIDSHYP_API_URL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:

    def test_defaults(self, clean_env):
        settings = Settings(_env_file=None, rapidshyp_api_key="k")

        assert settings.port == 3001
        assert settings.is_development is False
        assert settings.cors_origins_list == ["*"]
        assert settings.rapidshyp_api_url == "https://apiv2.rapidshyp.com/v1/serviceability/check"

    def test_reads_environment(self, clean_env):
        clean_env.setenv("RAPIDSHYP_API_KEY", "from-env")
        clean_env.setenv("PORT", "8080")

        settings = Settings(_env_file=None)

        assert settings.rapidshyp_api_key == "from-env"
        assert settings.port == 8080

    @pytest.mark.parametrize("variable", ["ENVIRONMENT", "NODE_ENV"])
    def test_development_mode(self, clean_env, variable):
        clean_env.setenv(variable, "Development")

        assert Settings(_env_file=None, rapidshyp_api_key="k").is_development is True

    def test_cors_origins_list(self):
        settings = Settings(
            _env_file=None, rapidshyp_api_key="k", cors_origins="http://a.test, http://b.test"
        )

        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_invalid_log_level(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, rapidshyp_api_key="k", log_level="LOUD")

    def test_missing_api_key_fails_validation(self):
        settings = Settings(_env_file=None, rapidshyp_api_key="")

        with pytest.raises(ValueError, match="RAPIDSHYP_API_KEY"):
            settings.validate_required()

    def test_present_api_key_passes_validation(self):
        Settings(_env_file=None, rapidshyp_api_key="k").validate_required()


class TestStartup:

    @pytest.mark.asyncio
    async def test_lifespan_aborts_without_api_key(self):
        app = create_app(Settings(_env_file=None, rapidshyp_api_key="", log_level="WARNING"))

        with pytest.raises(ValueError):
            async with lifespan(app):
                pass

    @pytest.mark.asyncio
    async def test_lifespan_starts_with_api_key(self):
        app = create_app(Settings(_env_file=None, rapidshyp_api_key="k", log_level="WARNING"))

        async with lifespan(app):
            pass

    def test_entrypoint_exits_without_api_key(self):
        from app.__main__ import main

        settings = Settings(_env_file=None, rapidshyp_api_key="", log_level="WARNING")
        with patch("app.__main__.get_settings", return_value=settings), \
             patch("app.__main__.uvicorn") as mock_uvicorn:
            with pytest.raises(SystemExit) as exc_info:
                main()

        assert exc_info.value.code == 1
        mock_uvicorn.run.assert_not_called()

    def test_entrypoint_serves_on_configured_port(self, clean_env):
        from app.__main__ import main

        settings = Settings(_env_file=None, rapidshyp_api_key="k", log_level="WARNING")
        with patch("app.__main__.get_settings", return_value=settings), \
             patch("app.__main__.uvicorn") as mock_uvicorn:
            main()

        _, kwargs = mock_uvicorn.run.call_args
        assert kwargs["port"] == 3001
        assert kwargs["host"] == "0.0.0.0"
