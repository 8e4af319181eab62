"""
RapidShyp Relay — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   RapidShyp is replaced by an httpx.MockTransport, so every test runs
       the real RapidShypClient and the real FastAPI app without network.

Fixture Hierarchy:
    test_settings   Settings with a fake API key, production mode
    fake_upstream   Records outbound requests; `handler` decides the response
    test_app        create_app() wired to fake_upstream
    test_client     HTTPX AsyncClient talking to test_app
    dev_client      Same, with ENVIRONMENT=development
"""

import os
from typing import Callable, List

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Override settings for testing BEFORE any app imports
os.environ["RAPIDSHYP_API_KEY"] = "test-key-not-real"
os.environ["LOG_LEVEL"] = "WARNING"

from app.config import Settings  # noqa: E402
from app.main import create_app  # noqa: E402
from app.services.rapidshyp_client import RapidShypClient  # noqa: E402

TEST_API_KEY = "test-key-not-real"
TEST_API_URL = "https://rapidshyp.test/v1/serviceability/check"


class FakeRapidShyp:
    """
    Stand-in for RapidShyp's serviceability endpoint.

    Usage:
        fake_upstream.handler = lambda request: httpx.Response(401, json={})
        ...
        assert len(fake_upstream.requests) == 1
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json={"serviceable": True})
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def client(self) -> RapidShypClient:
        return RapidShypClient(
            api_key=TEST_API_KEY,
            api_url=TEST_API_URL,
            transport=httpx.MockTransport(self),
        )


def _settings(**overrides) -> Settings:
    values = {
        "rapidshyp_api_key": TEST_API_KEY,
        "rapidshyp_api_url": TEST_API_URL,
        "environment": "production",
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def test_settings() -> Settings:
    return _settings()


@pytest.fixture
def fake_upstream() -> FakeRapidShyp:
    return FakeRapidShyp()


@pytest.fixture
def test_app(test_settings, fake_upstream):
    return create_app(test_settings, client=fake_upstream.client())


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient routed straight into the app.

    raise_app_exceptions=False: tests assert on the 500 envelope rather than
    on whatever exception produced it.
    """
    transport = ASGITransport(app=test_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def dev_client(fake_upstream):
    app = create_app(_settings(environment="development"), client=fake_upstream.client())
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def valid_body() -> dict:
    return {
        "pincode": "110001",
        "pickup_pincode": "560001",
        "weight": "0.5",
        "order_value": 1500,
    }
