"""
RapidShyp Relay — Middleware Helper Tests
===========================================

What we test:
    ✅ Caller-supplied request IDs are reused only when they are safe to log
    ✅ Access-log level follows the response status
    ✅ Health checks stay out of the access log
"""

import logging
import re

import pytest

from app.middleware.logging import status_log_level
from app.middleware.request_id import get_request_id, resolve_request_id

GENERATED_ID = re.compile(r"[0-9a-f]{8}")


class TestResolveRequestId:

    @pytest.mark.parametrize("supplied", ["abc123", "req-42_a.b", "x" * 64])
    def test_valid_id_is_reused(self, supplied):
        assert resolve_request_id(supplied) == supplied

    def test_surrounding_whitespace_is_stripped(self):
        assert resolve_request_id("  abc123 ") == "abc123"

    @pytest.mark.parametrize("supplied", [None, "", "   ", "x" * 65, "bad id", "a\nb", "<script>"])
    def test_unusable_id_is_replaced(self, supplied):
        assert GENERATED_ID.fullmatch(resolve_request_id(supplied))

    def test_no_request_id_outside_a_request(self):
        assert get_request_id() == ""


class TestStatusLogLevel:

    @pytest.mark.parametrize(
        "status, level",
        [
            (200, logging.INFO),
            (302, logging.INFO),
            (400, logging.WARNING),
            (404, logging.WARNING),
            (500, logging.ERROR),
            (502, logging.ERROR),
        ],
    )
    def test_level(self, status, level):
        assert status_log_level(status) == level


class TestAccessLog:

    @pytest.mark.asyncio
    async def test_check_is_logged(self, test_client, valid_body, caplog):
        caplog.set_level(logging.INFO, logger="rapidshyp.access")

        await test_client.post(
            "/api/rapidshyp/check", json=valid_body, headers={"X-Request-ID": "log1"}
        )

        access = [r for r in caplog.records if r.name == "rapidshyp.access"]
        assert len(access) == 1
        assert access[0].levelno == logging.INFO
        assert access[0].getMessage().startswith("POST /api/rapidshyp/check 200 ")
        assert "[log1]" in access[0].getMessage()

    @pytest.mark.asyncio
    async def test_health_is_not_logged(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="rapidshyp.access")

        await test_client.get("/health")

        assert [r for r in caplog.records if r.name == "rapidshyp.access"] == []
