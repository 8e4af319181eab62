"""
RapidShyp Relay — Outbound RapidShyp API Client
=================================================

What:  Performs the single POST to RapidShyp's serviceability endpoint.
How:   Opens an httpx.AsyncClient per call, sends the JSON payload with the
       `Authorization: Token <key>` header, and classifies the outcome into
       an UpstreamResult instead of raising.
Who:   Built once in create_app() from Settings; called by
       ServiceabilityService for every check.

Result types:
    UpstreamSuccess       2xx with a JSON body
    UpstreamClientError   4xx (body parsed as JSON, else raw text)
    UpstreamServerError   5xx, transport error, timeout, or a 2xx body that
                          is not JSON

There is no retry and no timeout override: httpx's default timeout applies.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import httpx

from app.config import DEFAULT_RAPIDSHYP_API_URL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpstreamSuccess:
    status_code: int
    body: Any


@dataclass(frozen=True)
class UpstreamClientError:
    status_code: int
    body: Any


@dataclass(frozen=True)
class UpstreamServerError:
    cause: str
    status_code: Optional[int] = None


UpstreamResult = Union[UpstreamSuccess, UpstreamClientError, UpstreamServerError]


def _decode_body(response: httpx.Response) -> Any:
    """JSON body if it parses, raw text otherwise (None when empty)."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class RapidShypClient:
    """
    Thin async client for RapidShyp's serviceability API.

    Args:
        api_key:   RapidShyp token
        api_url:   Serviceability endpoint
        transport: Optional httpx transport; tests pass an httpx.MockTransport
    """

    def __init__(
        self,
        api_key: str,
        api_url: str = DEFAULT_RAPIDSHYP_API_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self._transport = transport

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Token {self.api_key}",
            "Content-Type": "application/json",
        }

    async def check_serviceability(self, payload: Dict[str, Any]) -> UpstreamResult:
        """
        POST `payload` to RapidShyp and classify the response.

        Never raises for network or HTTP failures.
        """
        try:
            async with httpx.AsyncClient(
                transport=self._transport, follow_redirects=True
            ) as client:
                response = await client.post(self.api_url, json=payload, headers=self.headers)
        except httpx.HTTPError as e:
            cause = str(e) or type(e).__name__
            logger.error("RapidShyp request failed: %s", cause)
            return UpstreamServerError(cause=cause)

        status = response.status_code
        logger.info("RapidShyp response received: %d", status)

        if response.is_success:
            try:
                return UpstreamSuccess(status_code=status, body=response.json())
            except ValueError:
                logger.error("RapidShyp returned a non-JSON body with status %d", status)
                return UpstreamServerError(
                    cause="Malformed response from RapidShyp API", status_code=status
                )

        body = _decode_body(response)
        logger.error("RapidShyp error %d: %s", status, body)
        if 400 <= status < 500:
            return UpstreamClientError(status_code=status, body=body)
        return UpstreamServerError(
            cause=f"Request failed with status code {status}", status_code=status
        )
