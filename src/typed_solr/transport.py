"""
HTTP transport for SOLR requests.

:class:`Transport` is the seam between the client and the network: it takes
URLs and parameter sets and returns raw response bytes, nothing more.
:class:`HttpxTransport` implements it on ``httpx.AsyncClient``; tests and
applications with their own HTTP stack can supply another implementation.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple

import httpx
from pydantic import ValidationError

from .config import SOLRConfig
from .exceptions import SOLRTransportError
from .models import ErrorInfo
from .params import QueryParameterSet

logger = logging.getLogger(__name__)


class Transport(ABC):
    """Sends requests to SOLR and returns raw response bodies."""

    @abstractmethod
    async def get(self, url: str, params: Optional[QueryParameterSet] = None) -> bytes:
        """GET ``url`` with ``params`` URL-encoded onto the query string."""

    @abstractmethod
    async def post(
        self,
        url: str,
        body: bytes,
        content_type: str = "application/json",
        params: Optional[QueryParameterSet] = None,
    ) -> bytes:
        """POST ``body`` to ``url``."""

    async def execute(
        self,
        base_url: str,
        core_name: str,
        params: QueryParameterSet,
        handler: str = "select",
    ) -> bytes:
        """Run a search request against ``handler`` of one core."""
        return await self.get(f"{base_url}/solr/{core_name}/{handler}", params)

    async def aclose(self) -> None:
        """Release any connections held by the transport."""


class HttpxTransport(Transport):
    """
    Transport backed by ``httpx.AsyncClient``.

    Each request is sent once; there is no retry. Any failure is raised as
    :class:`SOLRTransportError`, while task cancellation propagates untouched.
    """

    def __init__(
        self,
        timeout: float = 30,
        verify_ssl: bool = True,
        auth: Optional[Tuple[str, str]] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout, verify=verify_ssl, auth=auth
        )

    @classmethod
    def from_config(cls, config: SOLRConfig) -> "HttpxTransport":
        return cls(
            timeout=config.timeout, verify_ssl=config.verify_ssl, auth=config.auth
        )

    async def get(self, url: str, params: Optional[QueryParameterSet] = None) -> bytes:
        return await self._send("GET", _with_query(url, params))

    async def post(
        self,
        url: str,
        body: bytes,
        content_type: str = "application/json",
        params: Optional[QueryParameterSet] = None,
    ) -> bytes:
        return await self._send(
            "POST",
            _with_query(url, params),
            content=body,
            headers={"Content-Type": content_type},
        )

    async def _send(self, method: str, url: str, **kwargs: Any) -> bytes:
        logger.debug(f"{method} {url}")
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise SOLRTransportError(
                f"SOLR request timed out: {method} {url}"
            ) from e
        except httpx.HTTPError as e:
            raise SOLRTransportError(f"SOLR request failed: {method} {url}: {e}") from e

        if not response.is_success:
            error = parse_error(response.content)
            detail = error.msg if error and error.msg else response.reason_phrase
            raise SOLRTransportError(
                f"HTTP {response.status_code} from {method} {url}: {detail}",
                status_code=response.status_code,
                body=response.content,
                error=error,
            )

        logger.debug(f"{method} {url} -> {response.status_code}")
        return response.content

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def parse_error(body: bytes) -> Optional[ErrorInfo]:
    """Extract SOLR's ``error`` block from an error response body, if any."""
    try:
        data = json.loads(body)
    except ValueError:
        return None
    if not isinstance(data, dict) or not isinstance(data.get("error"), dict):
        return None
    try:
        return ErrorInfo.model_validate(data["error"])
    except ValidationError:
        return None


def _with_query(url: str, params: Optional[QueryParameterSet]) -> str:
    if not params:
        return url
    return f"{url}?{params.to_query_string()}"
