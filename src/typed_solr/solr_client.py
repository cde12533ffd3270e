"""
SOLR client and core handles.

:class:`SOLRClient` is bound to one SOLR instance (scheme, host and port) and
hands out :class:`SOLRCore` objects for its cores. Searching happens on the
core: builders are composed into one parameter set, sent through the
transport and the response is decoded into the caller's document type.

Example:
    >>> async with SOLRClient("http://localhost", 8983) as client:
    ...     core = await client.core("books")
    ...     result = await core.select(
    ...         StandardQueryBuilder().q("title:solr"),
    ...         CommonQueryBuilder().rows(5),
    ...         document_type=Book,
    ...     )
"""

import json
import logging
from typing import Any, Optional, Type, TypeVar, Union
from urllib.parse import urlsplit

from .config import SOLRConfig
from .decoder import Raw, decode_response, decode_select_response
from .exceptions import SOLRConfigurationError, SOLRTransportError
from .models import (
    CoreList,
    CoreStatus,
    ErrorInfo,
    SelectResponse,
    SimpleResponse,
    SystemInfo,
)
from .params import ParamBuilder, QueryParameterSet, compose
from .transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)

D = TypeVar("D")


def _raise_for_error(error: Optional[ErrorInfo], url: str) -> None:
    # SOLR can also report errors in the body of a 200 response.
    if error is not None:
        raise SOLRTransportError(
            f"SOLR error {error.code} from {url}: {error.msg}",
            status_code=error.code,
            error=error,
        )


class SOLRCore:
    """
    Handle on a single SOLR core.

    Holds only the core's identity and a transport, so one instance can be
    shared by concurrent tasks.
    """

    def __init__(self, name: str, base_url: str, transport: Transport):
        self.name = name
        self.base_url = base_url
        self.core_url = f"{base_url}/solr/{name}"
        self._transport = transport

    @property
    def _admin_url(self) -> str:
        return f"{self.base_url}/solr/admin/cores"

    async def status(self) -> CoreStatus:
        """
        Get the status of this core.

        Raises:
            SOLRConfigurationError: If SOLR no longer reports the core
        """
        params = QueryParameterSet([("action", "STATUS"), ("core", self.name)])
        raw = await self._transport.get(self._admin_url, params)
        core_list = decode_response(raw, CoreList)
        _raise_for_error(core_list.error, self._admin_url)

        status = (core_list.status or {}).get(self.name)
        if status is None:
            raise SOLRConfigurationError(f"SOLR core '{self.name}' does not exist")
        return status

    async def reload(self) -> int:
        """Ask SOLR to reload this core and return the response status."""
        params = QueryParameterSet([("action", "RELOAD"), ("core", self.name)])
        raw = await self._transport.get(self._admin_url, params)
        response = decode_response(raw, SimpleResponse)
        _raise_for_error(response.error, self._admin_url)

        logger.info(f"Reloaded SOLR core '{self.name}'")
        return response.header.status

    async def select(
        self, *builders: ParamBuilder, document_type: Type[D] = dict
    ) -> SelectResponse[D]:
        """
        Search this core.

        Args:
            *builders: Builders whose parameters are composed, in order,
                into the request
            document_type: Type each returned document is decoded as

        Returns:
            The decoded response

        Raises:
            SOLRTransportError: If the request fails
            SOLRDecodeError: If the response cannot be decoded as requested
        """
        params = compose(*builders)
        logger.debug(f"Executing SOLR select on '{self.name}' with params: {params}")

        raw = await self._transport.execute(self.base_url, self.name, params)
        result = decode_select_response(raw, document_type)
        _raise_for_error(result.error, f"{self.core_url}/select")
        return result

    async def post(self, documents: Union[Raw, Any]) -> SimpleResponse:
        """
        Post an update request to this core.

        ``documents`` is either a ready JSON body (bytes or str) or anything
        ``json.dumps`` accepts, such as a list of document dicts. Changes are
        not visible until :meth:`commit` is called.
        """
        if isinstance(documents, str):
            body = documents.encode("utf-8")
        elif isinstance(documents, (bytes, bytearray)):
            body = bytes(documents)
        else:
            body = json.dumps(documents, default=str).encode("utf-8")

        url = f"{self.core_url}/update"
        raw = await self._transport.post(url, body, "application/json")
        response = decode_response(raw, SimpleResponse)
        _raise_for_error(response.error, url)
        return response

    async def commit(self, optimize: bool = False) -> None:
        """Commit pending updates, optionally optimizing the index."""
        await self.post({"optimize": {}} if optimize else {"commit": {}})
        logger.info(f"Committed SOLR core '{self.name}' (optimize={optimize})")

    async def rollback(self) -> None:
        """Discard updates made since the last commit."""
        await self.post({"rollback": {}})

    async def truncate(self) -> None:
        """Delete every document in this core. Takes effect on commit."""
        await self.post({"delete": {"query": "*:*"}})

    def __repr__(self) -> str:
        return f"SOLRCore(name={self.name!r}, core_url={self.core_url!r})"


class SOLRClient:
    """
    Client for one SOLR instance.

    Only the scheme and host of ``url`` are used; any port or path in it is
    replaced, so ``SOLRClient("http://localhost:8983/solr", 8983).url`` is
    ``http://localhost:8983``.
    """

    def __init__(
        self, url: str, port: int = 8983, transport: Optional[Transport] = None
    ):
        """
        Initialize the SOLR client.

        Args:
            url: URL of the SOLR instance
            port: Port SOLR listens on
            transport: Transport to send requests with. Defaults to an
                :class:`HttpxTransport` owned, and closed, by this client.

        Raises:
            SOLRConfigurationError: If ``url`` has no scheme or host
        """
        try:
            parts = urlsplit(url)
        except ValueError as e:
            raise SOLRConfigurationError(f"Invalid SOLR URL '{url}': {e}") from e

        if not parts.scheme or not parts.hostname:
            raise SOLRConfigurationError(f"Invalid SOLR URL '{url}': no host")

        host = parts.hostname
        if ":" in host:
            host = f"[{host}]"

        self.url = f"{parts.scheme}://{host}:{port}"
        self._owns_transport = transport is None
        self._transport = transport or HttpxTransport()

    @classmethod
    def from_config(
        cls, config: SOLRConfig, transport: Optional[Transport] = None
    ) -> "SOLRClient":
        """Create a client, and its transport unless one is given, from configuration."""
        client = cls(
            config.base_url,
            config.port,
            transport=transport or HttpxTransport.from_config(config),
        )
        client._owns_transport = transport is None
        return client

    async def status(self) -> SystemInfo:
        """Get system information about the SOLR instance."""
        url = f"{self.url}/solr/admin/info/system"
        raw = await self._transport.get(url)
        info = decode_response(raw, SystemInfo)
        _raise_for_error(info.error, url)
        return info

    async def cores(self) -> CoreList:
        """Get the status of every core in the SOLR instance."""
        url = f"{self.url}/solr/admin/cores"
        raw = await self._transport.get(url)
        core_list = decode_response(raw, CoreList)
        _raise_for_error(core_list.error, url)
        return core_list

    async def core(self, name: str) -> SOLRCore:
        """
        Get a handle on the core ``name``.

        Raises:
            SOLRConfigurationError: If the instance has no such core
        """
        core_list = await self.cores()
        if name not in core_list.names():
            raise SOLRConfigurationError(f"SOLR core '{name}' does not exist")

        logger.debug(f"Using SOLR core '{name}' at {self.url}")
        return SOLRCore(name, self.url, self._transport)

    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            await self._transport.aclose()
            logger.debug(f"Closed SOLR client for {self.url}")

    async def __aenter__(self) -> "SOLRClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"SOLRClient(url={self.url!r})"
