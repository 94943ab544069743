"""
Process-wide transport clients.

``TransportClients`` owns the aioboto3 S3 client and the httpx ``AsyncClient``.
It is constructed once, entered once, and handed to every backend; backends
only read from it, so any number of concurrent calls can share it.

Usage:
    async with TransportClients(config) as clients:
        dispatcher = Dispatcher(clients)
        await dispatcher.read("gs://bucket/key")
"""

from __future__ import annotations

import logging
from types import TracebackType

import aioboto3  # Type stub: stubs/aioboto3/__init__.pyi
import httpx

from resourceio.config import ResourceConfig
from resourceio.protocols import AsyncContextManagerProtocol, S3ClientProtocol


_logger = logging.getLogger(__name__)


class TransportClients:
    """Holder for the shared S3 and HTTP clients.

    Clients passed in explicitly are used as-is and are not closed on exit;
    clients created here are closed on exit.
    """

    def __init__(
        self,
        config: ResourceConfig | None = None,
        *,
        s3_client: S3ClientProtocol | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config if config is not None else ResourceConfig()
        self._s3_client: S3ClientProtocol | None = s3_client
        self._http_client: httpx.AsyncClient | None = http_client
        self._owns_http = http_client is None
        self._client_context: AsyncContextManagerProtocol | None = None

    @property
    def s3(self) -> S3ClientProtocol:
        if self._s3_client is None:
            raise RuntimeError("S3 client not initialized. Use 'async with' context manager.")
        return self._s3_client

    @property
    def http(self) -> httpx.AsyncClient:
        if self._http_client is None:
            raise RuntimeError("HTTP client not initialized. Use 'async with' context manager.")
        return self._http_client

    async def __aenter__(self) -> TransportClients:
        store = self.config.object_store
        if self._s3_client is None:
            session = aioboto3.Session(
                aws_access_key_id=store.aws_access_key_id,
                aws_secret_access_key=store.aws_secret_access_key,
                region_name=store.region_name,
            )
            client_context = session.client(
                "s3",
                endpoint_url=store.endpoint_url,
                config=store.boto_config(),
            )
            self._client_context = client_context
            self._s3_client = await client_context.__aenter__()
            _logger.debug(f"S3 client opened (endpoint={store.endpoint_url or 'default'})")

        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.config.web.timeout_seconds,
                follow_redirects=self.config.web.follow_redirects,
            )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool | None:
        try:
            if self._owns_http and self._http_client is not None:
                await self._http_client.aclose()
        finally:
            if self._owns_http:
                self._http_client = None
            if self._client_context is not None:
                context, self._client_context = self._client_context, None
                self._s3_client = None
                await context.__aexit__(exc_type, exc_val, exc_tb)
        return None


__all__ = ["TransportClients"]
