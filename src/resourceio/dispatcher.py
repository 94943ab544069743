"""
Public entry point: one identifier string in, one medium-agnostic result out.

Each operation resolves the identifier (object store, then web, then local
path), runs exactly one backend operation through the retry executor and
applies the payload codec. Nothing is swallowed: callers get ``Success``
(possibly carrying ``NotFound``) or ``Failure`` tagged with its error kind.

Usage:
    async with TransportClients(config) as clients:
        dispatcher = Dispatcher(clients)
        await dispatcher.write("gs://bucket/data.json.gz", payload, MimeType.JSON)
        match await dispatcher.read("gs://bucket/data.json.gz"):
            case Success(NotFound()):
                ...
            case Success(data):
                ...
            case Failure(error):
                ...
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, TypeVar

from resourceio.backends import Backend, LocalBackend, ObjectStoreBackend, WebBackend
from resourceio.clients import TransportClients
from resourceio.compression import Compression, compress_opt, decompress_opt, resolve_codec
from resourceio.errors import DecodeError, ResourceError
from resourceio.locator import (
    LocalPath,
    ObjectLocation,
    ResourceAddress,
    ResourceLocator,
    WebLocation,
)
from resourceio.mime import MimeType
from resourceio.result import Failure, NotFound, Result, Success
from resourceio.retry import RetryClass, RetryPolicy, classify_error, execute


_logger = logging.getLogger(__name__)

T = TypeVar("T")


class Dispatcher:
    """Routes identifier-addressed operations to the matching backend.

    Holds no per-call state; one instance may serve any number of concurrent
    calls. Two concurrent reads of one identifier issue two backend requests.
    """

    def __init__(
        self,
        clients: TransportClients,
        *,
        classify: Callable[[ResourceError], RetryClass] = classify_error,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.locator = ResourceLocator(clients.config.object_store.schemes)
        self.object_store = ObjectStoreBackend(clients)
        self.web = WebBackend(clients)
        self.local = LocalBackend()
        self._classify = classify
        self._sleep = sleep
        self._clock = clock

    # ------------------------------------------------------------------ #
    # Routing                                                            #
    # ------------------------------------------------------------------ #

    def backend_for(self, address: ResourceAddress) -> Backend[Any]:
        match address:
            case ObjectLocation():
                return self.object_store
            case WebLocation():
                return self.web
            case LocalPath():
                return self.local
            case _:
                raise AssertionError(f"Unhandled address: {address!r}")

    def _resolve(
        self, identifier: str
    ) -> Result[tuple[Backend[Any], ResourceAddress], ResourceError]:
        match self.locator.parse(identifier):
            case Success(address):
                return Success((self.backend_for(address), address))
            case Failure(error):
                return Failure(error)
            case _:
                raise AssertionError("Unreachable: parse outcome match exhaustive")

    async def _run(
        self,
        description: str,
        operation: Callable[[], Awaitable[Result[T, ResourceError]]],
        policy: RetryPolicy | None,
    ) -> Result[T, ResourceError]:
        return await execute(
            operation,
            policy,
            self._classify,
            description=description,
            sleep=self._sleep,
            clock=self._clock,
        )

    # ------------------------------------------------------------------ #
    # Operations                                                         #
    # ------------------------------------------------------------------ #

    async def list(
        self, identifier: str, policy: RetryPolicy | None = None
    ) -> Result[list[str], ResourceError]:
        """Identifiers of every child under ``identifier``, in listing order."""
        match self._resolve(identifier):
            case Failure(error):
                return Failure(error)
            case Success((backend, address)):
                listed = await self._run(
                    f"list {identifier}", lambda: backend.list(address), policy
                )
                return listed.map(lambda children: [child.render() for child in children])
            case _:
                raise AssertionError("Unreachable: resolve outcome match exhaustive")

    async def read(
        self,
        identifier: str,
        policy: RetryPolicy | None = None,
        decompression: Compression | None = None,
    ) -> Result[bytes | NotFound, ResourceError]:
        """Payload of ``identifier``, decoded with the selected codec.

        ``decompression=None`` infers the codec from the extension;
        ``Compression.NONE`` returns the stored bytes untouched.
        """
        match self._resolve(identifier):
            case Failure(error):
                return Failure(error)
            case Success((backend, address)):
                fetched = await self._run(
                    f"read {identifier}", lambda: backend.read(address), policy
                )
            case _:
                raise AssertionError("Unreachable: resolve outcome match exhaustive")

        match fetched:
            case Failure(error):
                return Failure(error)
            case Success(payload):
                match decompress_opt(payload, resolve_codec(identifier, decompression)):
                    case Success(None):
                        return Success(NotFound(identifier))
                    case Success(data) if data is not None:
                        return Success(data)
                    case Failure(codec_error):
                        return Failure(codec_error)
        raise AssertionError("Unreachable: read outcome match exhaustive")

    async def read_as_text(
        self,
        identifier: str,
        policy: RetryPolicy | None = None,
        decompression: Compression | None = None,
        encoding: str = "utf-8",
    ) -> Result[str | NotFound, ResourceError]:
        match await self.read(identifier, policy, decompression):
            case Success(NotFound() as absent):
                return Success(absent)
            case Success(data) if isinstance(data, bytes):
                try:
                    return Success(data.decode(encoding))
                except UnicodeDecodeError as exc:
                    return Failure(DecodeError(identifier, encoding, str(exc)))
            case Failure(error):
                return Failure(error)
        raise AssertionError("Unreachable: read_as_text outcome match exhaustive")

    async def exists(
        self, identifier: str, policy: RetryPolicy | None = None
    ) -> Result[bool, ResourceError]:
        match self._resolve(identifier):
            case Failure(error):
                return Failure(error)
            case Success((backend, address)):
                return await self._run(
                    f"exists {identifier}", lambda: backend.exists(address), policy
                )
            case _:
                raise AssertionError("Unreachable: resolve outcome match exhaustive")

    async def write(
        self,
        identifier: str,
        data: bytes,
        content_type: MimeType = MimeType.OCTET_STREAM,
        policy: RetryPolicy | None = None,
        compression: Compression | None = None,
    ) -> Result[None, ResourceError]:
        """Overwrite ``identifier`` with ``data``.

        The payload is encoded once, before the first attempt; every retry
        sends the same bytes.
        """
        match self._resolve(identifier):
            case Failure(error):
                return Failure(error)
            case Success((backend, address)):
                pass
            case _:
                raise AssertionError("Unreachable: resolve outcome match exhaustive")

        match compress_opt(data, resolve_codec(identifier, compression)):
            case Failure(codec_error):
                return Failure(codec_error)
            case Success(body):
                return await self._run(
                    f"write {identifier}",
                    lambda: backend.write(address, body, content_type),
                    policy,
                )
        raise AssertionError("Unreachable: compress outcome match exhaustive")

    async def delete(
        self, identifier: str, policy: RetryPolicy | None = None
    ) -> Result[None, ResourceError]:
        match self._resolve(identifier):
            case Failure(error):
                return Failure(error)
            case Success((backend, address)):
                return await self._run(
                    f"delete {identifier}", lambda: backend.delete(address), policy
                )
            case _:
                raise AssertionError("Unreachable: resolve outcome match exhaustive")

    # ------------------------------------------------------------------ #
    # Bucket-level operations                                            #
    # ------------------------------------------------------------------ #

    def _resolve_bucket(
        self, identifier: str
    ) -> Result[tuple[Backend[Any], ResourceAddress], ResourceError]:
        """Like ``_resolve``, with object locations reduced to their bucket root."""
        match self._resolve(identifier):
            case Success((backend, ObjectLocation() as location)):
                return self.locator.parse_bucket(location.render()).map(
                    lambda bucket: (backend, bucket)
                )
            case resolved:
                return resolved

    async def bucket_exists(
        self, identifier: str, policy: RetryPolicy | None = None
    ) -> Result[bool, ResourceError]:
        """Whether the bucket of an object-store identifier exists."""
        match self._resolve_bucket(identifier):
            case Failure(error):
                return Failure(error)
            case Success((backend, address)):
                return await self._run(
                    f"bucket_exists {identifier}", lambda: backend.bucket_exists(address), policy
                )
            case _:
                raise AssertionError("Unreachable: resolve outcome match exhaustive")

    async def create_bucket(
        self, identifier: str, policy: RetryPolicy | None = None
    ) -> Result[None, ResourceError]:
        """Create the bucket of an object-store identifier; an already-owned bucket is success."""
        match self._resolve_bucket(identifier):
            case Failure(error):
                return Failure(error)
            case Success((backend, address)):
                _logger.info(f"Creating bucket for {identifier}")
                return await self._run(
                    f"create_bucket {identifier}", lambda: backend.create_bucket(address), policy
                )
            case _:
                raise AssertionError("Unreachable: resolve outcome match exhaustive")


__all__ = ["Dispatcher"]
