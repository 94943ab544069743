"""
Protocol definitions for the async S3 client surface.

The object-store backend, the transport holder and the aioboto3 stub
(stubs/aioboto3/__init__.pyi) all type the client through these Protocols,
which is also what lets tests substitute an in-memory client.
"""

from __future__ import annotations

from types import TracebackType
from typing import AsyncIterator, Protocol

from botocore.config import Config


class StreamingBodyProtocol(Protocol):
    """Protocol for S3 StreamingBody."""

    async def read(self) -> bytes: ...


class S3ResponseProtocol(Protocol):
    """Protocol for S3 get_object response."""

    def __getitem__(self, key: str) -> object: ...


class PaginatorProtocol(Protocol):
    """Protocol for S3 paginator returned by get_paginator()."""

    def paginate(self, **kwargs: object) -> AsyncIterator[object]: ...


class S3ClientProtocol(Protocol):
    """Operations the object-store backend calls on an aioboto3 S3 client."""

    async def put_object(self, **kwargs: object) -> object: ...
    async def get_object(self, **kwargs: object) -> S3ResponseProtocol: ...
    async def delete_object(self, **kwargs: object) -> object: ...
    async def head_bucket(self, **kwargs: object) -> object: ...
    async def create_bucket(self, **kwargs: object) -> object: ...
    def get_paginator(self, operation_name: str) -> PaginatorProtocol: ...


class AsyncContextManagerProtocol(Protocol):
    """Protocol for async context manager returned by session.client()."""

    async def __aenter__(self) -> S3ClientProtocol: ...
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool | None: ...


class SessionProtocol(Protocol):
    """Protocol for aioboto3.Session."""

    def client(
        self,
        service_name: str,
        endpoint_url: str | None = ...,
        config: Config | None = ...,
        **kwargs: object,
    ) -> AsyncContextManagerProtocol: ...


__all__ = [
    "StreamingBodyProtocol",
    "S3ResponseProtocol",
    "PaginatorProtocol",
    "S3ClientProtocol",
    "AsyncContextManagerProtocol",
    "SessionProtocol",
]
