"""Local filesystem backend; blocking syscalls run in worker threads."""

from __future__ import annotations

import asyncio
import logging
import os

from resourceio.backends.base import Backend
from resourceio.errors import LocalIOError, ResourceError
from resourceio.locator import LocalPath, ResourceAddress
from resourceio.mime import MimeType
from resourceio.result import Failure, Result, Success


_logger = logging.getLogger(__name__)


def _read_if_exists(path: str) -> bytes | None:
    if not os.path.exists(path):
        return None
    try:
        with open(path, "rb") as handle:
            return handle.read()
    except FileNotFoundError:
        # removed after the existence check
        return None


def _write(path: str, data: bytes) -> None:
    with open(path, "wb") as handle:
        handle.write(data)


def _list_directory(path: str) -> list[str]:
    with os.scandir(path) as entries:
        return [entry.path for entry in sorted(entries, key=lambda entry: entry.name)]


class LocalBackend(Backend[LocalPath]):
    """Local files. Deletion is deliberately unsupported."""

    name = "local"

    async def exists(self, address: LocalPath) -> Result[bool, ResourceError]:
        return Success(await asyncio.to_thread(os.path.exists, address.path))

    async def read(self, address: LocalPath) -> Result[bytes | None, ResourceError]:
        try:
            return Success(await asyncio.to_thread(_read_if_exists, address.path))
        except OSError as exc:
            return Failure(LocalIOError("read", address.path, str(exc)))

    async def write(
        self, address: LocalPath, data: bytes, content_type: MimeType
    ) -> Result[None, ResourceError]:
        _logger.debug(f"writing {len(data)} bytes to {address.path}")
        try:
            await asyncio.to_thread(_write, address.path, data)
            return Success(None)
        except OSError as exc:
            return Failure(LocalIOError("write", address.path, str(exc)))

    async def list(self, address: LocalPath) -> Result[list[ResourceAddress], ResourceError]:
        try:
            children = await asyncio.to_thread(_list_directory, address.path)
        except OSError as exc:
            return Failure(LocalIOError("list", address.path, str(exc)))
        return Success([LocalPath(child) for child in children])


__all__ = ["LocalBackend"]
