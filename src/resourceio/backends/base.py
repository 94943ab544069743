"""
Backend interface.

Every backend exposes the full capability set. Capabilities a medium does not
support return ``UnsupportedOperation`` instead of being absent, so the
dispatcher calls every backend the same way. Each method performs a single
attempt; retries are layered on top by the dispatcher.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from resourceio.errors import ResourceError, UnsupportedOperation
from resourceio.locator import ResourceAddress
from resourceio.mime import MimeType
from resourceio.result import Failure, Result


A = TypeVar("A", bound=ResourceAddress)


class Backend(Generic[A]):
    """Single-attempt operations against one storage medium."""

    name: str = "abstract"

    def _unsupported(self, operation: str, address: A) -> Failure[ResourceError]:
        return Failure(UnsupportedOperation(operation, self.name, address.render()))

    async def exists(self, address: A) -> Result[bool, ResourceError]:
        return self._unsupported("exists", address)

    async def read(self, address: A) -> Result[bytes | None, ResourceError]:
        """Payload bytes, or ``None`` when the resource is confirmed absent."""
        return self._unsupported("read", address)

    async def write(
        self, address: A, data: bytes, content_type: MimeType
    ) -> Result[None, ResourceError]:
        return self._unsupported("write", address)

    async def list(self, address: A) -> Result[list[ResourceAddress], ResourceError]:
        return self._unsupported("list", address)

    async def delete(self, address: A) -> Result[None, ResourceError]:
        return self._unsupported("delete", address)

    async def bucket_exists(self, address: A) -> Result[bool, ResourceError]:
        return self._unsupported("bucket_exists", address)

    async def create_bucket(self, address: A) -> Result[None, ResourceError]:
        return self._unsupported("create_bucket", address)


__all__ = ["Backend"]
