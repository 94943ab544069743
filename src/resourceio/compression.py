"""
Payload codecs.

A codec is applied to the byte payload independent of the medium: decode
after a read, encode before a write. Selection order is explicit choice, then
the identifier's file extension, then identity.
"""

from __future__ import annotations

import gzip
import zlib
from enum import Enum
from pathlib import PurePosixPath
from typing import Protocol

from resourceio.errors import CompressionError
from resourceio.result import Failure, Result, Success


class Compression(str, Enum):
    """Compression variants selectable by callers."""

    GZIP = "gzip"
    NONE = "none"


EXTENSION_TABLE: dict[str, Compression] = {
    "gz": Compression.GZIP,
    "gzip": Compression.GZIP,
}


class Codec(Protocol):
    """Compress/decompress pair."""

    name: str

    def compress(self, data: bytes) -> Result[bytes, CompressionError]: ...

    def decompress(self, data: bytes) -> Result[bytes, CompressionError]: ...


class IdentityCodec:
    """Pass-through codec."""

    name = "identity"

    def compress(self, data: bytes) -> Result[bytes, CompressionError]:
        return Success(data)

    def decompress(self, data: bytes) -> Result[bytes, CompressionError]:
        return Success(data)


class GzipCodec:
    """gzip container format (RFC 1952)."""

    name = "gzip"

    def __init__(self, compresslevel: int = 9) -> None:
        self.compresslevel = compresslevel

    def compress(self, data: bytes) -> Result[bytes, CompressionError]:
        try:
            return Success(gzip.compress(data, compresslevel=self.compresslevel))
        except (OSError, zlib.error) as exc:
            return Failure(CompressionError(codec=self.name, message=str(exc)))

    def decompress(self, data: bytes) -> Result[bytes, CompressionError]:
        # BadGzipFile and truncated streams (EOFError) both mean malformed input
        try:
            return Success(gzip.decompress(data))
        except (OSError, EOFError, zlib.error) as exc:
            message = str(exc) or type(exc).__name__
            return Failure(CompressionError(codec=self.name, message=message))


def codec_for(compression: Compression) -> Codec:
    match compression:
        case Compression.GZIP:
            return GzipCodec()
        case Compression.NONE:
            return IdentityCodec()


def from_extension(identifier: str) -> Compression | None:
    """Infer a compression from the identifier's last extension (``.gz``, ``.gzip``)."""
    suffix = PurePosixPath(identifier).suffix
    return EXTENSION_TABLE.get(suffix[1:]) if suffix else None


def resolve_codec(identifier: str, compression: Compression | None) -> Codec:
    """Explicit choice wins, then the extension table, then identity."""
    chosen = compression if compression is not None else from_extension(identifier)
    return codec_for(chosen) if chosen is not None else IdentityCodec()


def compress_opt(data: bytes, codec: Codec | None) -> Result[bytes, CompressionError]:
    return Success(data) if codec is None else codec.compress(data)


def decompress_opt(
    data: bytes | None, codec: Codec | None
) -> Result[bytes | None, CompressionError]:
    """Decompress a payload only when one is present."""
    match (data, codec):
        case (None, _):
            return Success(None)
        case (payload, None):
            return Success(payload)
        case (payload, chosen) if payload is not None and chosen is not None:
            result: Result[bytes | None, CompressionError] = chosen.decompress(payload)
            return result
        case _:
            raise AssertionError("Unreachable: payload/codec match exhaustive")


__all__ = [
    "Compression",
    "EXTENSION_TABLE",
    "Codec",
    "IdentityCodec",
    "GzipCodec",
    "codec_for",
    "from_extension",
    "resolve_codec",
    "compress_opt",
    "decompress_opt",
]
