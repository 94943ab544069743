# src/resourceio/__init__.py
"""
Unified access to resources on local disk, in object-storage buckets and
behind http(s) URLs, addressed by a single identifier string.

- Identifier parsing with a fixed recognizer order (object store, web, local)
- Exponential-backoff retry with transient/permanent classification
- Pluggable payload codecs (gzip, inferred from ``.gz``/``.gzip``)
- Result-typed outcomes: ``Success``, ``Success(NotFound(...))`` or ``Failure``
"""

from __future__ import annotations

from .clients import TransportClients
from .compression import Compression, GzipCodec, IdentityCodec, from_extension
from .config import ObjectStoreConfig, ResourceConfig, WebConfig
from .dispatcher import Dispatcher
from .errors import (
    CompressionError,
    DecodeError,
    InvalidAddress,
    InvalidConfig,
    LocalIOError,
    ParseError,
    PermanentAccessError,
    ResourceError,
    TransientAccessError,
    UnsupportedOperation,
)
from .locator import (
    LocalPath,
    ObjectLocation,
    ResourceAddress,
    ResourceLocator,
    WebLocation,
    render,
)
from .mime import MimeType
from .result import Failure, NotFound, Result, Success
from .retry import DEFAULT_RETRY_POLICY, RetryClass, RetryPolicy, execute


__all__ = [
    # Entry point
    "Dispatcher",
    "TransportClients",
    # Configuration
    "ResourceConfig",
    "ObjectStoreConfig",
    "WebConfig",
    "RetryPolicy",
    "DEFAULT_RETRY_POLICY",
    "RetryClass",
    "execute",
    # Addresses
    "ResourceLocator",
    "ResourceAddress",
    "LocalPath",
    "ObjectLocation",
    "WebLocation",
    "render",
    # Payload
    "Compression",
    "GzipCodec",
    "IdentityCodec",
    "from_extension",
    "MimeType",
    # Outcomes
    "Result",
    "Success",
    "Failure",
    "NotFound",
    # Errors
    "ResourceError",
    "InvalidAddress",
    "ParseError",
    "TransientAccessError",
    "PermanentAccessError",
    "LocalIOError",
    "CompressionError",
    "DecodeError",
    "UnsupportedOperation",
    "InvalidConfig",
]
