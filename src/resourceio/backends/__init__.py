"""Storage media behind the dispatcher."""

from resourceio.backends.base import Backend
from resourceio.backends.local import LocalBackend
from resourceio.backends.object_store import ObjectStoreBackend, classify_client_error
from resourceio.backends.web import WebBackend

__all__ = [
    "Backend",
    "LocalBackend",
    "ObjectStoreBackend",
    "WebBackend",
    "classify_client_error",
]
