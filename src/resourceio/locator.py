"""
Identifier parsing and rendering.

An identifier is one of:

- ``scheme://bucket[/name][/]`` for an object store (scheme from a
  configurable set, ``gs`` and ``s3`` by default),
- an absolute ``http(s)://`` URL,
- any other non-empty string, taken verbatim as a local filesystem path.

Parsing is done by an ordered list of recognizers. Each recognizer returns
``None`` when the identifier is not of its kind, ``Failure`` when it is of its
kind but malformed, and ``Success`` otherwise. The first recognizer that does
not return ``None`` decides; the order (object store, web, local) is part of
the public contract because a string can resemble more than one kind.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal, Sequence
from urllib.parse import urlsplit

from resourceio.errors import InvalidAddress
from resourceio.result import Failure, Result, Success


DEFAULT_OBJECT_STORE_SCHEMES: tuple[str, ...] = ("gs", "s3")
WEB_SCHEMES: tuple[str, ...] = ("http", "https")
SEPARATOR = "/"


@dataclass(frozen=True)
class LocalPath:
    """Filesystem path, used verbatim."""

    path: str
    kind: Literal["LocalPath"] = "LocalPath"

    def render(self) -> str:
        return self.path


@dataclass(frozen=True)
class ObjectLocation:
    """Object-store address.

    Attributes:
        scheme: Identifier scheme without ``://`` (e.g. "gs")
        bucket: Bucket name, never empty
        name: Object name with the trailing separator stripped; empty for the bucket root
        is_prefix: True iff the identifier ended with a separator
    """

    scheme: str
    bucket: str
    name: str
    is_prefix: bool = False
    kind: Literal["ObjectLocation"] = "ObjectLocation"

    @property
    def is_bucket_root(self) -> bool:
        return self.name == ""

    @property
    def is_exact_object(self) -> bool:
        """Whether exact-object operations (exists/read/write/delete) are legal."""
        return not self.is_prefix and not self.is_bucket_root

    @property
    def list_prefix(self) -> str:
        """Key prefix used to list this location."""
        return f"{self.name}{SEPARATOR}" if self.is_prefix and self.name else self.name

    def child(self, key: str) -> ObjectLocation:
        """Location of a key listed under this location's bucket."""
        if key.endswith(SEPARATOR):
            return ObjectLocation(self.scheme, self.bucket, key[: -len(SEPARATOR)], True)
        return ObjectLocation(self.scheme, self.bucket, key, False)

    def render(self) -> str:
        name = f"{SEPARATOR}{self.name}" if self.name else ""
        trailing = SEPARATOR if self.is_prefix else ""
        return f"{self.scheme}://{self.bucket}{name}{trailing}"


@dataclass(frozen=True)
class WebLocation:
    """Absolute http(s) URL."""

    url: str
    kind: Literal["WebLocation"] = "WebLocation"

    def render(self) -> str:
        return self.url


ResourceAddress = LocalPath | ObjectLocation | WebLocation

AddressKind = Literal["ObjectLocation", "WebLocation", "LocalPath"]

Recognizer = Callable[[str], Result[ResourceAddress, InvalidAddress] | None]


# --------------------------------------------------------------------------- #
# Recognizers                                                                 #
# --------------------------------------------------------------------------- #


def parse_object_location(
    identifier: str, schemes: Sequence[str] = DEFAULT_OBJECT_STORE_SCHEMES
) -> Result[ObjectLocation, InvalidAddress] | None:
    """Parse ``scheme://bucket[/name][/]``.

    Returns ``None`` when the identifier does not start with one of
    ``schemes`` (case-sensitive). Names are used verbatim, no percent-decoding.
    """
    scheme = next((s for s in schemes if identifier.startswith(f"{s}://")), None)
    if scheme is None:
        return None

    tail = identifier[len(scheme) + 3 :]
    bucket, separator, name = tail.partition(SEPARATOR)
    if not bucket:
        return Failure(InvalidAddress(identifier, "bucket name is empty"))
    if not separator:
        return Success(ObjectLocation(scheme, bucket, "", False))
    if name.startswith(SEPARATOR):
        return Failure(InvalidAddress(identifier, "object name starts with a separator"))
    if name.endswith(SEPARATOR):
        return Success(ObjectLocation(scheme, bucket, name[: -len(SEPARATOR)], True))
    if not name:
        # `scheme://bucket/` addresses the bucket root as a directory
        return Success(ObjectLocation(scheme, bucket, "", True))
    return Success(ObjectLocation(scheme, bucket, name, False))


def parse_web_location(identifier: str) -> Result[WebLocation, InvalidAddress] | None:
    """Parse an absolute http(s) URL; ``None`` for anything else."""
    scheme, _, _ = identifier.partition("://")
    if scheme.lower() not in WEB_SCHEMES or "://" not in identifier:
        return None
    try:
        parts = urlsplit(identifier)
    except ValueError as exc:
        return Failure(InvalidAddress(identifier, f"malformed url: {exc}"))
    if not parts.netloc:
        return Failure(InvalidAddress(identifier, "url has no host"))
    return Success(WebLocation(identifier))


def parse_local_path(identifier: str) -> Result[LocalPath, InvalidAddress] | None:
    """Accept any non-empty string as a path; validation happens on access."""
    if not identifier:
        return Failure(InvalidAddress(identifier, "identifier is empty"))
    return Success(LocalPath(identifier))


class ResourceLocator:
    """Ordered set of recognizers: object store, then web, then local path."""

    def __init__(self, object_store_schemes: Sequence[str] = DEFAULT_OBJECT_STORE_SCHEMES) -> None:
        self.object_store_schemes: tuple[str, ...] = tuple(object_store_schemes)
        self.recognizers: tuple[Recognizer, ...] = (
            self._recognize_object_location,
            parse_web_location,
            parse_local_path,
        )

    def _recognize_object_location(
        self, identifier: str
    ) -> Result[ResourceAddress, InvalidAddress] | None:
        return parse_object_location(identifier, self.object_store_schemes)

    def parse(self, identifier: str) -> Result[ResourceAddress, InvalidAddress]:
        """Resolve an identifier with the first recognizer that claims it."""
        for recognize in self.recognizers:
            match recognize(identifier):
                case None:
                    continue
                case outcome:
                    return outcome
        return Failure(InvalidAddress(identifier, "no address kind matches"))

    def parse_bucket(self, identifier: str) -> Result[ObjectLocation, InvalidAddress]:
        """Parse an object-store identifier and reduce it to its bucket root."""
        match parse_object_location(identifier, self.object_store_schemes):
            case None:
                return Failure(InvalidAddress(identifier, "not an object-store identifier"))
            case Success(location):
                return Success(ObjectLocation(location.scheme, location.bucket, ""))
            case Failure(error):
                return Failure(error)
            case _:
                raise AssertionError("Unreachable: recognizer outcome is exhaustive")


def render(address: ResourceAddress) -> str:
    """Canonical identifier of an address; inverse of ``ResourceLocator.parse``."""
    return address.render()


__all__ = [
    "DEFAULT_OBJECT_STORE_SCHEMES",
    "LocalPath",
    "ObjectLocation",
    "WebLocation",
    "ResourceAddress",
    "AddressKind",
    "Recognizer",
    "ResourceLocator",
    "parse_object_location",
    "parse_web_location",
    "parse_local_path",
    "render",
]
