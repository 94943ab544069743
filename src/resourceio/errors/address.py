"""Error ADTs for identifier parsing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class InvalidAddress:
    """Identifier matched an address grammar but violates its invariants.

    Also used when an address kind is valid but not usable for the requested
    operation (prefix or bucket-root address passed to an exact-object call).
    """

    identifier: str
    reason: str
    kind: Literal["InvalidAddress"] = "InvalidAddress"

    def __str__(self) -> str:
        return f"invalid address {self.identifier!r}: {self.reason}"


ParseError = InvalidAddress
