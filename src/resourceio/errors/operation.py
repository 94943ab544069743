"""Error ADTs for capability and configuration mismatches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import ValidationError


@dataclass(frozen=True)
class UnsupportedOperation:
    """Resolved backend does not implement the requested capability."""

    operation: str
    backend: str
    identifier: str
    kind: Literal["UnsupportedOperation"] = "UnsupportedOperation"

    def __str__(self) -> str:
        return f"{self.backend} backend does not support {self.operation} ({self.identifier})"


@dataclass(frozen=True)
class InvalidConfig:
    """Pydantic validation failed when constructing a configuration model."""

    error: ValidationError
    kind: Literal["InvalidConfig"] = "InvalidConfig"

    def __str__(self) -> str:
        return f"invalid configuration: {self.error}"
