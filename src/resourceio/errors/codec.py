"""Error ADTs for payload transforms."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class CompressionError:
    """Codec failed to compress, or the payload is not valid for decompression."""

    codec: str
    message: str
    kind: Literal["CompressionError"] = "CompressionError"

    def __str__(self) -> str:
        return f"{self.codec} codec error: {self.message}"


@dataclass(frozen=True)
class DecodeError:
    """Payload bytes are not valid text in the requested encoding."""

    identifier: str
    encoding: str
    message: str
    kind: Literal["DecodeError"] = "DecodeError"

    def __str__(self) -> str:
        return f"{self.identifier} is not valid {self.encoding}: {self.message}"
