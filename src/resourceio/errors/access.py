"""Error ADTs for failures talking to a storage medium."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class TransientAccessError:
    """Retryable network or service failure (timeouts, throttling, 5xx).

    Attributes:
        operation: Backend operation that failed (e.g. "read", "list")
        target: Rendered identifier the operation was addressed to
        message: Message from the underlying client
        code: Service error code or HTTP status, when one was reported
        cause: Exception raised by the underlying client, if any
    """

    operation: str
    target: str
    message: str
    code: str | None = None
    cause: Exception | None = None
    kind: Literal["TransientAccessError"] = "TransientAccessError"

    def __str__(self) -> str:
        code = f" [{self.code}]" if self.code else ""
        return f"{self.operation} {self.target} failed{code}: {self.message}"


@dataclass(frozen=True)
class PermanentAccessError:
    """Non-retryable service failure (permission denied, missing bucket, bad request)."""

    operation: str
    target: str
    message: str
    code: str | None = None
    kind: Literal["PermanentAccessError"] = "PermanentAccessError"

    def __str__(self) -> str:
        code = f" [{self.code}]" if self.code else ""
        return f"{self.operation} {self.target} failed{code}: {self.message}"


@dataclass(frozen=True)
class LocalIOError:
    """Local filesystem failure (permission, disk full, not a directory)."""

    operation: str
    path: str
    message: str
    kind: Literal["LocalIOError"] = "LocalIOError"

    def __str__(self) -> str:
        return f"{self.operation} {self.path} failed: {self.message}"
