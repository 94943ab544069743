"""
Exponential-backoff retry around a single fallible async operation.

The executor is an explicit loop: invoke, classify the failure, then either
give up, stop because the budget is spent, or sleep for
``min(initial_interval * multiplier ** attempt, max_interval)`` and try again.
Retries within one call are strictly sequential.

Writes and deletes are retried like reads. That assumes the backend treats a
repeated put/delete of the same key as idempotent; nothing here enforces it.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Awaitable, Callable, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from resourceio.errors import InvalidConfig, ResourceError
from resourceio.result import Failure, Result, Success
from resourceio.validation import validate_model


_logger = logging.getLogger(__name__)

T = TypeVar("T")
E = TypeVar("E")


class RetryClass(str, Enum):
    """Whether retrying the same operation could change its outcome."""

    TRANSIENT = "transient"
    PERMANENT = "permanent"


class RetryPolicy(BaseModel):
    """Immutable backoff parameters for one logical call.

    Attributes
    ----------
    initial_interval
        Delay in seconds before the first retry.
    multiplier
        Growth factor applied per attempt (>= 1).
    max_interval
        Upper bound for any single delay, in seconds.
    max_elapsed_time
        Budget in seconds measured from the first attempt; a retry whose delay
        would overrun it is not scheduled.
    max_retries
        Maximum number of retries after the first attempt. ``None`` leaves the
        elapsed-time budget as the only bound.
    """

    initial_interval: Annotated[float, Field(gt=0)] = 0.5
    multiplier: Annotated[float, Field(ge=1.0)] = 1.5
    max_interval: Annotated[float, Field(gt=0)] = 60.0
    max_elapsed_time: Annotated[float, Field(gt=0)] = 900.0
    max_retries: int | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def _validate(self) -> RetryPolicy:
        if self.max_retries is not None and self.max_retries < 0:
            raise ValueError("`max_retries` must be >= 0.")
        if self.max_interval < self.initial_interval:
            raise ValueError("`max_interval` must be >= `initial_interval`.")
        return self

    @classmethod
    def create(cls, **fields: object) -> Result[RetryPolicy, InvalidConfig]:
        return validate_model(cls, **fields)

    def delay_for(self, attempt: int) -> float:
        """Backoff delay after the failure of ``attempt`` (0-based)."""
        try:
            grown = self.initial_interval * (self.multiplier**attempt)
        except OverflowError:
            return self.max_interval
        return min(grown, self.max_interval)


DEFAULT_RETRY_POLICY = RetryPolicy()


# --------------------------------------------------------------------------- #
# Retry control                                                               #
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class RetryScheduled:
    """Planned retry with bounded, explicit delay."""

    attempt: int
    delay_seconds: float


@dataclass(frozen=True)
class RetryExhausted:
    """Retry budget consumed; the last transient error is final."""

    attempts: int
    reason: str


@dataclass(frozen=True)
class RetryGiveUp:
    """Error is permanent; retrying cannot change the outcome."""

    reason: str


RetryControl = RetryScheduled | RetryExhausted | RetryGiveUp


def _retry_decision(
    *,
    attempt: int,
    retry_class: RetryClass,
    policy: RetryPolicy,
    elapsed: float,
) -> RetryControl:
    """Map a classified failure and the spent budget to a retry control signal."""
    if retry_class is RetryClass.PERMANENT:
        return RetryGiveUp(reason="permanent")

    if policy.max_retries is not None and attempt >= policy.max_retries:
        return RetryExhausted(attempts=attempt + 1, reason="max_retries")

    delay = policy.delay_for(attempt)
    if elapsed + delay > policy.max_elapsed_time:
        return RetryExhausted(attempts=attempt + 1, reason="max_elapsed_time")

    return RetryScheduled(attempt=attempt, delay_seconds=delay)


def classify_error(error: ResourceError) -> RetryClass:
    """Default classifier: only transient access errors are retried."""
    match error.kind:
        case "TransientAccessError":
            return RetryClass.TRANSIENT
        case _:
            return RetryClass.PERMANENT


async def execute(
    operation: Callable[[], Awaitable[Result[T, E]]],
    policy: RetryPolicy | None,
    classify: Callable[[E], RetryClass],
    *,
    description: str = "operation",
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> Result[T, E]:
    """
    Run ``operation`` until it succeeds or the policy says stop.

    Args:
        operation: Zero-argument coroutine factory, invoked once per attempt
        policy: Backoff parameters; ``None`` uses ``DEFAULT_RETRY_POLICY``
        classify: Maps an error to TRANSIENT (retry) or PERMANENT (abort)
        description: Label used in log messages
        sleep: Awaitable delay, injectable for tests
        clock: Monotonic clock in seconds, injectable for tests

    Returns:
        The first Success, the first permanent Failure unchanged, or the last
        transient Failure once retries are exhausted.
    """
    active = policy if policy is not None else DEFAULT_RETRY_POLICY
    started = clock()
    attempt = 0

    while True:
        result = await operation()
        match result:
            case Success():
                return result
            case Failure(error):
                decision = _retry_decision(
                    attempt=attempt,
                    retry_class=classify(error),
                    policy=active,
                    elapsed=clock() - started,
                )
                match decision:
                    case RetryGiveUp():
                        return result
                    case RetryExhausted(attempts, reason):
                        _logger.warning(
                            f"{description} failed after {attempts} attempts ({reason}): {error}"
                        )
                        return result
                    case RetryScheduled(_, delay_seconds):
                        _logger.warning(
                            f"{description} failed (attempt {attempt + 1}), "
                            f"retrying in {delay_seconds:.2f}s: {error}"
                        )
                        await sleep(delay_seconds)
                        attempt += 1


__all__ = [
    "RetryClass",
    "RetryPolicy",
    "DEFAULT_RETRY_POLICY",
    "RetryScheduled",
    "RetryExhausted",
    "RetryGiveUp",
    "RetryControl",
    "classify_error",
    "execute",
]
