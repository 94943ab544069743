# tests/helpers/result_utils.py
"""Result type unwrapping utilities for resourceio tests."""

from __future__ import annotations

from typing import TypeVar

from resourceio.result import Failure, Result, Success

T = TypeVar("T")
E = TypeVar("E")


def expect_success(result: Result[T, E]) -> T:
    """Unwrap Success or fail test with error message.

    Args:
        result: Result to unwrap

    Returns:
        The success value

    Raises:
        AssertionError: If result is Failure with the error message

    Example:
        >>> from tests.helpers import expect_success
        >>>
        >>> children = expect_success(await dispatcher.list("gs://bucket/data/"))
    """
    match result:
        case Success(value):
            return value
        case Failure(error):
            raise AssertionError(f"Unexpected failure: {error}")


def expect_failure(result: Result[T, E]) -> E:
    """Unwrap Failure or fail test.

    Example:
        >>> error = expect_failure(await dispatcher.delete("/tmp/file"))
        >>> assert error.kind == "UnsupportedOperation"
    """
    match result:
        case Failure(error):
            return error
        case Success(value):
            raise AssertionError(f"Expected failure but got success: {value}")
