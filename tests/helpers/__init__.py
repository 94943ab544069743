# tests/helpers/__init__.py
"""Shared test utilities for the resourceio test suite.

Usage:
    >>> from tests.helpers import expect_success, InMemoryS3Client, FakeClock
    >>>
    >>> s3 = InMemoryS3Client(buckets=("mybucket",), page_size=2)
    >>> s3.fail_next("put_object", client_error("SlowDown", 503))
"""

from __future__ import annotations

from tests.helpers.fakes import (
    FakeClock,
    FakePaginator,
    FakeStreamingBody,
    InMemoryS3Client,
    client_error,
)
from tests.helpers.result_utils import E, T, expect_failure, expect_success

__all__ = [
    # Result unwrapping
    "expect_success",
    "expect_failure",
    "T",
    "E",
    # Fakes
    "InMemoryS3Client",
    "FakePaginator",
    "FakeStreamingBody",
    "FakeClock",
    "client_error",
]
