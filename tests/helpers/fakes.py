# tests/helpers/fakes.py
"""In-memory stand-ins for the S3 client and for time.

``InMemoryS3Client`` implements the subset of the aioboto3 S3 client the
object-store backend calls, with listing split into pages of ``page_size``
keys so pagination is exercised with a handful of objects. Failures are
injected per operation (``fail_next``) or per listing page
(``fail_on_page``) as real ``botocore`` exceptions.
"""

from __future__ import annotations

from typing import AsyncIterator

from botocore.exceptions import ClientError


def client_error(code: str, status: int = 400, operation: str = "GetObject") -> ClientError:
    """Build a ClientError the way botocore reports service errors."""
    return ClientError(
        {
            "Error": {"Code": code, "Message": f"{code} (simulated)"},
            "ResponseMetadata": {"HTTPStatusCode": status},
        },
        operation,
    )


class FakeStreamingBody:
    def __init__(self, data: bytes) -> None:
        self._data = data

    async def read(self) -> bytes:
        return self._data


class FakePaginator:
    def __init__(self, client: InMemoryS3Client) -> None:
        self._client = client

    def paginate(self, **kwargs: object) -> AsyncIterator[object]:
        return self._pages(str(kwargs["Bucket"]), str(kwargs.get("Prefix", "")))

    async def _pages(self, bucket: str, prefix: str) -> AsyncIterator[object]:
        client = self._client
        client.record("list_objects_v2")
        client.raise_injected("list_objects_v2")
        if bucket not in client.buckets:
            raise client_error("NoSuchBucket", 404, "ListObjectsV2")

        keys = sorted(key for key in client.buckets[bucket] if key.startswith(prefix))
        size = client.page_size
        chunks = [keys[start : start + size] for start in range(0, len(keys), size)] or [[]]
        for index, chunk in enumerate(chunks):
            page_error = client.page_failures.pop(index, None)
            if page_error is not None:
                raise page_error
            page: dict[str, object] = {"KeyCount": len(chunk)}
            if chunk:
                page["Contents"] = [{"Key": key, "Size": 0} for key in chunk]
            yield page


class InMemoryS3Client:
    """Dict-backed S3 client: ``buckets[bucket][key] = body``."""

    def __init__(self, buckets: tuple[str, ...] = ("mybucket",), page_size: int = 2) -> None:
        self.buckets: dict[str, dict[str, bytes]] = {name: {} for name in buckets}
        self.content_types: dict[tuple[str, str], str] = {}
        self.page_size = page_size
        self.calls: list[str] = []
        self.failures: dict[str, list[Exception]] = {}
        self.page_failures: dict[int, Exception] = {}

    # -- test controls ------------------------------------------------------

    def fail_next(self, operation: str, *errors: Exception) -> None:
        """Raise ``errors`` (in order) on the next calls of ``operation``."""
        self.failures.setdefault(operation, []).extend(errors)

    def fail_on_page(self, index: int, error: Exception) -> None:
        """Raise ``error`` instead of yielding listing page ``index`` (once)."""
        self.page_failures[index] = error

    def record(self, operation: str) -> None:
        self.calls.append(operation)

    def raise_injected(self, operation: str) -> None:
        queue = self.failures.get(operation)
        if queue:
            raise queue.pop(0)

    def count(self, operation: str) -> int:
        return self.calls.count(operation)

    # -- S3 API -------------------------------------------------------------

    def _bucket(self, bucket: str, operation: str) -> dict[str, bytes]:
        if bucket not in self.buckets:
            raise client_error("NoSuchBucket", 404, operation)
        return self.buckets[bucket]

    async def put_object(self, **kwargs: object) -> dict[str, object]:
        self.record("put_object")
        self.raise_injected("put_object")
        bucket, key, body = str(kwargs["Bucket"]), str(kwargs["Key"]), kwargs["Body"]
        assert isinstance(body, bytes)
        self._bucket(bucket, "PutObject")[key] = body
        self.content_types[(bucket, key)] = str(kwargs.get("ContentType", ""))
        return {"ETag": '"fake"'}

    async def get_object(self, **kwargs: object) -> dict[str, object]:
        self.record("get_object")
        self.raise_injected("get_object")
        bucket, key = str(kwargs["Bucket"]), str(kwargs["Key"])
        objects = self._bucket(bucket, "GetObject")
        if key not in objects:
            raise client_error("NoSuchKey", 404, "GetObject")
        return {"Body": FakeStreamingBody(objects[key])}

    async def delete_object(self, **kwargs: object) -> dict[str, object]:
        self.record("delete_object")
        self.raise_injected("delete_object")
        bucket, key = str(kwargs["Bucket"]), str(kwargs["Key"])
        self._bucket(bucket, "DeleteObject").pop(key, None)
        return {}

    async def head_bucket(self, **kwargs: object) -> dict[str, object]:
        self.record("head_bucket")
        self.raise_injected("head_bucket")
        if str(kwargs["Bucket"]) not in self.buckets:
            raise client_error("404", 404, "HeadBucket")
        return {}

    async def create_bucket(self, **kwargs: object) -> dict[str, object]:
        self.record("create_bucket")
        self.raise_injected("create_bucket")
        bucket = str(kwargs["Bucket"])
        if bucket in self.buckets:
            raise client_error("BucketAlreadyOwnedByYou", 409, "CreateBucket")
        self.buckets[bucket] = {}
        return {}

    def get_paginator(self, operation_name: str) -> FakePaginator:
        assert operation_name == "list_objects_v2"
        return FakePaginator(self)


class FakeClock:
    """Monotonic clock that only moves when ``sleep`` is awaited."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
