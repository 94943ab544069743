"""
Object-store backend over an async S3-compatible client.

All botocore exceptions are converted into error ADTs at this boundary:
throttling, service-side and connection failures become
``TransientAccessError`` (retried by the dispatcher); every other client
error becomes ``PermanentAccessError``. Missing keys are not errors: reads
return ``None`` and deletes succeed.
"""

from __future__ import annotations

import logging

from botocore.exceptions import BotoCoreError, ClientError, HTTPClientError
from botocore.exceptions import ConnectionError as BotoConnectionError

from resourceio.backends.base import Backend
from resourceio.clients import TransportClients
from resourceio.errors import (
    InvalidAddress,
    PermanentAccessError,
    ResourceError,
    TransientAccessError,
)
from resourceio.locator import ObjectLocation, ResourceAddress
from resourceio.mime import MimeType
from resourceio.protocols import S3ClientProtocol
from resourceio.result import Failure, Result, Success


_logger = logging.getLogger(__name__)

_MISSING_KEY_CODES = frozenset({"NoSuchKey", "404", "NotFound"})
_MISSING_BUCKET_CODES = frozenset({"NoSuchBucket", "404", "NotFound"})


def classify_client_error(
    error: ClientError, operation: str, target: str
) -> TransientAccessError | PermanentAccessError:
    """Classify a botocore ClientError as transient or permanent.

    Args:
        error: boto3 ClientError exception
        operation: Backend operation that failed (e.g. "read", "list")
        target: Rendered identifier of the location

    Returns:
        TransientAccessError for throttling, timeouts and 5xx/429 statuses,
        PermanentAccessError otherwise
    """
    details = error.response.get("Error", {})
    code = str(details.get("Code", "Unknown"))
    message = str(details.get("Message", error))
    status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")

    match code:
        case (
            "SlowDown"
            | "RequestLimitExceeded"
            | "Throttling"
            | "ThrottlingException"
            | "ServiceUnavailable"
            | "InternalError"
            | "RequestTimeout"
        ):
            return TransientAccessError(operation, target, message, code=code, cause=error)
        case _ if isinstance(status, int) and (status >= 500 or status == 429):
            return TransientAccessError(operation, target, message, code=code, cause=error)
        case _:
            return PermanentAccessError(operation, target, message, code=code)


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


def _exception_to_error(
    exc: ClientError | BotoCoreError, operation: str, target: str
) -> TransientAccessError | PermanentAccessError:
    match exc:
        case ClientError():
            return classify_client_error(exc, operation, target)
        case BotoConnectionError() | HTTPClientError():
            return TransientAccessError(operation, target, str(exc), cause=exc)
        case _:
            return PermanentAccessError(operation, target, str(exc))


def _require_exact_object(operation: str, location: ObjectLocation) -> InvalidAddress | None:
    if location.is_prefix:
        return InvalidAddress(
            location.render(), f"{operation} requires an object path not ending with `/`"
        )
    if location.is_bucket_root:
        return InvalidAddress(
            location.render(), f"{operation} requires an object name, got a bucket root"
        )
    return None


class ObjectStoreBackend(Backend[ObjectLocation]):
    """Exact-object and prefix operations on S3-compatible buckets."""

    name = "object_store"

    def __init__(self, clients: TransportClients) -> None:
        self._clients = clients

    @property
    def _client(self) -> S3ClientProtocol:
        return self._clients.s3

    async def _list_keys(self, bucket: str, prefix: str) -> list[str]:
        """Every key under ``prefix``, aggregated across all pages in listing order."""
        keys: list[str] = []
        paginator = self._client.get_paginator("list_objects_v2")
        async for page in paginator.paginate(Bucket=bucket, Prefix=prefix):
            if isinstance(page, dict) and isinstance(page.get("Contents"), list):
                for obj in page["Contents"]:
                    if isinstance(obj, dict) and isinstance(obj.get("Key"), str):
                        keys.append(obj["Key"])
        return keys

    async def _find_object(self, bucket: str, name: str) -> bool:
        """Locate an exact key through a prefix listing."""
        paginator = self._client.get_paginator("list_objects_v2")
        async for page in paginator.paginate(Bucket=bucket, Prefix=name):
            if isinstance(page, dict) and isinstance(page.get("Contents"), list):
                contents = page["Contents"]
                if any(isinstance(obj, dict) and obj.get("Key") == name for obj in contents):
                    return True
        return False

    async def exists(self, address: ObjectLocation) -> Result[bool, ResourceError]:
        invalid = _require_exact_object("exists", address)
        if invalid is not None:
            return Failure(invalid)

        _logger.debug(f"list_objects_v2 in exists() for {address.render()}")
        try:
            return Success(await self._find_object(address.bucket, address.name))
        except (ClientError, BotoCoreError) as exc:
            return Failure(_exception_to_error(exc, "exists", address.render()))

    async def read(self, address: ObjectLocation) -> Result[bytes | None, ResourceError]:
        invalid = _require_exact_object("read", address)
        if invalid is not None:
            return Failure(invalid)

        target = address.render()
        try:
            if not await self._find_object(address.bucket, address.name):
                return Success(None)
            _logger.debug(f"get_object in read() for {target}")
            response = await self._client.get_object(Bucket=address.bucket, Key=address.name)
            body = response["Body"]
            if not hasattr(body, "read"):
                return Failure(
                    PermanentAccessError(
                        "read", target, f"Expected streaming body, got {type(body)}"
                    )
                )
            data = await body.read()
            assert isinstance(data, bytes), f"Expected bytes from S3, got {type(data)}"
            return Success(data)
        except ClientError as exc:
            # deleted between the existence check and the download
            if _error_code(exc) in _MISSING_KEY_CODES:
                return Success(None)
            return Failure(classify_client_error(exc, "read", target))
        except BotoCoreError as exc:
            return Failure(_exception_to_error(exc, "read", target))

    async def write(
        self, address: ObjectLocation, data: bytes, content_type: MimeType
    ) -> Result[None, ResourceError]:
        invalid = _require_exact_object("write", address)
        if invalid is not None:
            return Failure(invalid)

        _logger.debug(f"put_object in write() for {address.render()} ({len(data)} bytes)")
        try:
            await self._client.put_object(
                Bucket=address.bucket,
                Key=address.name,
                Body=data,
                ContentType=content_type.value,
            )
            return Success(None)
        except (ClientError, BotoCoreError) as exc:
            return Failure(_exception_to_error(exc, "write", address.render()))

    async def list(self, address: ObjectLocation) -> Result[list[ResourceAddress], ResourceError]:
        """All children under the location's prefix.

        Pages are aggregated in memory; a failure on any page discards what was
        collected so far.
        """
        _logger.debug(f"list_objects_v2 in list() for {address.render()}")
        try:
            keys = await self._list_keys(address.bucket, address.list_prefix)
        except (ClientError, BotoCoreError) as exc:
            return Failure(_exception_to_error(exc, "list", address.render()))
        return Success([address.child(key) for key in keys])

    async def delete(self, address: ObjectLocation) -> Result[None, ResourceError]:
        invalid = _require_exact_object("delete", address)
        if invalid is not None:
            return Failure(invalid)

        _logger.debug(f"delete_object in delete() for {address.render()}")
        try:
            await self._client.delete_object(Bucket=address.bucket, Key=address.name)
            return Success(None)
        except ClientError as exc:
            # NoSuchKey is success (idempotent delete)
            if _error_code(exc) in _MISSING_KEY_CODES:
                return Success(None)
            return Failure(classify_client_error(exc, "delete", address.render()))
        except BotoCoreError as exc:
            return Failure(_exception_to_error(exc, "delete", address.render()))

    async def bucket_exists(self, address: ObjectLocation) -> Result[bool, ResourceError]:
        _logger.debug(f"head_bucket in bucket_exists() for {address.bucket}")
        try:
            await self._client.head_bucket(Bucket=address.bucket)
            return Success(True)
        except ClientError as exc:
            if _error_code(exc) in _MISSING_BUCKET_CODES:
                return Success(False)
            return Failure(classify_client_error(exc, "bucket_exists", address.render()))
        except BotoCoreError as exc:
            return Failure(_exception_to_error(exc, "bucket_exists", address.render()))

    async def create_bucket(self, address: ObjectLocation) -> Result[None, ResourceError]:
        region = self._clients.config.object_store.region_name
        _logger.debug(f"create_bucket in create_bucket() for {address.bucket} ({region})")
        try:
            if region == "us-east-1":
                await self._client.create_bucket(Bucket=address.bucket)
            else:
                await self._client.create_bucket(
                    Bucket=address.bucket,
                    CreateBucketConfiguration={"LocationConstraint": region},
                )
            return Success(None)
        except ClientError as exc:
            if _error_code(exc) == "BucketAlreadyOwnedByYou":
                return Success(None)
            return Failure(classify_client_error(exc, "create_bucket", address.render()))
        except BotoCoreError as exc:
            return Failure(_exception_to_error(exc, "create_bucket", address.render()))


__all__ = ["ObjectStoreBackend", "classify_client_error"]
