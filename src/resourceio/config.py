"""
Transport configuration.

Values left unset fall back to the standard AWS environment variables, the
same ones the AWS SDKs read, so an S3-compatible endpoint (MinIO, GCS
interoperability) is selected with ``AWS_ENDPOINT_URL``.
"""

from __future__ import annotations

import os
from typing import Annotated

from botocore.config import Config
from pydantic import BaseModel, ConfigDict, Field, field_validator

from resourceio.errors import InvalidConfig
from resourceio.locator import DEFAULT_OBJECT_STORE_SCHEMES
from resourceio.result import Result
from resourceio.validation import validate_model


class ObjectStoreConfig(BaseModel):
    """S3-compatible object store connection settings.

    Attributes
    ----------
    endpoint_url
        Service endpoint; ``None`` uses the SDK default (AWS S3).
    region_name
        Region passed to the session.
    aws_access_key_id, aws_secret_access_key
        Static credentials; ``None`` defers to the SDK credential chain.
    schemes
        Identifier schemes routed to the object store, matched case-sensitively.
    max_pool_connections, connect_timeout, read_timeout
        Connection pool size and socket timeouts (seconds).
    """

    endpoint_url: str | None = None
    region_name: str = "us-east-1"
    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None
    schemes: tuple[str, ...] = DEFAULT_OBJECT_STORE_SCHEMES
    max_pool_connections: Annotated[int, Field(gt=0)] = 50
    connect_timeout: Annotated[float, Field(gt=0)] = 5.0
    read_timeout: Annotated[float, Field(gt=0)] = 60.0

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("schemes")
    @classmethod
    def _validate_schemes(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("at least one object-store scheme is required")
        if any(not scheme or "://" in scheme or scheme in ("http", "https") for scheme in value):
            raise ValueError(f"invalid object-store schemes: {value}")
        return value

    @classmethod
    def from_env(cls, **overrides: object) -> Result[ObjectStoreConfig, InvalidConfig]:
        fields: dict[str, object] = {
            "endpoint_url": os.environ.get("AWS_ENDPOINT_URL"),
            "region_name": os.environ.get("AWS_REGION", "us-east-1"),
            "aws_access_key_id": os.environ.get("AWS_ACCESS_KEY_ID"),
            "aws_secret_access_key": os.environ.get("AWS_SECRET_ACCESS_KEY"),
        }
        fields.update(overrides)
        return validate_model(cls, **fields)

    def boto_config(self) -> Config:
        """botocore client config; SDK-level retries are off, the retry executor owns them."""
        return Config(
            max_pool_connections=self.max_pool_connections,
            connect_timeout=self.connect_timeout,
            read_timeout=self.read_timeout,
            retries={"max_attempts": 1, "mode": "standard"},
        )


class WebConfig(BaseModel):
    """HTTP client settings."""

    timeout_seconds: Annotated[float, Field(gt=0)] = 30.0
    follow_redirects: bool = True

    model_config = ConfigDict(frozen=True, extra="forbid")


class ResourceConfig(BaseModel):
    """Settings for every transport the dispatcher may use."""

    object_store: ObjectStoreConfig = ObjectStoreConfig()
    web: WebConfig = WebConfig()

    model_config = ConfigDict(frozen=True, extra="forbid")

    @classmethod
    def from_env(cls) -> Result[ResourceConfig, InvalidConfig]:
        return ObjectStoreConfig.from_env().flat_map(
            lambda object_store: validate_model(cls, object_store=object_store)
        )


__all__ = ["ObjectStoreConfig", "WebConfig", "ResourceConfig"]
