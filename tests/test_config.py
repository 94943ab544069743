# tests/test_config.py
"""Tests for configuration models and environment loading."""

from __future__ import annotations

import pytest

from resourceio.config import ObjectStoreConfig, ResourceConfig, WebConfig
from tests.helpers import expect_failure, expect_success


def test_defaults() -> None:
    config = ResourceConfig()
    assert config.object_store.schemes == ("gs", "s3")
    assert config.object_store.region_name == "us-east-1"
    assert config.web == WebConfig()


def test_from_env_reads_aws_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AWS_ENDPOINT_URL", "http://minio:9000")
    monkeypatch.setenv("AWS_REGION", "eu-west-1")
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "minioadmin")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "minioadmin")

    config = expect_success(ResourceConfig.from_env())

    assert config.object_store.endpoint_url == "http://minio:9000"
    assert config.object_store.region_name == "eu-west-1"
    assert config.object_store.aws_access_key_id == "minioadmin"


def test_from_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)
    config = expect_success(ObjectStoreConfig.from_env(schemes=("minio",)))
    assert config.endpoint_url is None
    assert config.schemes == ("minio",)


@pytest.mark.parametrize("schemes", [(), ("",), ("https",), ("gs://",)])
def test_invalid_schemes_rejected(schemes: tuple[str, ...]) -> None:
    error = expect_failure(ObjectStoreConfig.from_env(schemes=schemes))
    assert error.kind == "InvalidConfig"


def test_unknown_fields_rejected() -> None:
    assert expect_failure(ObjectStoreConfig.from_env(bucket="x")).kind == "InvalidConfig"


def test_boto_config_disables_sdk_retries() -> None:
    boto = ObjectStoreConfig(max_pool_connections=7).boto_config()
    assert boto.retries == {"max_attempts": 1, "mode": "standard"}
    assert boto.max_pool_connections == 7
