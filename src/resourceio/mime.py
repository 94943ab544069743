"""Closed set of content types accepted by backend writes."""

from __future__ import annotations

from enum import Enum


class MimeType(str, Enum):
    OCTET_STREAM = "application/octet-stream"
    TEXT_PLAIN = "text/plain"
    TEXT_CSV = "text/csv"
    TEXT_HTML = "text/html"
    JSON = "application/json"
    NDJSON = "application/x-ndjson"
    XML = "application/xml"
    YAML = "application/yaml"
    PROTOBUF = "application/x-protobuf"
    GZIP = "application/gzip"
    PDF = "application/pdf"
    PNG = "image/png"
    JPEG = "image/jpeg"


__all__ = ["MimeType"]
