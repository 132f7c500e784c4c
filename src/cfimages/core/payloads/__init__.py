"""Binary payload sources for image uploads."""

from cfimages.core.payloads.base import PayloadSource
from cfimages.core.payloads.s3_object import S3ObjectPayload
from cfimages.core.payloads.sources import (
    BytesPayload,
    FilePayload,
    PillowImagePayload,
    StreamPayload,
    from_bytes,
)

__all__ = [
    "BytesPayload",
    "FilePayload",
    "PayloadSource",
    "PillowImagePayload",
    "S3ObjectPayload",
    "StreamPayload",
    "from_bytes",
]
