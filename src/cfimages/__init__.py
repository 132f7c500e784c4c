"""Cloudflare Images client package."""

from cfimages.client import ImagesClient, create_client
from cfimages.core.models.config import ClientConfig
from cfimages.core.models.errors import (
    AggregateApiError,
    ApiErrorEntry,
    DecodeFault,
    ImagesClientError,
    StatusFault,
    TransportFault,
)
from cfimages.core.models.image import ImageListPage, RemoteImage
from cfimages.core.models.usage import UsageStats
from cfimages.core.payloads import (
    BytesPayload,
    FilePayload,
    PayloadSource,
    PillowImagePayload,
    S3ObjectPayload,
    StreamPayload,
    from_bytes,
)
from cfimages.core.result import Failure, Result, Success

__version__ = "1.0.0"
__author__ = "Bharat kumar"
__description__ = "Async, typed client for the Cloudflare Images API"

__all__ = [
    "AggregateApiError",
    "ApiErrorEntry",
    "BytesPayload",
    "ClientConfig",
    "DecodeFault",
    "Failure",
    "FilePayload",
    "ImageListPage",
    "ImagesClient",
    "ImagesClientError",
    "PayloadSource",
    "PillowImagePayload",
    "RemoteImage",
    "Result",
    "S3ObjectPayload",
    "StatusFault",
    "StreamPayload",
    "Success",
    "TransportFault",
    "UsageStats",
    "create_client",
    "from_bytes",
]
