"""Payload source backed by an object stored in S3."""

import asyncio
from pathlib import PurePosixPath

from aws_lambda_powertools import Logger

from cfimages.core.infrastructure.adapters.s3_adapter import S3AdapterProtocol
from cfimages.core.payloads.base import PayloadSource
from cfimages.core.utils.mime import media_type_for_name

logger = Logger(service="cfimages", UTC=True)


class S3ObjectPayload(PayloadSource):
    """Upload an S3 object without downloading it ahead of time.

    The object is read through the adapter in a worker thread when the
    upload asks for its bytes.
    """

    def __init__(
        self,
        adapter: S3AdapterProtocol,
        *,
        key: str,
        media_type: str | None = None,
        name: str | None = None,
        size_in_bytes: int | None = None,
    ) -> None:
        self._adapter = adapter
        self._key = key
        self._name = name or PurePosixPath(key).name
        self._media_type = media_type or media_type_for_name(self._name)
        self._size = size_in_bytes

    @classmethod
    def from_object(cls, adapter: S3AdapterProtocol, *, key: str) -> "S3ObjectPayload":
        """Build a payload using the object's stored size and content type."""
        head = adapter.head_object(key=key)
        name = PurePosixPath(key).name
        return cls(
            adapter,
            key=key,
            media_type=head.get("ContentType") or media_type_for_name(name),
            name=name,
            size_in_bytes=head.get("ContentLength"),
        )

    @property
    def key(self) -> str:
        return self._key

    @property
    def media_type(self) -> str:
        return self._media_type

    @property
    def name(self) -> str:
        return self._name

    @property
    def size_in_bytes(self) -> int | None:
        return self._size

    async def fetch_bytes(self) -> bytes:
        logger.debug("Reading payload from S3", extra={"key": self._key})
        return await asyncio.to_thread(self._adapter.read_object, key=self._key)
