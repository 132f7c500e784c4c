"""Thin adapter for reading objects from Amazon S3."""

from collections.abc import Mapping
from typing import Any, Protocol

import boto3


class _Boto3S3Client(Protocol):
    """Internal typing for boto3 S3 client (AWS-facing only)."""

    def get_object(
        self,
        *,
        Bucket: str,
        Key: str,
    ) -> Mapping[str, Any]: ...

    def head_object(
        self,
        *,
        Bucket: str,
        Key: str,
    ) -> Mapping[str, Any]: ...


class S3AdapterProtocol(Protocol):
    """Minimal S3 adapter protocol (payload-facing)."""

    def read_object(self, *, key: str) -> bytes: ...

    def head_object(self, *, key: str) -> Mapping[str, Any]: ...


class S3Adapter:
    """Low-level S3 reads (mechanical, no error handling).

    This adapter:
    - Wraps boto3 S3 client bound to one bucket
    - Does NOT handle errors (lets them bubble up)
    - Takes its settings explicitly; it never reads the environment
    """

    def __init__(
        self,
        *,
        bucket: str,
        endpoint_url: str | None = None,
        region_name: str | None = None,
        client: Any | None = None,
    ) -> None:
        """Create S3 client for the given bucket."""
        if not bucket:
            raise ValueError("bucket must not be empty")

        self._bucket = bucket
        self._client: _Boto3S3Client = client or boto3.client(
            "s3",
            endpoint_url=endpoint_url,
            region_name=region_name,
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    def read_object(self, *, key: str) -> bytes:
        """Fetch object bytes from S3.
        Raises boto3 exceptions - caught by the images client.
        """
        response = self._client.get_object(
            Bucket=self._bucket,
            Key=key,
        )
        body: bytes = response["Body"].read()
        return body

    def head_object(self, *, key: str) -> Mapping[str, Any]:
        """Fetch object headers (size, content type) without the body."""
        return self._client.head_object(
            Bucket=self._bucket,
            Key=key,
        )
