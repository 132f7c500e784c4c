"""
Pytest configuration and fixtures for the images client tests.
Provides a stubbed HTTP transport, AWS mocking and sample image data.
"""

import base64
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

import boto3
import httpx
import pytest
from moto import mock_aws

from cfimages import ImagesClient
from helpers import ACCOUNT_ID, API_TOKEN, S3_BUCKET_NAME

Handler = Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]]


# ============================================================================
# HTTP fixtures
# ============================================================================


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    """Requests seen by the stub transport, in order."""
    return []


@pytest.fixture
async def make_client(
    recorded_requests: list[httpx.Request],
) -> AsyncIterator[Callable[[Handler], ImagesClient]]:
    """
    Factory building an ImagesClient whose HTTP calls go to ``handler``.

    Usage:
        client = make_client(lambda request: json_response(make_envelope(...)))
    """
    clients: list[ImagesClient] = []

    def _make(handler: Handler) -> ImagesClient:
        async def _record(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            response = handler(request)
            if not isinstance(response, httpx.Response):
                response = await response
            return response

        client = ImagesClient(
            ACCOUNT_ID,
            API_TOKEN,
            enable_logging=False,
            transport=httpx.MockTransport(_record),
        )
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()


# ============================================================================
# AWS fixtures
# ============================================================================


@pytest.fixture
def aws_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    """Fake credentials so boto3 never reaches real AWS."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture(scope="function")
def aws_mock(aws_credentials):
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name="us-east-1")


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    """Create the test bucket; moto discards it on context exit."""
    s3_client.create_bucket(Bucket=S3_BUCKET_NAME)
    yield s3_client


@pytest.fixture
def s3_put_object(s3_bucket) -> Callable[..., dict[str, Any]]:
    """
    Helper to upload an object to S3.

    Usage:
        s3_put_object("images/cat.jpg", image_bytes, "image/jpeg")
    """

    def _put(key: str, body: bytes, content_type: str = "application/octet-stream"):
        return s3_bucket.put_object(
            Bucket=S3_BUCKET_NAME, Key=key, Body=body, ContentType=content_type
        )

    return _put


# ============================================================================
# Sample Image Data
# ============================================================================


@pytest.fixture
def sample_image_binary() -> bytes:
    """Sample binary image data (1x1 PNG)."""
    png_base64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
    return base64.b64decode(png_base64)


@pytest.fixture
def sample_jpeg_binary() -> bytes:
    """Sample binary JPEG data (minimal valid JPEG)."""
    return (
        b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"
        b"\xff\xdb\x00C\x00\x08\x06\x06\x07\x06\x05\x08\x07\x07\x07\t\t\x08\n\x0c"
        b"\x14\r\x0c\x0b\x0b\x0c\x19\x12\x13\x0f\x14\x1d\x1a\x1f\x1e\x1d\x1a\x1c"
        b"\x1c $.' \",#\x1c\x1c(7),01444\x1f'9=82<.342\xff\xc0\x00\x0b\x08"
        b"\x00\x01\x00\x01\x01\x01\x11\x00\xff\xc4\x00\x14\x00\x01\x00\x00\x00"
        b"\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\t\xff\xc4\x00\x14\x10"
        b"\x01\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00"
        b"\xff\xda\x00\x08\x01\x01\x00\x00?\x00\x7f\x00\xff\xd9"
    )
