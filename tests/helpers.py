"""Builders for stubbed API responses and multipart inspection helpers."""

import json
from typing import Any

import httpx

ACCOUNT_ID = "acc-123"
API_TOKEN = "test-token"
IMAGES_URL = f"https://api.cloudflare.com/client/v4/accounts/{ACCOUNT_ID}/images/v1"
S3_BUCKET_NAME = "cfimages-payloads-test"


def make_envelope(
    result: Any = None,
    *,
    success: bool = True,
    errors: list[dict[str, Any]] | None = None,
    messages: list[Any] | None = None,
    result_info: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a response envelope shaped like the remote API's."""
    envelope: dict[str, Any] = {
        "success": success,
        "errors": errors or [],
        "messages": messages or [],
        "result": result,
    }
    if result_info is not None:
        envelope["result_info"] = result_info
    return envelope


def make_image(image_id: str = "img-1", **overrides: Any) -> dict[str, Any]:
    """Wire representation of an image record."""
    image: dict[str, Any] = {
        "id": image_id,
        "filename": "cat.jpg",
        "uploaded": "2025-01-01T00:00:00.000Z",
        "requireSignedURLs": False,
        "variants": [
            f"https://imagedelivery.net/hash/{image_id}/public",
            f"https://imagedelivery.net/hash/{image_id}/thumbnail",
        ],
        "meta": {"user": "42"},
    }
    image.update(overrides)
    return image


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=payload)


def multipart_field_names(request: httpx.Request) -> list[str]:
    """Field names of a multipart body, in wire order."""
    body = request.content.decode("latin-1")
    return [
        chunk.split('"', 1)[0]
        for chunk in body.split('Content-Disposition: form-data; name="')[1:]
    ]


def multipart_field_value(request: httpx.Request, name: str) -> str | None:
    """Value of a plain (non-file) multipart field."""
    body = request.content.decode("latin-1")
    marker = f'Content-Disposition: form-data; name="{name}"\r\n\r\n'
    if marker not in body:
        return None
    return body.split(marker, 1)[1].split("\r\n", 1)[0]


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content)
