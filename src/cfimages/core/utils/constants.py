"""Global constants used throughout the client.

This module centralizes error codes, wire field names, defaults and limits
shared by the HTTP engine, the payload providers and the images client.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

ERROR_CODE_TRANSPORT = "TRANSPORT_ERROR"
ERROR_CODE_TIMEOUT = "TIMEOUT"
ERROR_CODE_DECODE = "DECODE_ERROR"
ERROR_CODE_HTTP_STATUS = "HTTP_STATUS_ERROR"
ERROR_CODE_API = "API_ERROR"
ERROR_CODE_CLIENT_CLOSED = "CLIENT_CLOSED"

# ============================================================================
# Remote API
# ============================================================================

CLOUDFLARE_API_BASE_URL = "https://api.cloudflare.com/client/v4"
IMAGES_PATH_TEMPLATE = "/accounts/{account_id}/images/v1"
STATS_PATH = "stats"

API_ERROR_FALLBACK_MESSAGE = "Cloudflare API error"
CLIENT_CLOSED_MESSAGE = "client is closed"
UNKNOWN_ERROR_MESSAGE = "Unknown error"

# Multipart form field names expected by the upload endpoint
FIELD_FILE = "file"
FIELD_URL = "url"
FIELD_ID = "id"
FIELD_REQUIRE_SIGNED_URLS = "requireSignedURLs"
FIELD_METADATA = "metadata"

# ============================================================================
# HTTP Defaults
# ============================================================================

DEFAULT_ENGINE_TIMEOUT_SECONDS = 30.0
DEFAULT_CLIENT_TIMEOUT_SECONDS = 60.0
UPLOAD_CHUNK_SIZE = 64 * 1024

# ============================================================================
# Payload Defaults
# ============================================================================

DEFAULT_MEDIA_TYPE = "image/jpeg"
DEFAULT_FILE_NAME = "image.jpg"
FALLBACK_MEDIA_TYPE = "application/octet-stream"
DEFAULT_JPEG_QUALITY = 90

EXTENSION_MEDIA_TYPE_MAP: Final[dict[str, str]] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
}

# Pillow save() format per media type
PILLOW_FORMAT_MEDIA_TYPE_MAP: Final[dict[str, str]] = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "WEBP": "image/webp",
}

# ============================================================================
# Pagination Constraints
# ============================================================================

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 20
MIN_PER_PAGE = 1
MAX_PER_PAGE = 100

# ============================================================================
# Environment Variable Names (read by scripts and e2e tests only)
# ============================================================================

ENV_CLOUDFLARE_ACCOUNT_ID = "CLOUDFLARE_ACCOUNT_ID"
ENV_CLOUDFLARE_API_TOKEN = "CLOUDFLARE_API_TOKEN"
ENV_CLOUDFLARE_TIMEOUT = "CLOUDFLARE_TIMEOUT"
