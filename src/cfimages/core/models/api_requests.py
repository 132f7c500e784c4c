"""
Request models and form builders for the images endpoints.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator

from cfimages.core.utils.constants import (
    DEFAULT_PAGE,
    DEFAULT_PER_PAGE,
    FIELD_ID,
    FIELD_METADATA,
    FIELD_REQUIRE_SIGNED_URLS,
    MAX_PER_PAGE,
    MIN_PER_PAGE,
)

# httpx multipart entry: (field name, (file name or None, content[, media type]))
FormPart = tuple[str, tuple[Any, ...]]


class ListImagesRequest(BaseModel):
    """Query parameters for the list endpoint."""

    page: int = Field(default=DEFAULT_PAGE, description="1-based page number")
    per_page: int = Field(
        default=DEFAULT_PER_PAGE,
        description="Results per page, clamped to 1-100",
    )

    @field_validator("per_page", mode="before")
    @classmethod
    def clamp_per_page(cls, value: Any) -> int:
        """Clamp rather than reject: 500 becomes 100, 0 becomes 1."""
        return min(max(int(value), MIN_PER_PAGE), MAX_PER_PAGE)

    def to_params(self) -> dict[str, int]:
        return {"page": self.page, "per_page": self.per_page}


class UpdateImageRequest(BaseModel):
    """JSON body of a partial update; only supplied fields are sent."""

    model_config = ConfigDict(populate_by_name=True)

    require_signed_urls: StrictBool | None = Field(None, alias="requireSignedURLs")
    metadata: dict[StrictStr, StrictStr] | None = Field(None, alias="metadata")

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


def encode_metadata_field(metadata: dict[str, str]) -> str:
    """Build the ``metadata`` form value the upload endpoint expects.

    The API wants a JSON-object-shaped string made of ``"key":"value"``
    pairs joined by commas, not nested form fields. Values are inserted
    verbatim.

    Example:
        {"user": "42", "album": "trip"} -> '{"user":"42","album":"trip"}'
    """
    pairs = ",".join(f'"{key}":"{value}"' for key, value in metadata.items())
    return "{" + pairs + "}"


def build_option_parts(
    *,
    image_id: str | None,
    require_signed_url: bool,
    metadata: dict[str, str] | None,
) -> list[FormPart]:
    """Form parts shared by both upload flows, in the order the API expects."""
    parts: list[FormPart] = []

    if image_id is not None:
        parts.append((FIELD_ID, (None, image_id)))

    parts.append((FIELD_REQUIRE_SIGNED_URLS, (None, "true" if require_signed_url else "false")))

    if metadata:
        parts.append((FIELD_METADATA, (None, encode_metadata_field(metadata))))

    return parts
