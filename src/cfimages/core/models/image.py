"""Image records returned by the Cloudflare Images API."""

from datetime import datetime
from math import ceil
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr

from cfimages.core.utils.time import parse_iso8601


class RemoteImage(BaseModel):
    """Server-side image record.

    Parses the wire names (``filename``, ``uploaded``, ``requireSignedURLs``,
    ``variants``, ``meta``) and also accepts the Python field names.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: StrictStr = Field(..., description="Unique image identifier")
    name: StrictStr = Field(..., alias="filename", description="Original file name")
    uploaded_at: StrictStr = Field(..., alias="uploaded", description="ISO-8601 upload timestamp")
    requires_signed_url: StrictBool = Field(
        ...,
        alias="requireSignedURLs",
        description="Whether delivery URLs must be signed",
    )
    variant_urls: list[StrictStr] = Field(
        default_factory=list,
        alias="variants",
        description="Delivery URL of every variant",
    )
    metadata: dict[StrictStr, StrictStr] | None = Field(
        None,
        alias="meta",
        description="User-defined key/value metadata",
    )

    @property
    def uploaded_datetime(self) -> datetime | None:
        return parse_iso8601(self.uploaded_at)

    def variant_url(self, variant_name: str) -> str | None:
        """Return the first delivery URL whose path ends in ``/<variant_name>``."""
        suffix = f"/{variant_name}"
        for url in self.variant_urls:
            if urlsplit(url).path.endswith(suffix):
                return url
        return None

    @property
    def public_url(self) -> str | None:
        return self.variant_url("public")

    @property
    def variant_map(self) -> dict[str, str]:
        """Map each variant name (last path segment) to its delivery URL."""
        return {urlsplit(url).path.rsplit("/", 1)[-1]: url for url in self.variant_urls}


class ImageListPage(BaseModel):
    """One page of images plus the pagination counters used to walk the rest."""

    model_config = ConfigDict(frozen=True)

    images: list[RemoteImage] = Field(..., description="Images on this page")
    count_on_page: StrictInt = Field(..., description="Number of images on this page")
    page: StrictInt = Field(..., description="1-based page number")
    per_page: StrictInt = Field(..., description="Requested page size")
    total_count: StrictInt = Field(..., description="Total images in the account")

    @property
    def has_more(self) -> bool:
        return (self.page * self.per_page) < self.total_count

    @property
    def next_page(self) -> int | None:
        return self.page + 1 if self.has_more else None

    @property
    def total_pages(self) -> int:
        if self.per_page <= 0:
            return 0
        return ceil(self.total_count / self.per_page)
