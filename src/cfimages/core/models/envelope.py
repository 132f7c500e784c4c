"""Wire models for the uniform response envelope of the remote API.

Every endpoint answers with::

    {"success": bool, "errors": [...], "messages": [...],
     "result": ..., "result_info": {...} | null}

``result`` is kept untyped here and validated per operation.
"""

from typing import Any

from pydantic import BaseModel, Field, StrictBool, StrictInt

from cfimages.core.models.errors import ApiErrorEntry
from cfimages.core.models.image import RemoteImage


class ResultInfo(BaseModel):
    """Pagination block. Missing counters are derived by the client."""

    count: StrictInt | None = None
    page: StrictInt | None = None
    per_page: StrictInt | None = None
    total_count: StrictInt | None = None


class ApiEnvelope(BaseModel):
    """Top-level wrapper returned by every endpoint."""

    success: StrictBool
    errors: list[ApiErrorEntry] = Field(default_factory=list)
    messages: list[Any] = Field(default_factory=list)
    result: Any = None
    result_info: ResultInfo | None = None


class ImageListResult(BaseModel):
    """``result`` payload of the list endpoint."""

    images: list[RemoteImage] = Field(default_factory=list)


class UsageCount(BaseModel):
    current: StrictInt
    allowed: StrictInt


class UsageStatsResult(BaseModel):
    """``result`` payload of the stats endpoint."""

    count: UsageCount
