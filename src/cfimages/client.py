"""Cloudflare Images API client.

This module builds requests against the images endpoints, interprets the
uniform response envelope and exposes typed operations. Every public
operation returns a ``Result``; no exception escapes an operation except
cancellation of the caller's task.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from types import TracebackType
from typing import Any, TypeVar

import httpx
from aws_lambda_powertools import Logger

from cfimages.core.infrastructure.http_engine import HttpEngine
from cfimages.core.models.api_requests import (
    FormPart,
    ListImagesRequest,
    UpdateImageRequest,
    build_option_parts,
)
from cfimages.core.models.config import ClientConfig
from cfimages.core.models.envelope import (
    ApiEnvelope,
    ImageListResult,
    ResultInfo,
    UsageStatsResult,
)
from cfimages.core.models.errors import AggregateApiError, StatusFault
from cfimages.core.models.image import ImageListPage, RemoteImage
from cfimages.core.models.usage import UsageStats
from cfimages.core.payloads.base import PayloadSource
from cfimages.core.result import Failure, Result, Success
from cfimages.core.utils.constants import (
    DEFAULT_CLIENT_TIMEOUT_SECONDS,
    DEFAULT_PAGE,
    DEFAULT_PER_PAGE,
    FIELD_FILE,
    FIELD_URL,
    STATS_PATH,
    UPLOAD_CHUNK_SIZE,
)
from cfimages.core.utils.decorators import absorb_faults

logger = Logger(service="cfimages", UTC=True)

T = TypeVar("T")

ProgressCallback = Callable[[float], Any]
EnvelopeParser = Callable[[ApiEnvelope], T]


async def _progress_chunks(
    body: bytes,
    on_progress: ProgressCallback | None,
) -> AsyncIterator[bytes]:
    """Stream an encoded body in chunks, reporting the fraction sent after each."""
    total = len(body)
    sent = 0

    for start in range(0, total, UPLOAD_CHUNK_SIZE):
        chunk = body[start : start + UPLOAD_CHUNK_SIZE]
        yield chunk
        sent += len(chunk)
        if on_progress is not None:
            on_progress(sent / total)


def _parse_image(envelope: ApiEnvelope) -> RemoteImage:
    return RemoteImage.model_validate(envelope.result)


class ImagesClient:
    """Async client for the Cloudflare Images v1 API.

    Holds one HTTP engine (and its connection pool) for its lifetime.
    Release it with ``aclose()`` or use it as an async context manager::

        async with ImagesClient("account-id", "token") as client:
            result = await client.upload(from_bytes(data, name="cat.png"))

    ``enable_logging`` toggles the per-request HTTP traffic log only;
    operation-level events such as uploads and deletes are always logged
    through the module logger.

    Operations may run concurrently on one instance. Nothing is retried
    or cached.
    """

    def __init__(
        self,
        account_id: str | None = None,
        api_token: str = "",
        *,
        base_url: str | None = None,
        timeout: float = DEFAULT_CLIENT_TIMEOUT_SECONDS,
        enable_logging: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = ClientConfig(
            account_id=account_id,
            api_token=api_token,
            base_url=base_url,
            timeout_seconds=timeout,
            enable_logging=enable_logging,
        )
        self._images_url = self._config.images_url
        self._engine = HttpEngine(
            credential=self._config.api_token.get_secret_value(),
            timeout=self._config.timeout_seconds,
            enable_logging=self._config.enable_logging,
            transport=transport,
        )

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> ImagesClient:
        return cls(
            config.account_id,
            config.api_token.get_secret_value(),
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            enable_logging=config.enable_logging,
            transport=transport,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def images_url(self) -> str:
        return self._images_url

    @property
    def is_closed(self) -> bool:
        return self._engine.is_closed

    async def __aenter__(self) -> ImagesClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release the connection pool. Later operations return Failure."""
        await self._engine.aclose()

    # ------------------------------------------------------------------
    # Response interpretation
    # ------------------------------------------------------------------

    def _interpret(
        self,
        response: httpx.Response,
        parse: EnvelopeParser[T],
        *,
        fallback_message: str,
    ) -> Result[T]:
        """Turn a raw response into a Result.

        The flow is:
        1. Non-2xx status: use the envelope's errors if the body carries
           them, otherwise report the status and raw body
        2. Decode the envelope (DecodeFault on mismatch)
        3. ``success: false``: Failure with every coded error attached
        4. ``success: true``: map ``result`` into the public type
        """
        if not response.is_success:
            envelope = self._try_envelope(response)
            if envelope is None or envelope.success or not envelope.errors:
                fault = StatusFault(status_code=response.status_code, body=response.text)
                logger.warning(
                    "Request failed",
                    extra={"status": response.status_code, "url": str(response.request.url)},
                )
                return Failure(fault.message, fault)
        else:
            envelope = ApiEnvelope.model_validate_json(response.content)

        if envelope.messages:
            logger.debug("API messages", extra={"messages": envelope.messages})

        if not envelope.success:
            error = AggregateApiError(envelope.errors)
            message = envelope.errors[0].message if envelope.errors else fallback_message
            logger.warning(
                "API reported failure",
                extra={"codes": error.all_codes, "messages": error.all_messages},
            )
            return Failure(message, error)

        return Success(parse(envelope))

    @staticmethod
    def _try_envelope(response: httpx.Response) -> ApiEnvelope | None:
        try:
            return ApiEnvelope.model_validate_json(response.content)
        except ValueError:
            return None

    async def _execute(
        self,
        request: httpx.Request,
        parse: EnvelopeParser[T],
        *,
        fallback_message: str,
    ) -> Result[T]:
        response = await self._engine.send(request)
        return self._interpret(response, parse, fallback_message=fallback_message)

    def _image_url(self, image_id: str) -> str:
        return f"{self._images_url}/{image_id}"

    def _multipart_request(
        self,
        parts: list[FormPart],
        on_progress: ProgressCallback | None = None,
    ) -> httpx.Request:
        """Encode the form once, then stream it so progress can be observed."""
        encoded = self._engine.build_request("POST", self._images_url, files=parts)
        body = encoded.read()

        return self._engine.build_request(
            "POST",
            self._images_url,
            content=_progress_chunks(body, on_progress),
            headers={
                "Content-Type": encoded.headers["Content-Type"],
                "Content-Length": str(len(body)),
            },
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    @absorb_faults("upload")
    async def upload(
        self,
        payload: PayloadSource,
        *,
        image_id: str | None = None,
        require_signed_url: bool = False,
        metadata: dict[str, str] | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> Result[RemoteImage]:
        """Upload image bytes.

        Args:
            payload: Source of the image bytes, read once here
            image_id: Custom ID; the server generates one when omitted
            require_signed_url: Whether delivery URLs must be signed
            metadata: Key/value metadata stored with the image
            on_progress: Called with the fraction of the body sent so far

        Returns:
            Success with the stored image, or Failure
        """
        image_bytes = await payload.fetch_bytes()

        logger.info(
            "Uploading image",
            extra={
                "file_name": payload.name,
                "size": len(image_bytes),
                "media_type": payload.media_type,
                "image_id": image_id,
            },
        )

        parts: list[FormPart] = [
            (FIELD_FILE, (payload.name, image_bytes, payload.media_type)),
            *build_option_parts(
                image_id=image_id,
                require_signed_url=require_signed_url,
                metadata=metadata,
            ),
        ]

        return await self._execute(
            self._multipart_request(parts, on_progress),
            _parse_image,
            fallback_message="Upload failed",
        )

    @absorb_faults("upload_from_url")
    async def upload_from_url(
        self,
        url: str,
        *,
        image_id: str | None = None,
        require_signed_url: bool = False,
        metadata: dict[str, str] | None = None,
    ) -> Result[RemoteImage]:
        """Ask the server to fetch and store the image found at ``url``."""
        parts: list[FormPart] = [
            (FIELD_URL, (None, url)),
            *build_option_parts(
                image_id=image_id,
                require_signed_url=require_signed_url,
                metadata=metadata,
            ),
        ]

        return await self._execute(
            self._multipart_request(parts),
            _parse_image,
            fallback_message="Upload failed",
        )

    @absorb_faults("get_details")
    async def get_details(self, image_id: str) -> Result[RemoteImage]:
        request = self._engine.build_request("GET", self._image_url(image_id))
        return await self._execute(
            request,
            _parse_image,
            fallback_message="Failed to get image details",
        )

    @absorb_faults("delete")
    async def delete(self, image_id: str) -> Result[None]:
        request = self._engine.build_request("DELETE", self._image_url(image_id))
        result = await self._execute(
            request,
            lambda envelope: None,
            fallback_message="Failed to delete image",
        )
        if result.is_success:
            logger.info("Image deleted", extra={"image_id": image_id})
        return result

    @absorb_faults("list")
    async def list(
        self,
        page: int = DEFAULT_PAGE,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> Result[ImageListPage]:
        """List one page of images.

        ``per_page`` is clamped to 1-100 before the request is sent. When the
        server omits pagination counters they are derived from the request
        and the number of images returned.
        """
        query = ListImagesRequest(page=page, per_page=per_page)
        request = self._engine.build_request("GET", self._images_url, params=query.to_params())

        def parse(envelope: ApiEnvelope) -> ImageListPage:
            listing = ImageListResult.model_validate(envelope.result)
            info = envelope.result_info or ResultInfo()
            returned = len(listing.images)

            return ImageListPage(
                images=listing.images,
                count_on_page=info.count if info.count is not None else returned,
                page=info.page if info.page is not None else query.page,
                per_page=info.per_page if info.per_page is not None else query.per_page,
                total_count=info.total_count if info.total_count is not None else returned,
            )

        result = await self._execute(request, parse, fallback_message="Failed to list images")

        if isinstance(result, Success):
            logger.debug(
                "Images listed",
                extra={
                    "page": result.data.page,
                    "count": result.data.count_on_page,
                    "total_count": result.data.total_count,
                },
            )
        return result

    async def iter_images(self, *, per_page: int = DEFAULT_PER_PAGE) -> AsyncIterator[RemoteImage]:
        """Yield every image, walking pages until the last one.

        Stops quietly at the first failed page; the failure is logged.
        """
        page: int | None = DEFAULT_PAGE

        while page is not None:
            match await self.list(page=page, per_page=per_page):
                case Success(data=listing):
                    for image in listing.images:
                        yield image
                    page = listing.next_page if listing.images else None
                case Failure(message=message):
                    logger.warning(
                        "Stopping image iteration",
                        extra={"page": page, "error": message},
                    )
                    return

    @absorb_faults("update")
    async def update(
        self,
        image_id: str,
        *,
        require_signed_url: bool | None = None,
        metadata: dict[str, str] | None = None,
    ) -> Result[RemoteImage]:
        """Partially update an image; only the supplied fields are sent."""
        body = UpdateImageRequest(
            require_signed_urls=require_signed_url,
            metadata=metadata,
        ).to_body()
        request = self._engine.build_request("PATCH", self._image_url(image_id), json=body)

        return await self._execute(
            request,
            _parse_image,
            fallback_message="Failed to update image",
        )

    @absorb_faults("usage_stats")
    async def usage_stats(self) -> Result[UsageStats]:
        request = self._engine.build_request("GET", f"{self._images_url}/{STATS_PATH}")

        def parse(envelope: ApiEnvelope) -> UsageStats:
            counts = UsageStatsResult.model_validate(envelope.result).count
            return UsageStats(current=counts.current, allowed=counts.allowed)

        return await self._execute(request, parse, fallback_message="Failed to get stats")


def create_client(
    account_id: str | None = None,
    api_token: str = "",
    *,
    base_url: str | None = None,
    timeout: float = DEFAULT_CLIENT_TIMEOUT_SECONDS,
    enable_logging: bool = True,
) -> ImagesClient:
    """Create an ``ImagesClient``."""
    return ImagesClient(
        account_id,
        api_token,
        base_url=base_url,
        timeout=timeout,
        enable_logging=enable_logging,
    )
