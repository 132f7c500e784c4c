"""Exception classes describing why a client operation failed.

These are never raised past the client boundary; they travel as the
``cause`` of a ``Failure`` so callers can inspect them.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

from cfimages.core.utils.constants import (
    API_ERROR_FALLBACK_MESSAGE,
    ERROR_CODE_API,
    ERROR_CODE_DECODE,
    ERROR_CODE_HTTP_STATUS,
    ERROR_CODE_TRANSPORT,
)


class ApiErrorEntry(BaseModel):
    """Single coded error reported in the server envelope."""

    model_config = ConfigDict(frozen=True)

    code: StrictInt = Field(..., description="Cloudflare error code")
    message: StrictStr = Field(..., description="Human-readable error message")


class ImagesClientError(Exception):
    """
    Base exception for all client errors.

    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class TransportFault(ImagesClientError):
    """Raised when the connection fails, times out or DNS cannot resolve."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_TRANSPORT,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class DecodeFault(ImagesClientError):
    """Raised when a response body does not match the expected shape."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_DECODE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class StatusFault(ImagesClientError):
    """Raised when the server answers with a non-2xx status."""

    status_code: int
    body: str

    def __init__(
        self,
        *,
        status_code: int,
        body: str,
        message: str | None = None,
        error_code: str = ERROR_CODE_HTTP_STATUS,
    ) -> None:
        self.status_code = status_code
        self.body = body

        super().__init__(
            message=message or f"request failed with status {status_code}",
            error_code=error_code,
            details={"status_code": status_code, "body": body},
        )


class AggregateApiError(ImagesClientError):
    """Raised when the server envelope reports ``success: false``.

    Keeps every coded entry in server order so callers can distinguish,
    for example, an authentication failure from rate limiting.
    """

    errors: list[ApiErrorEntry]

    def __init__(self, errors: list[ApiErrorEntry]) -> None:
        self.errors = list(errors)

        super().__init__(
            message=self.primary_message,
            error_code=ERROR_CODE_API,
            details={"codes": self.all_codes},
        )

    @property
    def primary_message(self) -> str:
        if self.errors:
            return self.errors[0].message
        return API_ERROR_FALLBACK_MESSAGE

    @property
    def all_messages(self) -> list[str]:
        return [entry.message for entry in self.errors]

    @property
    def all_codes(self) -> list[int]:
        return [entry.code for entry in self.errors]

    def __str__(self) -> str:
        pairs = ", ".join(f"{entry.code}: {entry.message}" for entry in self.errors)
        return f"AggregateApiError(errors=[{pairs}])"
