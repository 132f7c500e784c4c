"""Generic async HTTP request engine.

Wraps one pooled ``httpx.AsyncClient`` and reports every outcome as a
``Result``. The engine applies the bearer credential, timeout and request
logging; it never retries and never looks at API-level success flags.
"""

from __future__ import annotations

from types import TracebackType
from typing import Any, TypeVar

import httpx
from aws_lambda_powertools import Logger
from pydantic import TypeAdapter

from cfimages.core.models.errors import TransportFault
from cfimages.core.result import Failure, Result, Success
from cfimages.core.utils.constants import (
    CLIENT_CLOSED_MESSAGE,
    DEFAULT_ENGINE_TIMEOUT_SECONDS,
    ERROR_CODE_CLIENT_CLOSED,
)
from cfimages.core.utils.decorators import classify_fault

logger = Logger(service="cfimages", UTC=True)

ModelT = TypeVar("ModelT")


class HttpEngine:
    """Async HTTP engine with JSON decoding and uniform error wrapping.

    Safe for concurrent use: the only shared state is the connection pool
    owned by the underlying ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        base_url: str = "",
        *,
        credential: str | None = None,
        timeout: float = DEFAULT_ENGINE_TIMEOUT_SECONDS,
        enable_logging: bool = True,
        default_headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers: dict[str, str] = dict(default_headers or {})
        if credential:
            headers["Authorization"] = f"Bearer {credential}"

        event_hooks: dict[str, list[Any]] = {"request": [], "response": []}
        if enable_logging:
            event_hooks["request"].append(self._log_request)
            event_hooks["response"].append(self._log_response)

        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=httpx.Timeout(timeout),
            event_hooks=event_hooks,
            transport=transport,
        )
        self._closed = False

    @property
    def is_closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> HttpEngine:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release pooled connections. Further operations return Failure."""
        if self._closed:
            return
        self._closed = True
        await self._client.aclose()

    @staticmethod
    async def _log_request(request: httpx.Request) -> None:
        logger.info(
            "HTTP request",
            extra={"method": request.method, "url": str(request.url)},
        )

    @staticmethod
    async def _log_response(response: httpx.Response) -> None:
        logger.info(
            "HTTP response",
            extra={
                "method": response.request.method,
                "url": str(response.request.url),
                "status": response.status_code,
            },
        )

    def _closed_fault(self) -> TransportFault:
        return TransportFault(message=CLIENT_CLOSED_MESSAGE, error_code=ERROR_CODE_CLIENT_CLOSED)

    def build_request(self, method: str, path: str, **kwargs: Any) -> httpx.Request:
        """Build a request carrying the default headers and base URL."""
        return self._client.build_request(method, path, **kwargs)

    async def send(self, request: httpx.Request) -> httpx.Response:
        """Send a pre-built request and return the raw response.

        Raises:
            TransportFault: If the engine has been closed
            httpx.TransportError: On connection problems or timeouts
        """
        if self._closed:
            raise self._closed_fault()
        return await self._client.send(request)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        json: Any = None,
        model: type[ModelT] | None = None,
        raw: bool = False,
    ) -> Result[Any]:
        """Perform a request and decode the body.

        Args:
            method: HTTP verb
            path: Path relative to the base URL, or an absolute URL
            params: Query parameters
            headers: Extra headers for this request only
            json: Body to encode as JSON
            model: Type to validate the decoded JSON into
            raw: Return the body as text instead of decoding it

        Returns:
            Success with the decoded body, or Failure describing the fault
        """
        if self._closed:
            fault = self._closed_fault()
            return Failure(fault.message, fault)

        try:
            response = await self._client.request(
                method,
                path,
                params=params,
                headers=headers,
                json=json,
            )

            if raw:
                return Success(response.text)

            payload = response.json()
            if model is None:
                return Success(payload)

            return Success(TypeAdapter(model).validate_python(payload))

        except Exception as exc:
            logger.warning(
                "HTTP request failed",
                extra={"method": method, "path": path, "error_type": type(exc).__name__},
            )
            return classify_fault(exc)

    async def get(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        model: type[ModelT] | None = None,
    ) -> Result[Any]:
        return await self.request("GET", path, params=params, headers=headers, model=model)

    async def get_raw(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Result[str]:
        return await self.request("GET", path, params=params, headers=headers, raw=True)

    async def post(
        self,
        path: str,
        body: Any = None,
        *,
        headers: dict[str, str] | None = None,
        model: type[ModelT] | None = None,
    ) -> Result[Any]:
        return await self.request("POST", path, json=body, headers=headers, model=model)

    async def put(
        self,
        path: str,
        body: Any = None,
        *,
        headers: dict[str, str] | None = None,
        model: type[ModelT] | None = None,
    ) -> Result[Any]:
        return await self.request("PUT", path, json=body, headers=headers, model=model)

    async def patch(
        self,
        path: str,
        body: Any = None,
        *,
        headers: dict[str, str] | None = None,
        model: type[ModelT] | None = None,
    ) -> Result[Any]:
        return await self.request("PATCH", path, json=body, headers=headers, model=model)

    async def delete(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        model: type[ModelT] | None = None,
    ) -> Result[Any]:
        return await self.request("DELETE", path, headers=headers, model=model)
