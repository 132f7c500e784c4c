"""
Fault classification and the boundary decorator for client operations.
"""

from __future__ import annotations

import json
import traceback
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar

import httpx
from aws_lambda_powertools import Logger
from pydantic import ValidationError

from cfimages.core.models.errors import DecodeFault, ImagesClientError, TransportFault
from cfimages.core.result import Failure
from cfimages.core.utils.constants import ERROR_CODE_TIMEOUT, UNKNOWN_ERROR_MESSAGE

logger = Logger(service="cfimages", UTC=True)

P = ParamSpec("P")
R = TypeVar("R")


def _describe(exc: BaseException) -> str:
    """Best available one-line description of an exception."""
    return str(exc) or type(exc).__name__ or UNKNOWN_ERROR_MESSAGE


def classify_fault(exc: Exception) -> Failure:
    """
    Translate any exception into a ``Failure``.

    - Client errors keep their own message and become the cause as-is
    - Timeouts and connection problems become ``TransportFault``
    - Bodies that are not JSON or do not fit the model become ``DecodeFault``
    - Anything else is passed through as the cause with its own message
    """
    if isinstance(exc, ImagesClientError):
        return Failure(exc.message, exc)

    fault: ImagesClientError
    details = {"error_type": type(exc).__name__}

    if isinstance(exc, httpx.TimeoutException):
        fault = TransportFault(
            message=f"Request timed out: {_describe(exc)}",
            error_code=ERROR_CODE_TIMEOUT,
            details=details,
        )
    elif isinstance(exc, httpx.TransportError):
        fault = TransportFault(message=f"Connection failed: {_describe(exc)}", details=details)
    elif isinstance(exc, (ValidationError, json.JSONDecodeError, UnicodeDecodeError)):
        fault = DecodeFault(message=f"Unexpected response body: {_describe(exc)}", details=details)
    else:
        return Failure(_describe(exc), exc)

    fault.__cause__ = exc
    return Failure(fault.message, fault)


def _log_error(
    message: str,
    *,
    operation: str,
    exc: Exception,
    level: str = "warning",
) -> None:
    """
    Log error with consistent structure and full context.

    Args:
        message: Log message
        operation: Name of the client operation
        exc: Exception that was raised
        level: Log level ('warning' or 'exception')
    """
    log_extra: dict[str, Any] = {
        "operation": operation,
        "error": str(exc),
        "error_type": type(exc).__name__,
    }

    if level == "exception":
        logger.exception(message, extra=log_extra)
    else:
        log_extra["traceback"] = traceback.format_exc()
        logger.warning(message, extra=log_extra)


def absorb_faults(
    operation: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R | Failure]]]:
    """
    Decorator for public async client operations.

    Provides:
    - Conversion of every ``Exception`` into a ``Failure``
    - Structured logging keyed by operation name
    - Cancellation passes through untouched (``CancelledError`` is not an ``Exception``)

    Example:
        @absorb_faults("get_details")
        async def get_details(self, image_id): ...
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R | Failure]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R | Failure:
            try:
                return await func(*args, **kwargs)

            # Faults already classified by the operation itself
            except ImagesClientError as exc:
                _log_error("Operation failed", operation=operation, exc=exc)
                return classify_fault(exc)

            except (httpx.TransportError, ValidationError, json.JSONDecodeError) as exc:
                _log_error("Request or decode error", operation=operation, exc=exc)
                return classify_fault(exc)

            except Exception as exc:
                _log_error(
                    "Unexpected error in operation",
                    operation=operation,
                    exc=exc,
                    level="exception",
                )
                return classify_fault(exc)

        return wrapper

    return decorator
