"""Two-armed outcome value returned by every client operation.

A ``Result`` is either ``Success(data)`` or ``Failure(message, cause)``.
Both arms are immutable and support structural pattern matching::

    match await client.get_details("img-1"):
        case Success(image):
            print(image.public_url)
        case Failure(message, cause):
            print(message)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeAlias, TypeVar

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """Successful outcome carrying the operation's data."""

    data: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_error(self) -> bool:
        return False

    def get_or_none(self) -> T | None:
        return self.data

    def get_or_default(self, default: T) -> T:
        return self.data

    def map(self, fn: Callable[[T], R]) -> Success[R]:
        return Success(fn(self.data))

    def on_success(self, fn: Callable[[T], Any]) -> Success[T]:
        fn(self.data)
        return self

    def on_error(self, fn: Callable[[str, BaseException | None], Any]) -> Success[T]:
        return self


@dataclass(frozen=True, slots=True)
class Failure:
    """Failed outcome carrying a human-readable message and the underlying cause."""

    message: str
    cause: BaseException | None = None

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_error(self) -> bool:
        return True

    def get_or_none(self) -> None:
        return None

    def get_or_default(self, default: T) -> T:
        return default

    def map(self, fn: Callable[[Any], Any]) -> Failure:
        return self

    def on_success(self, fn: Callable[[Any], Any]) -> Failure:
        return self

    def on_error(self, fn: Callable[[str, BaseException | None], Any]) -> Failure:
        fn(self.message, self.cause)
        return self


Result: TypeAlias = Success[T] | Failure
