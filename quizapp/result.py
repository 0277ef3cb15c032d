"""Explicit success-or-error return values.

Every service and repository operation returns either `Ok(value)` or
`Err(error)` instead of raising for expected failure modes. Callers
check `.ok` (or use `isinstance`) and read `.value` / `.error`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome wrapping `value`."""
    value: T

    @property
    def ok(self) -> bool:
        return True

    def map(self, fn: Callable[[T], U]) -> "Ok[U]":
        return Ok(fn(self.value))

    def map_err(self, fn: Callable[[E], U]) -> "Ok[T]":
        return self


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome wrapping `error`."""
    error: E

    @property
    def ok(self) -> bool:
        return False

    def map(self, fn: Callable[[T], U]) -> "Err[E]":
        return self

    def map_err(self, fn: Callable[[E], U]) -> "Err[U]":
        return Err(fn(self.error))


Result = Union[Ok[T], Err[E]]
