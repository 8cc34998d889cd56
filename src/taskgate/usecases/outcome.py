# src/taskgate/usecases/outcome.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from ..core.errors import TaskGateError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Outcome(Generic[T]):
    """
    Result of a use case: either `value` or `error`, never both.

    `error` is one of the kinds in core.errors, so callers can branch on its class
    (or call `unwrap()` to get exception-style control flow back).
    """

    value: T | None = None
    error: TaskGateError | None = None

    def __post_init__(self) -> None:
        if (self.value is None) == (self.error is None):
            raise ValueError("Outcome needs exactly one of value or error")

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: TaskGateError) -> Outcome[T]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        assert self.value is not None
        return self.value
