"""Tagged success/failure values returned by the data-access layer."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True, slots=True)
class Result(Generic[T, E]):
    """Outcome of an operation that reports failure instead of raising.

    Exactly one of `value` (on success) or `error` (on failure) is meaningful;
    a successful result may still carry `value=None` for operations with
    nothing to return.
    """

    value: T | None = None
    error: E | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T | None = None) -> "Result[T, E]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: E) -> "Result[T, E]":
        return cls(error=error)

    def unwrap(self) -> T:
        """Return the value, raising the carried error on failure."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
