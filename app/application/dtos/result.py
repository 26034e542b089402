"""Result wrapper: failures returned as values instead of raised across layers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a search operation: either a value or an error message and code.

    The API layer turns failures into SearchFailedException; use cases never
    raise for expected failures (partial outage, timeout, cancellation).
    """

    value: T | None = None
    error: str | None = None
    error_code: str | None = None

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None

    def unwrap(self) -> T:
        """Return the value; raise ValueError when called on a failure."""
        if self.error is not None:
            raise ValueError(f"Cannot unwrap failed result: {self.error}")
        return self.value  # type: ignore[return-value]

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: str, error_code: str = "SEARCH_FAILED") -> Result[T]:
        return cls(error=error, error_code=error_code)
