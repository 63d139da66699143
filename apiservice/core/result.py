from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from apiservice.core.errors import APIError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Terminal outcome of one call: exactly one of ``value`` or ``error``."""
    value: Optional[T] = None
    error: Optional[APIError] = None

    def __post_init__(self):
        if self.error is not None and self.value is not None:
            raise ValueError("Result cannot hold both a value and an error")

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: APIError) -> "Result[T]":
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None

    def unwrap(self) -> T:
        """Return the value, or raise the carried ``APIError``."""
        if self.error is not None:
            raise self.error
        return self.value
