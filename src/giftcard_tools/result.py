"""
Result: success value or typed error, returned by every operation client.
"""

from typing import Generic, Optional, TypeVar

from giftcard_tools.errors import GiftCardError

T = TypeVar("T")


class Result(Generic[T]):
    __slots__ = ("value", "error")

    def __init__(self, value: Optional[T] = None, error: Optional[GiftCardError] = None):
        if error is not None and value is not None:
            raise ValueError("Result cannot hold both a value and an error")
        self.value = value
        self.error = error

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: GiftCardError) -> "Result[T]":
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise the held error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def __repr__(self) -> str:
        if self.error is not None:
            return f"Result(error={self.error.code!r}: {self.error.message!r})"
        return f"Result(value={self.value!r})"
