"""Outcome type for checks that fail as part of normal use."""

from typing import Generic, TypeVar

ValueT = TypeVar("ValueT")
ErrorT = TypeVar("ErrorT", bound=BaseException)


class Result(Generic[ValueT, ErrorT]):
    """
    Either a checked value or the error explaining why it was refused.

    Rejected readings and unparsable form input come back as ``err`` instead
    of raising, so callers decide which message to surface. Build one with
    ``Result.ok`` or ``Result.err``.
    """

    __slots__ = ("_value", "_error")

    def __init__(self, value: ValueT | None, error: ErrorT | None) -> None:
        if (value is None) == (error is None):
            raise ValueError("Result needs exactly one of value or error")
        self._value = value
        self._error = error

    @classmethod
    def ok(cls, value: ValueT) -> "Result[ValueT, ErrorT]":
        return cls(value, None)

    @classmethod
    def err(cls, error: ErrorT) -> "Result[ValueT, ErrorT]":
        return cls(None, error)

    def is_ok(self) -> bool:
        return self._error is None

    def is_err(self) -> bool:
        return self._error is not None

    def unwrap(self) -> ValueT:
        """Return the value, raising the carried error for a refused result."""
        if self._error is not None:
            raise self._error
        return self._value  # type: ignore[return-value]

    def unwrap_err(self) -> ErrorT:
        if self._error is None:
            raise ValueError("Called unwrap_err() on an Ok value")
        return self._error

    def __repr__(self) -> str:
        if self._error is not None:
            return f"Result.err({self._error!r})"
        return f"Result.ok({self._value!r})"
