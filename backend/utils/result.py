"""
Result type for expected failures.

Service methods whose failure is part of the normal contract (a lookup that
finds nothing) return a Result instead of raising, so callers have to look
at the outcome before using the value.
"""

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar, cast

T = TypeVar('T')
E = TypeVar('E')
U = TypeVar('U')


@dataclass(frozen=True)
class Result(Generic[T, E]):
    """
    Either a success value (Ok) or an error (Err).

    Usage:
        result = service.get_user_by_id(1)
        if result.is_ok:
            use(result.value)
        else:
            handle(result.error)
    """

    _value: Optional[T]
    _error: Optional[E]
    _is_ok: bool

    @classmethod
    def ok(cls, value: T) -> "Result[T, E]":
        return cls(_value=value, _error=None, _is_ok=True)

    @classmethod
    def err(cls, error: E) -> "Result[T, E]":
        return cls(_value=None, _error=error, _is_ok=False)

    @property
    def is_ok(self) -> bool:
        return self._is_ok

    @property
    def is_err(self) -> bool:
        return not self._is_ok

    @property
    def value(self) -> T:
        """Return the Ok value. Raises ValueError on an Err result."""
        if not self._is_ok:
            raise ValueError("Cannot access value on Err result")
        return cast(T, self._value)

    @property
    def error(self) -> E:
        """Return the Err value. Raises ValueError on an Ok result."""
        if self._is_ok:
            raise ValueError("Cannot access error on Ok result")
        return cast(E, self._error)

    def unwrap(self) -> T:
        """
        Return the Ok value, or raise the error.

        Exceptions held in Err are raised as-is; any other error value is
        wrapped in ValueError.
        """
        if self._is_ok:
            return cast(T, self._value)
        if isinstance(self._error, BaseException):
            raise self._error
        raise ValueError(str(self._error))

    def unwrap_or(self, default: T) -> T:
        if self._is_ok:
            return cast(T, self._value)
        return default

    def map(self, fn: Callable[[T], U]) -> "Result[U, E]":
        if self._is_ok:
            return Result.ok(fn(cast(T, self._value)))
        return Result.err(cast(E, self._error))

    def __repr__(self) -> str:
        if self._is_ok:
            return f"Ok({self._value!r})"
        return f"Err({self._error!r})"
