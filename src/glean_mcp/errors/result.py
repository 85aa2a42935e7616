"""Result/Either type for dispatch stages that must not raise.

A discriminated union of success (Ok) or failure (Err). The dispatch router
chains its stages through Results so that no failure crosses the protocol
boundary as an exception.

Examples:
    >>> Ok(42).flat_map(lambda x: Ok(x * 2)).unwrap()
    84
    >>> Err("fail").flat_map(lambda x: Ok(x * 2)).unwrap_err()
    'fail'
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")

_OK = True
_ERR = False


class Result(Generic[T, E]):
    """Success (Ok) or failure (Err) with railway-style composition."""

    __slots__ = ("_value", "_is_ok")
    __match_args__ = ("_value",)

    def __init__(self, value: T | E, is_ok: bool) -> None:
        self._value = value
        self._is_ok = is_ok

    def is_ok(self) -> bool:
        return self._is_ok

    def unwrap(self) -> T:
        """Extract Ok value. Raises RuntimeError on Err."""
        if self._is_ok:
            return self._value  # type: ignore[return-value]
        raise RuntimeError(f"unwrap() on Err: {self._value}")

    def unwrap_err(self) -> E:
        """Extract Err value. Raises RuntimeError on Ok."""
        if not self._is_ok:
            return self._value  # type: ignore[return-value]
        raise RuntimeError(f"unwrap_err() on Ok: {self._value}")

    def flat_map(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain a step that can itself fail."""
        return f(self._value) if self._is_ok else Result(self._value, _ERR)  # type: ignore[arg-type]

    def match(self, *, ok: Callable[[T], U], err: Callable[[E], U]) -> U:
        """Fold both variants into one value."""
        return ok(self._value) if self._is_ok else err(self._value)  # type: ignore[arg-type]

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Result) and self._is_ok == other._is_ok and self._value == other._value

    def __repr__(self) -> str:
        return f"Ok({self._value!r})" if self._is_ok else f"Err({self._value!r})"


def Ok(value: T) -> Result[T, E]:  # noqa: N802
    """Construct the success variant."""
    return Result(value, _OK)


def Err(error: E) -> Result[T, E]:  # noqa: N802
    """Construct the failure variant."""
    return Result(error, _ERR)
