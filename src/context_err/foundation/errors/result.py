"""Result/Either monad carrying a success value or a failure.

The context capability converts ``Result[T, E]`` into ``Result[T, Target]``
where ``Target`` is the generated error taxonomy, so this is the shape every
conversion consumes and produces.

Performance notes:
- Uses __slots__ for minimal memory footprint
- Direct attribute access in hot paths
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, ParamSpec, TypeVar, cast

if TYPE_CHECKING:
    from collections.abc import Iterator

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")
P = ParamSpec("P")

_OK = True
_ERR = False


class Result(Generic[T, E]):
    """Discriminated union representing success (Ok) or failure (Err).

    Examples:
        >>> Ok(42).map(lambda x: x * 2).unwrap()
        84
        >>> Err("failed").map(lambda x: x * 2).unwrap_err()
        'failed'
    """

    __slots__ = ("_value", "_is_ok")
    __match_args__ = ("_value",)

    def __init__(self, value: T | E, is_ok: bool) -> None:
        """Private constructor. Use Ok() or Err() instead."""
        self._value = value
        self._is_ok = is_ok

    def is_ok(self) -> bool:
        return self._is_ok

    def is_err(self) -> bool:
        return not self._is_ok

    def unwrap(self) -> T:
        """Extract Ok value.

        Raises:
            RuntimeError: If Result is Err (chained to the failure when it is an exception)
        """
        if self._is_ok:
            return cast(T, self._value)
        cause = self._value if isinstance(self._value, BaseException) else None
        raise RuntimeError(f"Called unwrap() on Err value: {self._value}") from cause

    def unwrap_err(self) -> E:
        """Extract Err value.

        Raises:
            RuntimeError: If Result is Ok
        """
        if not self._is_ok:
            return cast(E, self._value)
        raise RuntimeError(f"Called unwrap_err() on Ok value: {self._value!r}")

    def unwrap_or(self, default: T) -> T:
        return cast(T, self._value) if self._is_ok else default

    def expect(self, msg: str) -> T:
        if self._is_ok:
            return cast(T, self._value)
        raise RuntimeError(f"{msg}: {self._value}")

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        """Apply f to the Ok value, preserve Err unchanged."""
        return Result(f(cast(T, self._value)), _OK) if self._is_ok else cast("Result[U, E]", self)

    def map_err(self, f: Callable[[E], F]) -> Result[T, F]:
        """Apply f to the Err value, preserve Ok unchanged.

        This is the hook conversions use: f runs only on failure.
        """
        return Result(f(cast(E, self._value)), _ERR) if not self._is_ok else cast("Result[T, F]", self)

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Monadic bind - chain operations that can fail."""
        return f(cast(T, self._value)) if self._is_ok else cast("Result[U, E]", self)

    def ok(self) -> T | None:
        return cast(T, self._value) if self._is_ok else None

    def err(self) -> E | None:
        return cast(E, self._value) if not self._is_ok else None

    def match(self, *, ok: Callable[[T], U], err: Callable[[E], U]) -> U:
        """Exhaustive case analysis."""
        return ok(cast(T, self._value)) if self._is_ok else err(cast(E, self._value))

    def __bool__(self) -> bool:
        return self._is_ok

    def __repr__(self) -> str:
        return f"{'Ok' if self._is_ok else 'Err'}({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return self._is_ok == other._is_ok and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._is_ok, self._value))

    def __iter__(self) -> Iterator[T]:
        """Yield the Ok value, if any."""
        if self._is_ok:
            yield cast(T, self._value)


def Ok(value: T) -> Result[T, E]:  # noqa: N802
    """Construct Ok variant (success)."""
    return Result(value, _OK)


def Err(error: E) -> Result[T, E]:  # noqa: N802
    """Construct Err variant (failure)."""
    return Result(error, _ERR)


def try_fn(
    fn: Callable[P, T],
    *args: P.args,
    catch: tuple[type[BaseException], ...] = (Exception,),
    **kwargs: P.kwargs,
) -> Result[T, BaseException]:
    """Call fn, capturing exceptions of the given types as Err.

    Exceptions outside ``catch`` propagate unchanged.

    Example:
        >>> try_fn(int, "42").unwrap()
        42
        >>> isinstance(try_fn(int, "x", catch=(ValueError,)).unwrap_err(), ValueError)
        True
    """
    try:
        return Ok(fn(*args, **kwargs))
    except catch as exc:
        return Err(exc)
