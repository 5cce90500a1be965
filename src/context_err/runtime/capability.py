"""Generated context capability.

One declared operation (``context`` by default) shared by every wrapped
failure type; the conversion is picked by single dispatch on the failure's
type, so call sites never name the case they are building.

Example:
    >>> ContextErr = AppError.ContextErr
    >>> ContextErr.context(Err(OSError("denied")), "reading config").unwrap_err()
    AppError.Io(OSError('denied'), 'reading config')
    >>> with ContextErr.wrap("reading config"):
    ...     open("/root/secret")
    Traceback (most recent call last):
    AppError.Io: reading config
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from functools import singledispatch
from typing import TYPE_CHECKING, Any, Callable, Generic, Mapping, ParamSpec, TypeVar

from context_err.foundation.errors import Err, Ok, Result

if TYPE_CHECKING:
    from collections.abc import Iterator

    from context_err.generator import CapabilityDecl

logger = logging.getLogger("context_err.runtime")

T = TypeVar("T")
E = TypeVar("E", bound=BaseException)
P = ParamSpec("P")

Conversion = Callable[[Any, str], E]


class Capability(Generic[E]):
    """Conversion facility from ``Result[T, wrapped]`` to ``Result[T, target]``.

    Each instance belongs to exactly one generated item. Items sharing a
    capability name still get distinct instances; reach the intended one
    through its item (``AppError.ContextErr``) to disambiguate.
    """

    __slots__ = ("name", "operation", "target", "_dispatch", "_fallback")

    def __init__(self, declaration: CapabilityDecl, target: type[E], conversions: Mapping[type, Conversion[E]]) -> None:
        self.name = declaration.name
        self.operation = declaration.operation
        self.target = target

        def unsupported(failure: object, message: str) -> E:
            raise TypeError(f"{self.name} has no conversion from {type(failure).__qualname__} to {target.__qualname__}")

        self._dispatch = singledispatch(unsupported)
        self._fallback = unsupported
        for tp, conversion in conversions.items():
            self._dispatch.register(tp, conversion)

    @property
    def types(self) -> tuple[type, ...]:
        """Wrapped failure types, in registration order."""
        return tuple(tp for tp in self._dispatch.registry if tp is not object)

    def supports(self, tp: type) -> bool:
        """Whether failures of type ``tp`` (or a registered base of it) convert."""
        return self._dispatch.dispatch(tp) is not self._fallback

    def convert(self, failure: Any, ctx: object) -> E:
        """Build the case claiming ``type(failure)`` from the failure and ``str(ctx)``.

        Raises:
            TypeError: no conversion is registered for the failure's type
        """
        return self._dispatch(failure, str(ctx))

    def context(self, result: Result[T, Any], ctx: object) -> Result[T, E]:
        """Attach ``ctx`` to a failed result; successes pass through unchanged."""
        return result.map_err(lambda failure: self.convert(failure, ctx))

    def with_context(self, result: Result[T, Any], ctx: Callable[[], object]) -> Result[T, E]:
        """Like context(), but ``ctx`` is only computed on failure."""
        return result.map_err(lambda failure: self.convert(failure, ctx()))

    @contextmanager
    def wrap(self, ctx: object) -> Iterator[None]:
        """Re-raise supported exceptions from the block as the target case.

        The original exception becomes ``__cause__``; anything unsupported
        propagates untouched.
        """
        try:
            yield
        except Exception as exc:
            if not self.supports(type(exc)):
                raise
            converted = self.convert(exc, ctx)
            logger.debug("%s: %s -> %s", self.name, type(exc).__qualname__, type(converted).__qualname__)
            raise converted from exc

    def attempt(self, fn: Callable[P, T], *args: P.args, context: object, **kwargs: P.kwargs) -> Result[T, E]:
        """Call fn; a supported exception becomes Err(case), others propagate."""
        try:
            return Ok(fn(*args, **kwargs))
        except Exception as exc:
            if not self.supports(type(exc)):
                raise
            return Err(self.convert(exc, context))

    def __getattr__(self, name: str) -> Any:
        # The operation is reachable under its configured name as well
        if name not in Capability.__slots__ and name == self.operation:
            return self.context
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __contains__(self, tp: object) -> bool:
        return isinstance(tp, type) and self.supports(tp)

    def __len__(self) -> int:
        return len(self._dispatch.registry) - 1

    def __repr__(self) -> str:
        wrapped = ", ".join(tp.__qualname__ for tp in self.types)
        return f"<{self.name} for {self.target.__qualname__}: {wrapped}>"
