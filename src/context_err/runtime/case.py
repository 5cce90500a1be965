"""Exception base for materialized error cases.

Plays the role of the error derivation: binds declared fields, renders the
display template with ``str.format`` and chains the causal source through
``__cause__``. Field values live in ``args`` (so cases pickle like any
exception) and named fields are also plain attributes.
"""

from __future__ import annotations

from typing import Any, ClassVar


class ErrorCase(Exception):
    """Base class for every generated error case.

    Example:
        >>> err = AppError.Io(OSError("disk full"), "writing cache")
        >>> str(err)
        'writing cache'
        >>> source_of(err)
        OSError('disk full')
    """

    _case_fields: ClassVar[tuple[str | None, ...]] = ()
    _display: ClassVar[str | None] = None
    _source: ClassVar[int | None] = None
    _abstract: ClassVar[bool] = False

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        cls = type(self)
        if cls._abstract:
            raise TypeError(f"{cls.__qualname__} cannot be instantiated; construct one of its cases")
        values = _bind(cls, args, kwargs)
        super().__init__(*values)
        for name, value in zip(cls._case_fields, values):
            if name is not None:
                setattr(self, name, value)
        if cls._source is not None and isinstance(cause := values[cls._source], BaseException):
            self.__cause__ = cause

    def __str__(self) -> str:
        cls = type(self)
        if cls._display is not None:
            named = {n: v for n, v in zip(cls._case_fields, self.args) if n is not None}
            return cls._display.format(*self.args, **named)
        if not self.args:
            return cls.__name__
        return f"{cls.__name__}({', '.join(map(repr, self.args))})"

    def __repr__(self) -> str:
        cls = type(self)
        parts = (repr(v) if n is None else f"{n}={v!r}" for n, v in zip(cls._case_fields, self.args))
        return f"{cls.__qualname__}({', '.join(parts)})"


def _bind(cls: type[ErrorCase], args: tuple[Any, ...], kwargs: dict[str, Any]) -> tuple[Any, ...]:
    """Match positional and keyword arguments onto the declared fields."""
    fields = cls._case_fields
    if len(args) > len(fields):
        raise TypeError(f"{cls.__qualname__} takes {len(fields)} field(s) but {len(args)} were given")
    values = list(args)
    for name in fields[len(args):]:
        if name is None or name not in kwargs:
            raise TypeError(f"{cls.__qualname__} missing field {name or len(values)!r}")
        values.append(kwargs.pop(name))
    if kwargs:
        raise TypeError(f"{cls.__qualname__} got unexpected field(s): {', '.join(sorted(kwargs))}")
    return tuple(values)


def fields_of(err: ErrorCase) -> tuple[Any, ...]:
    """Field values in declaration order."""
    return err.args


def source_of(err: ErrorCase) -> Any:
    """The causal source value of a case, or None if it declares none."""
    index = type(err)._source
    return None if index is None else err.args[index]
