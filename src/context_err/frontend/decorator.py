"""Class decorator front end.

Reads a class body into a RawItem, generates, and hands back the
materialized error taxonomy.

Enum form (cases declared in the body):
    >>> @derive_context_err
    ... class AppError(Exception):
    ...     Io = case(OSError, context=True)
    ...
    ...     @case(context=True)
    ...     class Http:
    ...         err: httpx.HTTPError
    ...
    ...     Config = case(str, display="invalid config: {0}")
    >>>
    >>> AppError.ContextErr.context(Err(OSError("denied")), "loading settings")
    Err(AppError.Io(OSError('denied'), 'loading settings'))

Struct form (fields declared in the body):
    >>> @derive_context_err(trait="ReadContext", context=True)
    ... class ReadFailed(Exception):
    ...     source: OSError
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Annotated, Any, Callable, Iterable, TypeVar, get_args, get_origin, overload

from context_err.foundation.config import get_settings
from context_err.generator import Attribute, ItemKind, RawCase, RawField, RawItem, TypeRef, generate
from context_err.runtime import materialize

if TYPE_CHECKING:
    from context_err.foundation.config import GeneratorSettings
    from context_err.runtime import ErrorCase

logger = logging.getLogger("context_err.frontend")

C = TypeVar("C", bound=type)


class _SourceMarker:
    """``Annotated`` metadata marking a named field as the causal source."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "SOURCE"


SOURCE = _SourceMarker()


@dataclass(frozen=True, slots=True)
class CaseDecl:
    """A case declared in a class body; produced by case()."""

    fields: tuple[tuple[str | None, Any], ...] = ()
    context: bool = False
    display: str | None = None
    source: int | str | None = None
    attributes: tuple[Attribute, ...] = ()

    def __call__(self, cls: type) -> CaseDecl:
        """Take named fields from the annotations of a nested class."""
        if self.fields:
            raise TypeError("case() given positional field types cannot also decorate a class")
        return replace(self, fields=tuple(inspect.get_annotations(cls, eval_str=True).items()))


def case(
    *types: Any,
    context: bool = False,
    display: str | None = None,
    source: int | str | None = None,
    attributes: Iterable[Attribute] = (),
) -> CaseDecl:
    """Declare a case.

    Args:
        *types: positional field types; omit them to decorate a nested class instead
        context: mark the case contextual (exactly one field, no display)
        display: ``str.format`` template rendered by ``str(err)``
        source: index or name of the field holding the causal source
        attributes: further attributes passed through untouched
    """
    return CaseDecl(tuple((None, t) for t in types), context, display, source, tuple(attributes))


def _copyable(name: str, value: object) -> bool:
    """Class attributes carried over from the decorated class onto the generated root."""
    return not (name.startswith("__") and name.endswith("__")) and not isinstance(value, CaseDecl)


def _raw_field(name: str | None, annotation: Any, is_source: bool, settings: GeneratorSettings) -> RawField:
    attrs: list[Attribute] = []
    if get_origin(annotation) is Annotated:
        annotation, *meta = get_args(annotation)
        for m in meta:
            if m is SOURCE:
                attrs.append(Attribute(name=settings.source_attr))
            elif isinstance(m, Attribute):
                attrs.append(m)
    if is_source and not any(a.name == settings.source_attr for a in attrs):
        attrs.append(Attribute(name=settings.source_attr))
    if isinstance(annotation, type):
        ref = TypeRef.of(annotation)
    else:
        ref = TypeRef(name=getattr(annotation, "__qualname__", None) or repr(annotation))
    return RawField(name=name, type=ref, attributes=tuple(attrs))


def _raw_fields(decl_fields: Iterable[tuple[str | None, Any]], source: int | str | None, settings: GeneratorSettings) -> tuple[RawField, ...]:
    return tuple(
        _raw_field(name, ann, source is not None and source in (i, name), settings)
        for i, (name, ann) in enumerate(decl_fields)
    )


def _attributes(context: bool, display: str | None, extra: Iterable[Attribute], settings: GeneratorSettings) -> tuple[Attribute, ...]:
    attrs = list(extra)
    if context:
        attrs.append(Attribute(name=settings.context_marker))
    if display is not None:
        attrs.append(Attribute(name=settings.display_attr, value=display))
    return tuple(attrs)


def read_item(
    target: object,
    *,
    options: dict[str, Any],
    context: bool = False,
    display: str | None = None,
    settings: GeneratorSettings,
) -> RawItem:
    """Describe a decorated object as a RawItem.

    Anything that is not a class is described with its own kind so the
    generator rejects it like any other malformed item.
    """
    if not isinstance(target, type):
        kind = "function" if callable(target) else type(target).__name__
        return RawItem(name=getattr(target, "__name__", repr(target)), kind=kind, options=options)

    item_attrs = _attributes(context, display, (), settings)
    decls = [(name, v) for name, v in vars(target).items() if isinstance(v, CaseDecl)]
    own_fields = inspect.get_annotations(target, eval_str=True)

    if not decls:
        return RawItem(
            name=target.__name__,
            kind=ItemKind.STRUCT,
            fields=_raw_fields(own_fields.items(), None, settings),
            attributes=item_attrs,
            options=options,
        )
    # Fields next to cases are reported by the builder
    fields = _raw_fields(own_fields.items(), None, settings)
    cases = tuple(
        RawCase(
            name=name,
            fields=_raw_fields(d.fields, d.source, settings),
            attributes=_attributes(d.context, d.display, d.attributes, settings),
        )
        for name, d in decls
    )
    return RawItem(name=target.__name__, kind=ItemKind.ENUM, cases=cases, fields=fields,
                   attributes=item_attrs, options=options)


def _apply(target: C, options: dict[str, Any], context: bool, display: str | None,
           settings: GeneratorSettings | None) -> type[ErrorCase]:
    cfg = settings or get_settings().generator
    item = read_item(target, options=options, context=context, display=display, settings=cfg)
    artifact = generate(item, cfg)

    root = materialize(artifact, bases=target.__bases__, module=target.__module__, settings=cfg)
    root.__qualname__ = target.__qualname__
    root.__doc__ = target.__doc__
    for name, value in vars(target).items():
        if _copyable(name, value):
            setattr(root, name, value)
    logger.debug("derived %s from %s.%s", artifact.capability, target.__module__, target.__qualname__)
    return root


@overload
def derive_context_err(target: C, /) -> type[ErrorCase]: ...
@overload
def derive_context_err(
    target: None = None, /, *, trait: str | None = ..., context: bool = ..., display: str | None = ...,
    settings: GeneratorSettings | None = ..., **options: Any,
) -> Callable[[C], type[ErrorCase]]: ...


def derive_context_err(
    target: Any = None,
    /,
    *,
    trait: str | None = None,
    context: bool = False,
    display: str | None = None,
    settings: GeneratorSettings | None = None,
    **options: Any,
) -> Any:
    """Generate an error taxonomy with a context capability from a class.

    Usable bare (``@derive_context_err``) or with arguments.

    Args:
        trait: capability name (defaults to ``GeneratorSettings.default_capability``)
        context: struct form only; mark the struct's single field contextual
        display: struct form only; display template
        settings: generator settings override
        **options: further item options (unknown ones are rejected)

    Raises:
        GenerationError: the class does not describe a valid taxonomy
    """
    if trait is not None:
        options["trait"] = trait

    if target is not None:
        return _apply(target, options, context, display, settings)

    def decorator(cls: C) -> type[ErrorCase]:
        return _apply(cls, options, context, display, settings)

    return decorator
