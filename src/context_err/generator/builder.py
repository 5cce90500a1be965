"""Item model builder: RawItem -> TypeDefinition.

Resolves the capability name from item options and separates the
generator's contextual marker from the attributes it leaves untouched.
"""

from __future__ import annotations

import keyword
from typing import TYPE_CHECKING

from context_err.foundation.errors import InvalidOptions, MalformedItem

from .item import ItemKind
from .model import Case, Field, TypeDefinition

if TYPE_CHECKING:
    from context_err.foundation.config import GeneratorSettings

    from .item import Attribute, RawField, RawItem

# Option name -> canonical option; "trait" follows the attribute argument convention
_OPTION_ALIASES: dict[str, str] = {"trait": "trait", "capability": "trait"}

# Accepted values of the contextual marker; a bare marker means true
_MARKER_VALUES: dict[str | None, bool] = {None: True, "true": True, "1": True, "false": False, "0": False}

# Attribute names the generated exception classes and their instances already use
RESERVED_NAMES = frozenset(dir(BaseException)) | {
    "__notes__", "__capability__", "__artifact__", "_case_fields", "_display", "_source", "_abstract",
}


def resolve_capability(item: RawItem, settings: GeneratorSettings) -> str:
    """Capability name for the item: explicit override, else the configured default."""
    chosen: dict[str, object] = {}
    for key, value in item.options.items():
        if (canonical := _OPTION_ALIASES.get(key)) is None:
            raise InvalidOptions(item.name, f"unknown option `{key}` (expected one of: trait)")
        if canonical in chosen:
            raise InvalidOptions(item.name, f"option `{canonical}` given more than once")
        chosen[canonical] = value

    name = chosen.get("trait")
    if name is None:
        return settings.default_capability
    if not isinstance(name, str) or not name.isidentifier() or keyword.iskeyword(name):
        raise InvalidOptions(item.name, f"`trait` must be an identifier string, got {name!r}")
    if name in RESERVED_NAMES:
        raise InvalidOptions(item.name, f"`trait` {name!r} clashes with an exception attribute")
    return name


def _fields(raw: tuple[RawField, ...]) -> tuple[Field, ...]:
    return tuple(Field(f.name, f.type, f.attributes) for f in raw)


def _is_contextual(item: str, case: str, markers: list[Attribute]) -> bool:
    contextual = False
    for m in markers:
        value = m.value.strip().lower() if m.value is not None else None
        if value not in _MARKER_VALUES:
            raise InvalidOptions(item, f"`{m.name}` on case `{case}` must be true or false, got {m.value!r}")
        contextual = contextual or _MARKER_VALUES[value]
    return contextual


def _case(item: str, name: str, raw_fields: tuple[RawField, ...], attributes: tuple[Attribute, ...], marker: str) -> Case:
    kept = tuple(a for a in attributes if a.name != marker)
    markers = [a for a in attributes if a.name == marker]
    return Case(name, _fields(raw_fields), kept, contextual=_is_contextual(item, name, markers))


def build_definition(item: RawItem, settings: GeneratorSettings) -> TypeDefinition:
    """Turn the structured item into a TypeDefinition.

    Raises:
        MalformedItem: item is neither an enum with cases nor a struct, or a
            case or field name clashes with an exception attribute
        InvalidOptions: item-level options or a contextual marker value cannot be parsed
    """
    marker = settings.context_marker
    capability = resolve_capability(item, settings)

    match item.kind:
        case ItemKind.ENUM:
            if item.fields:
                raise MalformedItem(item.name, "an enum declares cases, not fields")
            if not item.cases:
                raise MalformedItem(item.name, "an enum needs at least one case")
            if any(a.name == marker for a in item.attributes):
                raise InvalidOptions(item.name, f"`{marker}` marks a case; put it on a case, not on the enum")
            cases = tuple(_case(item.name, c.name, c.fields, c.attributes, marker) for c in item.cases)
            definition = TypeDefinition(item.name, ItemKind.ENUM, cases, capability, item.attributes)
        case ItemKind.STRUCT:
            if item.cases:
                raise MalformedItem(item.name, "a struct declares fields, not cases")
            case = _case(item.name, item.name, item.fields, item.attributes, marker)
            definition = TypeDefinition(item.name, ItemKind.STRUCT, (case,), capability)
        case other:
            raise MalformedItem(item.name, f"derive_context_err only works for structs and enums, not `{other}`")

    seen: set[str] = set()
    for case in definition.cases:
        if case.name in seen:
            raise MalformedItem(item.name, f"case `{case.name}` is declared more than once")
        if definition.shape is ItemKind.ENUM and case.name == capability:
            raise MalformedItem(item.name, f"case `{case.name}` shadows the capability of the same name")
        if definition.shape is ItemKind.ENUM and case.name in RESERVED_NAMES:
            raise MalformedItem(item.name, f"case `{case.name}` clashes with an exception attribute")
        for f in case.fields:
            if f.name in RESERVED_NAMES:
                raise MalformedItem(item.name, f"field `{f.name}` of `{case.name}` clashes with an exception attribute")
        seen.add(case.name)
    return definition
