"""Tests for building a TypeDefinition from the structured item."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from context_err.foundation.config import GeneratorSettings
from context_err.foundation.errors import ErrorCode, InvalidOptions, MalformedItem
from context_err.generator import Attribute, ItemKind, RawItem, TypeRef, build_definition, resolve_capability

from .failures import IoFailure, NetworkFailure


def _enum(*cases: dict[str, Any], **extra: Any) -> RawItem:
    return RawItem.model_validate({"name": "Error", "kind": "enum", "cases": list(cases), **extra})


def test_enum_cases_keep_order_and_lose_marker(
    scenario_a: RawItem, settings: GeneratorSettings
) -> None:
    definition = build_definition(scenario_a, settings)

    assert definition.shape is ItemKind.ENUM
    assert [c.name for c in definition.cases] == ["Reqwest", "Io", "Config"]
    assert [c.contextual for c in definition.cases] == [True, True, False]
    assert all(a.name != "context" for c in definition.cases for a in c.attributes)
    assert definition.cases[2].attributes == (Attribute(name="display", value="invalid config: {0}"),)
    assert all(c.kind is None for c in definition.cases)


def test_struct_is_single_implicit_case(settings: GeneratorSettings) -> None:
    item = RawItem.model_validate({
        "name": "ReadFailed",
        "kind": "struct",
        "fields": [{"name": "source", "type": TypeRef.of(IoFailure)}],
        "attributes": [{"name": "context"}],
    })
    definition = build_definition(item, settings)

    assert definition.shape is ItemKind.STRUCT
    (case,) = definition.cases
    assert case.name == "ReadFailed"
    assert case.contextual
    assert case.fields[0].name == "source"
    assert case.fields[0].type.target is IoFailure


@pytest.mark.parametrize("kind", ["union", "function", "trait"])
def test_other_kinds_are_malformed(kind: str, settings: GeneratorSettings) -> None:
    with pytest.raises(MalformedItem) as info:
        build_definition(RawItem(name="thing", kind=kind), settings)
    assert info.value.item == "thing"
    assert info.value.code is ErrorCode.MALFORMED_ITEM
    assert "only works for structs and enums" in str(info.value)


def test_enum_without_cases_is_malformed(settings: GeneratorSettings) -> None:
    with pytest.raises(MalformedItem, match="at least one case"):
        build_definition(_enum(), settings)


def test_enum_with_fields_is_malformed(contextual: Callable[..., dict[str, Any]], settings: GeneratorSettings) -> None:
    item = _enum(contextual("Io", IoFailure), fields=[{"type": TypeRef.of(str)}])
    with pytest.raises(MalformedItem, match="not fields"):
        build_definition(item, settings)


def test_struct_with_cases_is_malformed(contextual: Callable[..., dict[str, Any]], settings: GeneratorSettings) -> None:
    item = RawItem.model_validate({"name": "S", "kind": "struct", "cases": [contextual("Io", IoFailure)]})
    with pytest.raises(MalformedItem, match="not cases"):
        build_definition(item, settings)


def test_duplicate_case_names_are_malformed(contextual: Callable[..., dict[str, Any]], settings: GeneratorSettings) -> None:
    item = _enum(contextual("Io", IoFailure), contextual("Io", NetworkFailure))
    with pytest.raises(MalformedItem, match="more than once"):
        build_definition(item, settings)


def test_case_named_like_capability_is_malformed(contextual: Callable[..., dict[str, Any]], settings: GeneratorSettings) -> None:
    with pytest.raises(MalformedItem, match="shadows"):
        build_definition(_enum(contextual("ContextErr", IoFailure)), settings)


# ─────────────────────────────────────────────────────────────────────────────
# Capability name resolution
# ─────────────────────────────────────────────────────────────────────────────


def test_default_capability_name(scenario_a: RawItem, settings: GeneratorSettings) -> None:
    assert resolve_capability(scenario_a, settings) == "ContextErr"
    assert resolve_capability(scenario_a, GeneratorSettings(default_capability="WithContext")) == "WithContext"


@pytest.mark.parametrize("key", ["trait", "capability"])
def test_capability_override(key: str, contextual: Callable[..., dict[str, Any]], settings: GeneratorSettings) -> None:
    item = _enum(contextual("Io", IoFailure), options={key: "ContextErr1"})
    assert build_definition(item, settings).capability == "ContextErr1"


@pytest.mark.parametrize(
    ("options", "message"),
    [
        ({"traits": "X"}, "unknown option `traits`"),
        ({"trait": "not valid"}, "identifier"),
        ({"trait": 3}, "identifier"),
        ({"trait": "A", "capability": "B"}, "more than once"),
    ],
)
def test_invalid_options(
    options: dict[str, Any], message: str, contextual: Callable[..., dict[str, Any]], settings: GeneratorSettings
) -> None:
    with pytest.raises(InvalidOptions, match=message) as info:
        build_definition(_enum(contextual("Io", IoFailure), options=options), settings)
    assert info.value.code is ErrorCode.INVALID_OPTIONS


def test_context_marker_on_enum_is_rejected(contextual: Callable[..., dict[str, Any]], settings: GeneratorSettings) -> None:
    item = _enum(contextual("Io", IoFailure), attributes=[{"name": "context"}])
    with pytest.raises(InvalidOptions, match="put it on a case"):
        build_definition(item, settings)


# ─────────────────────────────────────────────────────────────────────────────
# Contextual marker values
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, True), ("true", True), ("1", True), ("True", True), ("false", False), ("0", False), ("FALSE", False)],
)
def test_marker_value_is_read_as_boolean(value: str | None, expected: bool, settings: GeneratorSettings) -> None:
    item = _enum({"name": "Io", "fields": [{"type": TypeRef.of(IoFailure)}], "attributes": [{"name": "context", "value": value}]})
    (case,) = build_definition(item, settings).cases

    assert case.contextual is expected
    assert case.attributes == ()


def test_unparseable_marker_value_is_rejected(settings: GeneratorSettings) -> None:
    item = _enum({"name": "Io", "fields": [{"type": TypeRef.of(IoFailure)}], "attributes": [{"name": "context", "value": "maybe"}]})
    with pytest.raises(InvalidOptions, match="must be true or false") as info:
        build_definition(item, settings)
    assert "`Io`" in str(info.value)


def test_false_marker_on_struct_leaves_it_opaque(settings: GeneratorSettings) -> None:
    item = RawItem.model_validate({
        "name": "ReadFailed",
        "kind": "struct",
        "fields": [{"type": TypeRef.of(IoFailure)}, {"type": TypeRef.of(str)}],
        "attributes": [{"name": "context", "value": "false"}],
    })
    (case,) = build_definition(item, settings).cases
    assert not case.contextual


# ─────────────────────────────────────────────────────────────────────────────
# Names that clash with exception attributes
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.parametrize("name", ["args", "with_traceback", "add_note", "__cause__"])
def test_case_named_like_exception_attribute_is_malformed(
    name: str, contextual: Callable[..., dict[str, Any]], settings: GeneratorSettings
) -> None:
    item = _enum(contextual("Io", IoFailure), {"name": name, "fields": [{"type": TypeRef.of(str)}]})
    with pytest.raises(MalformedItem, match="clashes with an exception attribute"):
        build_definition(item, settings)


@pytest.mark.parametrize("name", ["args", "with_traceback", "__traceback__"])
def test_field_named_like_exception_attribute_is_malformed(
    name: str, contextual: Callable[..., dict[str, Any]], settings: GeneratorSettings
) -> None:
    with pytest.raises(MalformedItem, match=f"field `{name}` of `Io`"):
        build_definition(_enum(contextual("Io", IoFailure, field=name)), settings)


def test_struct_field_named_like_exception_attribute_is_malformed(settings: GeneratorSettings) -> None:
    item = RawItem.model_validate({"name": "ReadFailed", "kind": "struct", "fields": [{"name": "args", "type": TypeRef.of(str)}]})
    with pytest.raises(MalformedItem, match="field `args`"):
        build_definition(item, settings)


@pytest.mark.parametrize("name", ["class", "None", "lambda", "args"])
def test_capability_name_must_be_reachable_as_attribute(
    name: str, contextual: Callable[..., dict[str, Any]], settings: GeneratorSettings
) -> None:
    with pytest.raises(InvalidOptions, match="`trait`"):
        build_definition(_enum(contextual("Io", IoFailure), options={"trait": name}), settings)
