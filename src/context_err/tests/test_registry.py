"""Tests for the per-capability wrapped-type registry."""

from __future__ import annotations

import pytest

from context_err.foundation.config import GeneratorSettings
from context_err.foundation.errors import DuplicateWrappedType, ErrorCode
from context_err.generator import Case, CapabilityRegistry, Field, TypeRef, augment, classify

from .failures import IoFailure, NetworkFailure


def _case(name: str, tp: type, settings: GeneratorSettings, *, contextual: bool = True) -> Case:
    return augment(classify("Error", Case(name, (Field(None, TypeRef.of(tp)),), contextual=contextual), settings), settings)


def test_registers_contextual_and_skips_opaque(settings: GeneratorSettings) -> None:
    registry = CapabilityRegistry("ContextErr", item="Error")
    added = registry.register_all([
        _case("Reqwest", NetworkFailure, settings),
        _case("Plain", IoFailure, settings, contextual=False),
        _case("Io", IoFailure, settings),
    ])

    assert added == 2
    assert len(registry) == 2
    scope = registry.scope()
    assert scope.name == "ContextErr"
    assert [e.case.name for e in scope.entries.values()] == ["Reqwest", "Io"]
    assert TypeRef.of(IoFailure).key in scope


def test_duplicate_wrapped_type_names_both_cases(settings: GeneratorSettings) -> None:
    registry = CapabilityRegistry("ContextErr", item="Error")
    registry.register(_case("A", IoFailure, settings))

    with pytest.raises(DuplicateWrappedType) as info:
        registry.register(_case("B", IoFailure, settings))

    err = info.value
    assert err.code is ErrorCode.DUPLICATE_WRAPPED_TYPE
    assert err.wrapped_type.endswith("IoFailure")
    assert (err.first_case, err.second_case, err.scope) == ("A", "B", "ContextErr")
    assert "IoFailure" in str(err) and "`A`" in str(err) and "`B`" in str(err)
    assert len(registry) == 1


def test_scope_is_a_read_only_snapshot(settings: GeneratorSettings) -> None:
    registry = CapabilityRegistry("ContextErr", item="Error")
    registry.register(_case("Io", IoFailure, settings))
    scope = registry.scope()

    registry.register(_case("Reqwest", NetworkFailure, settings))
    assert len(scope) == 1
    with pytest.raises(TypeError):
        scope.entries["x"] = scope.entries[TypeRef.of(IoFailure).key]  # type: ignore[index]


def test_registries_with_the_same_name_are_independent(settings: GeneratorSettings) -> None:
    first = CapabilityRegistry("ContextErr", item="First")
    second = CapabilityRegistry("ContextErr", item="Second")

    first.register(_case("Io", IoFailure, settings))
    assert second.register(_case("Io", IoFailure, settings))
    assert len(first) == len(second) == 1
