"""Shared fixtures for generator tests."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from context_err.foundation.config import GeneratorSettings, clear_settings_cache
from context_err.generator import RawItem, TypeRef

from .failures import IoFailure, NetworkFailure


@pytest.fixture(autouse=True)
def clean_settings() -> object:
    """Reload settings from a clean environment around each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def settings() -> GeneratorSettings:
    return GeneratorSettings()


@pytest.fixture
def contextual() -> Callable[..., dict[str, Any]]:
    """Build a contextual case mapping wrapping ``tp`` (positional unless ``field`` is named)."""

    def build(name: str, tp: type, *, field: str | None = None, attributes: tuple[dict[str, Any], ...] = ()) -> dict[str, Any]:
        return {
            "name": name,
            "fields": [{"name": field, "type": TypeRef.of(tp)}],
            "attributes": [{"name": "context"}, *attributes],
        }

    return build


@pytest.fixture
def scenario_a(contextual: Callable[..., dict[str, Any]]) -> RawItem:
    """``Error { Reqwest(context NetworkFailure), Io(context IoFailure), Config(str) }``."""
    return RawItem.model_validate({
        "name": "Error",
        "kind": "enum",
        "cases": [
            contextual("Reqwest", NetworkFailure),
            contextual("Io", IoFailure),
            {
                "name": "Config",
                "fields": [{"type": TypeRef.of(str)}],
                "attributes": [{"name": "display", "value": "invalid config: {0}"}],
            },
        ],
    })
