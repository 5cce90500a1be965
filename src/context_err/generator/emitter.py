"""Capability emitter: one declaration plus one realization per wrapped type."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .model import CapabilityDecl, Realization

if TYPE_CHECKING:
    from context_err.foundation.config import GeneratorSettings

    from .model import CapabilityScope, Entry


def declare(scope: CapabilityScope, target: str, settings: GeneratorSettings) -> CapabilityDecl:
    """Declaration of the generic conversion operation for ``target``."""
    return CapabilityDecl(name=scope.name, operation=settings.operation, target=target)


def realize(scope: CapabilityScope, entry: Entry) -> Realization:
    """Conversion of ``Result[T, entry.wrapped]`` into the entry's case.

    The synthesizer put the wrapped field first and the message second, so
    field names (or positions) are read straight off the augmented case.
    """
    wrapped, message = entry.case.fields
    return Realization(
        capability=scope.name,
        wrapped=entry.wrapped,
        case=entry.case.name,
        source_field=wrapped.name,
        message_field=message.name,
    )


def emit(scope: CapabilityScope, target: str, settings: GeneratorSettings) -> tuple[CapabilityDecl, tuple[Realization, ...]]:
    return declare(scope, target, settings), tuple(realize(scope, e) for e in scope.entries.values())
