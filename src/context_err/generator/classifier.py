"""Case classifier: tag each case Contextual(wrapped) or Opaque."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from context_err.foundation.errors import InvalidContextualCase, Rule

from .model import Case, Contextual, Opaque

if TYPE_CHECKING:
    from context_err.foundation.config import GeneratorSettings

    from .model import TypeDefinition

_OPAQUE = Opaque()


def classify(item: str, case: Case, settings: GeneratorSettings) -> Case:
    """Classify one case.

    Unmarked cases come back with fields and attributes untouched; an
    already-opaque case is returned as is.

    Raises:
        InvalidContextualCase: marked contextual but not exactly one field,
            or carrying its own display template, or its field already uses
            the message field name
    """
    if not case.contextual:
        return case if isinstance(case.kind, Opaque) else replace(case, kind=_OPAQUE)
    if isinstance(case.kind, Contextual):
        return case
    if len(case.fields) != 1:
        raise InvalidContextualCase(item, case.name, Rule.EXACTLY_ONE_FIELD)
    if case.attr(settings.display_attr) is not None:
        raise InvalidContextualCase(item, case.name, Rule.NO_DISPLAY_TEMPLATE)
    (wrapped,) = case.fields
    if wrapped.name == settings.message_field:
        raise InvalidContextualCase(item, case.name, Rule.MESSAGE_FIELD_FREE)
    return replace(case, kind=Contextual(wrapped.type))


def classify_all(definition: TypeDefinition, settings: GeneratorSettings) -> TypeDefinition:
    """Classify every case in declaration order; the first violation aborts."""
    return definition.with_cases(tuple(classify(definition.name, c, settings) for c in definition.cases))
