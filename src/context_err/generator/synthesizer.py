"""Augmentation synthesizer: give each contextual case a message field.

A contextual case ``Io(OSError)`` becomes ``Io(OSError [source], str)``
displayed as ``"{1}"``; the named form ``Io { err: OSError }`` becomes
``Io { err: OSError [source], message: str }`` displayed as ``"{message}"``.
The wrapped value always comes first so conversions can build the case
positionally.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from .item import Attribute, TypeRef
from .model import Field

if TYPE_CHECKING:
    from context_err.foundation.config import GeneratorSettings

    from .model import AugmentedCase, Case, TypeDefinition

_STR = TypeRef.of(str)


def augment(case: Case, settings: GeneratorSettings) -> AugmentedCase:
    """Rewrite a contextual case; return any other case unchanged (same object)."""
    if not case.is_contextual:
        return case

    (wrapped,) = case.fields
    if not wrapped.has_attr(settings.source_attr):
        wrapped = replace(wrapped, attributes=(*wrapped.attributes, Attribute(name=settings.source_attr)))

    if wrapped.positional:
        message, template = Field(None, _STR), "{1}"
    else:
        message, template = Field(settings.message_field, _STR), f"{{{settings.message_field}}}"

    display = Attribute(name=settings.display_attr, value=template)
    return replace(case, fields=(wrapped, message), attributes=(*case.attributes, display))


def augment_all(definition: TypeDefinition, settings: GeneratorSettings) -> tuple[AugmentedCase, ...]:
    return tuple(augment(c, settings) for c in definition.cases)
