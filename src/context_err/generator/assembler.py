"""Output assembler: rewritten item + capability declaration + realizations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .item import Attribute, ItemKind, RawCase, RawField, RawItem
from .model import GeneratedArtifact

if TYPE_CHECKING:
    from context_err.foundation.config import GeneratorSettings

    from .model import AugmentedCase, CapabilityDecl, Field, Realization, TypeDefinition

# Value of the derive attribute handed to the error derivation
DERIVE_ERROR = "Error"


def _raw_fields(fields: tuple[Field, ...]) -> tuple[RawField, ...]:
    return tuple(RawField(name=f.name, type=f.type, attributes=f.attributes) for f in fields)


def to_raw_item(
    definition: TypeDefinition,
    cases: tuple[AugmentedCase, ...],
    settings: GeneratorSettings,
) -> RawItem:
    """Express the augmented cases in the structural form the input used.

    The generator's marker is gone; a ``derive`` attribute asks the error
    derivation to process the item as before.
    """
    derive = Attribute(name=settings.derive_attr, value=DERIVE_ERROR)
    if definition.shape is ItemKind.STRUCT:
        (case,) = cases
        return RawItem(
            name=definition.name,
            kind=ItemKind.STRUCT,
            fields=_raw_fields(case.fields),
            attributes=(derive, *case.attributes),
        )
    return RawItem(
        name=definition.name,
        kind=ItemKind.ENUM,
        cases=tuple(RawCase(name=c.name, fields=_raw_fields(c.fields), attributes=c.attributes) for c in cases),
        attributes=(derive, *definition.attributes),
    )


def assemble(
    definition: TypeDefinition,
    cases: tuple[AugmentedCase, ...],
    declaration: CapabilityDecl,
    realizations: tuple[Realization, ...],
    settings: GeneratorSettings,
) -> GeneratedArtifact:
    return GeneratedArtifact(
        item=to_raw_item(definition, cases, settings),
        shape=definition.shape,
        cases=cases,
        declaration=declaration,
        realizations=realizations,
    )
