"""Internal model flowing through the generation pipeline.

All values are frozen; every stage builds new values instead of mutating
its input, so an opaque case leaves the pipeline as the very object that
entered it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, TypeAlias

if TYPE_CHECKING:
    from .item import Attribute, ItemKind, RawItem, TypeRef


def find_attr(attributes: tuple[Attribute, ...], name: str) -> Attribute | None:
    """First attribute called ``name``, if any."""
    return next((a for a in attributes if a.name == name), None)


@dataclass(frozen=True, slots=True)
class Field:
    """A case field. ``name`` is None for positional fields."""

    name: str | None
    type: TypeRef
    attributes: tuple[Attribute, ...] = ()

    @property
    def positional(self) -> bool:
        return self.name is None

    def has_attr(self, name: str) -> bool:
        return find_attr(self.attributes, name) is not None


@dataclass(frozen=True, slots=True)
class Contextual:
    """Case wraps exactly one failure type and receives a context message."""

    wrapped: TypeRef


@dataclass(frozen=True, slots=True)
class Opaque:
    """Case left entirely to its author."""


CaseKind: TypeAlias = Contextual | Opaque


@dataclass(frozen=True, slots=True)
class Case:
    """One alternative of the taxonomy (an enum case, or a struct's only case).

    ``attributes`` never contains the generator's own contextual marker;
    that is carried by ``contextual``. ``kind`` is None until classified.
    """

    name: str
    fields: tuple[Field, ...]
    attributes: tuple[Attribute, ...] = ()
    contextual: bool = False
    kind: CaseKind | None = None

    def attr(self, name: str) -> Attribute | None:
        return find_attr(self.attributes, name)

    @property
    def is_contextual(self) -> bool:
        return isinstance(self.kind, Contextual)


# Output of the synthesizer: opaque cases pass through as the same object.
AugmentedCase: TypeAlias = Case


@dataclass(frozen=True, slots=True)
class TypeDefinition:
    """The item after model building; immutable from here on."""

    name: str
    shape: ItemKind
    cases: tuple[Case, ...]
    capability: str
    attributes: tuple[Attribute, ...] = ()

    def with_cases(self, cases: tuple[Case, ...]) -> TypeDefinition:
        return TypeDefinition(self.name, self.shape, cases, self.capability, self.attributes)


@dataclass(frozen=True, slots=True)
class Entry:
    """One registered mapping: wrapped type -> claiming case."""

    wrapped: TypeRef
    case: AugmentedCase


@dataclass(frozen=True, slots=True)
class CapabilityScope:
    """Wrapped-type mappings registered under one capability name.

    ``entries`` is keyed by ``TypeRef.key`` in registration order.
    """

    name: str
    entries: Mapping[str, Entry] = field(default_factory=lambda: MappingProxyType({}))

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries


@dataclass(frozen=True, slots=True)
class CapabilityDecl:
    """Abstract declaration: ``operation(self, ctx) -> Result[T, target]``."""

    name: str
    operation: str
    target: str
    value_type: str = "T"

    def signature(self) -> str:
        return f"{self.operation}(self: Result[{self.value_type}, E], ctx: object) -> Result[{self.value_type}, {self.target}]"


@dataclass(frozen=True, slots=True)
class Realization:
    """Concrete conversion for ``Result[T, wrapped]`` building ``case(failure, str(ctx))``.

    ``source_field``/``message_field`` are None when the case is positional.
    """

    capability: str
    wrapped: TypeRef
    case: str
    source_field: str | None = None
    message_field: str | None = None

    @property
    def positional(self) -> bool:
        return self.source_field is None


@dataclass(frozen=True, slots=True)
class GeneratedArtifact:
    """Final output replacing the annotated item.

    ``item`` is the rewritten item in the same structural form as the input;
    ``cases`` are the augmented cases it was built from.
    """

    item: RawItem
    shape: ItemKind
    cases: tuple[AugmentedCase, ...]
    declaration: CapabilityDecl
    realizations: tuple[Realization, ...]

    @property
    def name(self) -> str:
        return self.item.name

    @property
    def capability(self) -> str:
        return self.declaration.name
