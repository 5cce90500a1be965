"""Structured input contract: an already-parsed annotated item.

Front ends (the class decorator, or anything producing plain mappings)
describe an item with these models; the generator never sees source text.

Example:
    >>> item = RawItem.model_validate({
    ...     "name": "Error",
    ...     "kind": "enum",
    ...     "cases": [{
    ...         "name": "Io",
    ...         "fields": [{"type": {"name": "OSError"}}],
    ...         "attributes": [{"name": "context"}],
    ...     }],
    ... })
    >>> item.cases[0].fields[0].type.key
    'OSError'
"""

from __future__ import annotations

import builtins
import importlib
from enum import StrEnum
from functools import reduce
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field


class ItemKind(StrEnum):
    """Item shapes the generator accepts."""
    ENUM = "enum"
    STRUCT = "struct"


_FROZEN = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)


class TypeRef(BaseModel):
    """Reference to a type by qualified name, optionally holding the live type.

    ``key`` is the identity used for wrapped-type comparison.
    """

    model_config = _FROZEN

    name: str = Field(min_length=1, description="Qualified name within its module")
    module: str = ""
    target: type | None = Field(default=None, repr=False)

    @classmethod
    def of(cls, tp: type) -> Self:
        """Reference a live type."""
        module = "" if tp.__module__ == "builtins" else tp.__module__
        return cls(name=tp.__qualname__, module=module, target=tp)

    @property
    def key(self) -> str:
        return f"{self.module}.{self.name}" if self.module not in ("", "builtins") else self.name

    def resolve(self) -> type:
        """Return the live type, importing its module when only a name is held.

        Raises:
            ImportError: module cannot be imported
            AttributeError: name not found in module
            TypeError: name resolves to something that is not a type
        """
        if self.target is not None:
            return self.target
        root = importlib.import_module(self.module) if self.module else builtins
        found = reduce(getattr, self.name.split("."), root)
        if not isinstance(found, type):
            raise TypeError(f"{self.key} is not a type")
        return found

    def __str__(self) -> str:
        return self.key


class Attribute(BaseModel):
    """Attribute attached to an item, case or field (``name`` or ``name = value``)."""

    model_config = _FROZEN

    name: str = Field(min_length=1)
    value: str | None = None

    def __str__(self) -> str:
        return self.name if self.value is None else f"{self.name}={self.value!r}"


class RawField(BaseModel):
    """A declared field; ``name`` is None for positional fields."""

    model_config = _FROZEN

    name: str | None = None
    type: TypeRef
    attributes: tuple[Attribute, ...] = ()


class RawCase(BaseModel):
    """One declared alternative of an enum item."""

    model_config = _FROZEN

    name: str = Field(min_length=1)
    fields: tuple[RawField, ...] = ()
    attributes: tuple[Attribute, ...] = ()


class RawItem(BaseModel):
    """The annotated item as handed over by a front end.

    For a struct, ``fields`` and ``attributes`` describe its single implicit case.
    ``options`` holds item-level generator arguments (e.g. ``trait``).
    """

    model_config = _FROZEN

    name: str = Field(min_length=1)
    kind: str
    cases: tuple[RawCase, ...] = ()
    fields: tuple[RawField, ...] = ()
    attributes: tuple[Attribute, ...] = ()
    options: dict[str, Any] = Field(default_factory=dict)
