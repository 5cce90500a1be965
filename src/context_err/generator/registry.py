"""Capability registry: one wrapped type per case within a capability.

The registry lives for a single generation; nothing is shared between
items. Two items choosing the same capability name each get their own
scope, and call sites tell them apart by naming the capability object.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable

from context_err.foundation.errors import DuplicateWrappedType

from .model import CapabilityScope, Contextual, Entry

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .model import AugmentedCase


class CapabilityRegistry:
    """Collects ``wrapped type -> case`` entries for one capability name.

    Example:
        >>> registry = CapabilityRegistry("ContextErr", item="Error")
        >>> registry.register_all(cases)
        >>> scope = registry.scope()
    """

    __slots__ = ("name", "item", "_entries")

    def __init__(self, name: str, *, item: str) -> None:
        self.name = name
        self.item = item
        self._entries: dict[str, Entry] = {}

    def register(self, case: AugmentedCase) -> bool:
        """Register a contextual case. Opaque cases are skipped (returns False).

        Raises:
            DuplicateWrappedType: the case's wrapped type is already claimed
        """
        if not isinstance(kind := case.kind, Contextual):
            return False
        key = kind.wrapped.key
        if (first := self._entries.get(key)) is not None:
            raise DuplicateWrappedType(self.item, self.name, key, first.case.name, case.name)
        self._entries[key] = Entry(kind.wrapped, case)
        return True

    def register_all(self, cases: Iterable[AugmentedCase]) -> int:
        """Register in declaration order; returns how many entries were added."""
        return sum(self.register(c) for c in cases)

    def scope(self) -> CapabilityScope:
        """Snapshot of the registered entries."""
        return CapabilityScope(self.name, MappingProxyType(dict(self._entries)))

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries.values())
