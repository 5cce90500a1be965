"""Materialize a GeneratedArtifact into live exception classes and a Capability.

An enum item becomes an abstract root class with one subclass per case,
attached to the root under the case name; a struct item becomes a single
concrete class. The capability is attached to the root under its name.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from context_err.foundation.config import get_settings
from context_err.foundation.errors import DuplicateWrappedType
from context_err.generator.item import ItemKind
from context_err.generator.model import find_attr

from .capability import Capability, Conversion
from .case import ErrorCase

if TYPE_CHECKING:
    from context_err.foundation.config import GeneratorSettings
    from context_err.generator import GeneratedArtifact, Realization
    from context_err.generator.item import Attribute, RawField

logger = logging.getLogger("context_err.runtime")

DEFAULT_MODULE = "context_err.generated"
# Field attributes the derivation treats as the causal source besides the configured one
_SOURCE_ALIASES = ("from",)


def _source_index(fields: tuple[RawField, ...], settings: GeneratorSettings) -> int | None:
    markers = (settings.source_attr, *_SOURCE_ALIASES)
    for i, f in enumerate(fields):
        if any(a.name in markers for a in f.attributes):
            return i
    return next((i for i, f in enumerate(fields) if f.name == "source"), None)


def _case_namespace(
    fields: tuple[RawField, ...],
    attributes: tuple[Attribute, ...],
    settings: GeneratorSettings,
    module: str,
    qualname: str,
) -> dict[str, Any]:
    display = find_attr(attributes, settings.display_attr)
    return {
        "__module__": module,
        "__qualname__": qualname,
        "_case_fields": tuple(f.name for f in fields),
        "_display": display.value if display is not None else None,
        "_source": _source_index(fields, settings),
        "_abstract": False,
    }


def _conversion(case_cls: type[ErrorCase], realization: Realization) -> Conversion[ErrorCase]:
    if realization.positional:
        return lambda failure, message: case_cls(failure, message)
    source, message_field = realization.source_field, realization.message_field
    return lambda failure, message: case_cls(**{source: failure, message_field: message})


def materialize(
    artifact: GeneratedArtifact,
    *,
    bases: tuple[type, ...] = (),
    module: str | None = None,
    settings: GeneratorSettings | None = None,
) -> type[ErrorCase]:
    """Build the root class for the artifact and attach its capability.

    Args:
        artifact: output of ``generate``
        bases: extra exception bases for the root (after ErrorCase)
        module: ``__module__`` for the generated classes
        settings: attribute names to honour (defaults to global settings)

    Raises:
        DuplicateWrappedType: two wrapped type names resolve to the same live type
        ImportError/AttributeError/TypeError: a wrapped type cannot be resolved
    """
    cfg = settings or get_settings().generator
    mod = module or DEFAULT_MODULE
    item = artifact.item
    root_bases = (ErrorCase, *(b for b in bases if b not in (ErrorCase, Exception, BaseException, object)))

    if artifact.shape is ItemKind.STRUCT:
        root = type(item.name, root_bases, _case_namespace(item.fields, item.attributes, cfg, mod, item.name))
        cases: dict[str, type[ErrorCase]] = {item.name: root}
    else:
        root = type(item.name, root_bases, {"__module__": mod, "__qualname__": item.name, "_abstract": True})
        cases = {}
        for raw in item.cases:
            ns = _case_namespace(raw.fields, raw.attributes, cfg, mod, f"{item.name}.{raw.name}")
            cases[raw.name] = case_cls = type(raw.name, (root,), ns)
            setattr(root, raw.name, case_cls)

    conversions: dict[type, Conversion[ErrorCase]] = {}
    claimed: dict[type, str] = {}
    for r in artifact.realizations:
        tp = r.wrapped.resolve()
        if tp in claimed:
            raise DuplicateWrappedType(item.name, r.capability, r.wrapped.key, claimed[tp], r.case)
        claimed[tp] = r.case
        conversions[tp] = _conversion(cases[r.case], r)

    capability = Capability(artifact.declaration, root, conversions)
    setattr(root, artifact.capability, capability)
    root.__capability__ = capability
    root.__artifact__ = artifact
    logger.debug("materialized %s.%s with %d case(s)", mod, item.name, len(cases))
    return root
