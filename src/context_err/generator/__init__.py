"""Context capability generator.

Turns an annotated error item into an augmented item plus a capability
that attaches a context message to any wrapped failure.
"""

from .assembler import assemble, to_raw_item
from .builder import build_definition, resolve_capability
from .classifier import classify, classify_all
from .emitter import declare, emit, realize
from .item import Attribute, ItemKind, RawCase, RawField, RawItem, TypeRef
from .model import (
    AugmentedCase,
    CapabilityDecl,
    CapabilityScope,
    Case,
    Contextual,
    Entry,
    Field,
    GeneratedArtifact,
    Opaque,
    Realization,
    TypeDefinition,
)
from .pipeline import generate, try_generate
from .registry import CapabilityRegistry
from .synthesizer import augment, augment_all

__all__ = [
    # Input contract
    "RawItem", "RawCase", "RawField", "Attribute", "TypeRef", "ItemKind",
    # Model
    "TypeDefinition", "Case", "AugmentedCase", "Field", "Contextual", "Opaque",
    "CapabilityScope", "Entry", "CapabilityDecl", "Realization", "GeneratedArtifact",
    # Stages
    "build_definition", "resolve_capability", "classify", "classify_all", "augment", "augment_all",
    "CapabilityRegistry", "declare", "realize", "emit", "assemble", "to_raw_item",
    # Pipeline
    "generate", "try_generate",
]
