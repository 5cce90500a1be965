"""Generation pipeline: Build -> Classify -> Synthesize -> Register -> Emit -> Assemble.

A single straight pass. Any GenerationError aborts the whole item before
anything is assembled; there is no partial output.

Example:
    >>> artifact = generate(RawItem.model_validate({
    ...     "name": "Error", "kind": "enum",
    ...     "cases": [{"name": "Io", "fields": [{"type": {"name": "OSError"}}],
    ...                "attributes": [{"name": "context"}]}],
    ... }))
    >>> [r.case for r in artifact.realizations]
    ['Io']
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from context_err.foundation.config import get_settings
from context_err.foundation.errors import Err, GenerationError, Ok, Result

from .assembler import assemble
from .builder import build_definition
from .classifier import classify_all
from .emitter import emit
from .registry import CapabilityRegistry
from .synthesizer import augment_all

if TYPE_CHECKING:
    from context_err.foundation.config import GeneratorSettings

    from .item import RawItem
    from .model import GeneratedArtifact

logger = logging.getLogger("context_err.generator")


def generate(item: RawItem, settings: GeneratorSettings | None = None) -> GeneratedArtifact:
    """Generate the augmented item and its context capability.

    Raises:
        GenerationError: MalformedItem, InvalidOptions, InvalidContextualCase
            or DuplicateWrappedType
    """
    cfg = settings or get_settings().generator
    try:
        definition = build_definition(item, cfg)
        logger.debug("[%s] built %d case(s), capability %s", item.name, len(definition.cases), definition.capability)

        definition = classify_all(definition, cfg)
        cases = augment_all(definition, cfg)

        registry = CapabilityRegistry(definition.capability, item=definition.name)
        registry.register_all(cases)

        declaration, realizations = emit(registry.scope(), definition.name, cfg)
    except GenerationError as exc:
        logger.info("[%s] generation failed: %s", item.name, exc.diagnostic.message)
        raise

    artifact = assemble(definition, cases, declaration, realizations, cfg)
    logger.debug("[%s] generated %s with %d conversion(s)", item.name, declaration.name, len(realizations))
    return artifact


def try_generate(item: RawItem, settings: GeneratorSettings | None = None) -> Result[GeneratedArtifact, GenerationError]:
    """Like generate(), returning the diagnostic as Err instead of raising."""
    try:
        return Ok(generate(item, settings))
    except GenerationError as exc:
        return Err(exc)
