"""context_err - attach human-readable context to any wrapped failure.

Declare an error taxonomy once, mark the cases that wrap an underlying
failure as contextual, and get a capability that converts a failing
result into the right case in one expression, keeping the original
failure as the causal source.

Quick Start (Decorator):
    >>> from context_err import Err, case, derive_context_err
    >>>
    >>> @derive_context_err
    ... class AppError(Exception):
    ...     Network = case(ConnectionError, context=True)
    ...     Io = case(OSError, context=True)
    ...     Config = case(str, display="invalid config: {0}")
    >>>
    >>> failed = Err(ConnectionError("refused"))
    >>> err = AppError.ContextErr.context(failed, "building client").unwrap_err()
    >>> str(err), err.__cause__
    ('building client', ConnectionError('refused'))

Raising style:
    >>> with AppError.ContextErr.wrap("reading settings"):
    ...     open("/missing/settings.toml")

Structured input (no classes involved):
    >>> from context_err import RawItem, generate
    >>> artifact = generate(RawItem.model_validate({...}))
    >>> artifact.realizations
"""

from __future__ import annotations

__version__ = "0.1.0"

# Diagnostics and Result
from .foundation.errors import (
    Diagnostic,
    DuplicateWrappedType,
    Err,
    ErrorCode,
    GenerationError,
    InvalidContextualCase,
    InvalidOptions,
    MalformedItem,
    Ok,
    Result,
    Rule,
    try_fn,
)

# Configuration
from .foundation.config import ContextErrSettings, GeneratorSettings, configure_logging, get_settings

# Generator
from .generator import (
    Attribute,
    GeneratedArtifact,
    RawCase,
    RawField,
    RawItem,
    TypeRef,
    generate,
    try_generate,
)

# Runtime
from .runtime import Capability, ErrorCase, fields_of, materialize, source_of

# Front end
from .frontend import SOURCE, case, derive_context_err

__all__ = [
    "__version__",
    # Diagnostics
    "ErrorCode", "Rule", "Diagnostic", "GenerationError",
    "MalformedItem", "InvalidContextualCase", "DuplicateWrappedType", "InvalidOptions",
    # Result
    "Result", "Ok", "Err", "try_fn",
    # Configuration
    "ContextErrSettings", "GeneratorSettings", "get_settings", "configure_logging",
    # Generator
    "RawItem", "RawCase", "RawField", "Attribute", "TypeRef", "GeneratedArtifact", "generate", "try_generate",
    # Runtime
    "Capability", "ErrorCase", "materialize", "source_of", "fields_of",
    # Front end
    "derive_context_err", "case", "SOURCE",
]
