"""Error handling for context_err.

- ErrorCode/Rule/Diagnostic: structured generation diagnostics
- GenerationError and its subclasses: the failure taxonomy of the generator
- Result/Ok/Err: the success-or-failure shape conversions operate on
"""

from .errors import (
    Diagnostic,
    DuplicateWrappedType,
    ErrorCode,
    GenerationError,
    InvalidContextualCase,
    InvalidOptions,
    MalformedItem,
    Rule,
)
from .result import Err, Ok, Result, try_fn

__all__ = [
    # Diagnostics
    "ErrorCode", "Rule", "Diagnostic",
    # Failure taxonomy
    "GenerationError", "MalformedItem", "InvalidContextualCase", "DuplicateWrappedType", "InvalidOptions",
    # Result monad
    "Result", "Ok", "Err", "try_fn",
]
