"""Front ends describing Python classes as generator input."""

from .decorator import SOURCE, CaseDecl, case, derive_context_err, read_item

__all__ = ["SOURCE", "CaseDecl", "case", "derive_context_err", "read_item"]
