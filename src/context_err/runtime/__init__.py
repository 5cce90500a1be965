"""Runtime side: exception classes and capabilities built from generated artifacts."""

from .capability import Capability
from .case import ErrorCase, fields_of, source_of
from .derive import materialize

__all__ = ["Capability", "ErrorCase", "fields_of", "materialize", "source_of"]
