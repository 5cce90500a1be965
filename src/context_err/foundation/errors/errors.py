"""Generation-time diagnostics.

Every failure the generator can report is raised before any output exists.
Each carries a structured Diagnostic pointing at the offending item/case.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field


class ErrorCode(StrEnum):
    """Diagnostic codes for generation failures."""
    MALFORMED_ITEM = "MALFORMED_ITEM"
    INVALID_CONTEXTUAL_CASE = "INVALID_CONTEXTUAL_CASE"
    DUPLICATE_WRAPPED_TYPE = "DUPLICATE_WRAPPED_TYPE"
    INVALID_OPTIONS = "INVALID_OPTIONS"


class Rule(StrEnum):
    """Rules a contextual case must satisfy."""
    EXACTLY_ONE_FIELD = "exactly one field"
    NO_DISPLAY_TEMPLATE = "no custom display template"
    MESSAGE_FIELD_FREE = "message field name is free"


class Diagnostic(BaseModel):
    """Structured diagnostic for a failed generation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    code: ErrorCode
    message: str = Field(min_length=1)
    item: str
    case: str | None = None
    scope: str | None = None

    @classmethod
    def create(
        cls,
        code: ErrorCode,
        message: str,
        item: str,
        *,
        case: str | None = None,
        scope: str | None = None,
    ) -> Self:
        """Factory method for construction."""
        return cls(code=code, message=message, item=item, case=case, scope=scope)

    def render(self) -> str:
        """Format as a compiler-style diagnostic line."""
        where = f"{self.item}::{self.case}" if self.case else self.item
        return f"error[{self.code}]: {self.message}\n  --> {where}"

    __str__ = render


class GenerationError(Exception):
    """Base for every failure raised while generating a context capability."""

    __slots__ = ("diagnostic",)

    def __init__(self, diagnostic: Diagnostic) -> None:
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    @property
    def code(self) -> ErrorCode:
        return self.diagnostic.code

    def __str__(self) -> str:
        return self.diagnostic.render()


class MalformedItem(GenerationError):
    """Item is not an enum with cases nor a struct."""

    __slots__ = ("item", "reason")

    def __init__(self, item: str, reason: str) -> None:
        self.item, self.reason = item, reason
        super().__init__(Diagnostic.create(ErrorCode.MALFORMED_ITEM, f"`{item}`: {reason}", item))


class InvalidContextualCase(GenerationError):
    """Case marked contextual breaks one of the contextual rules."""

    __slots__ = ("item", "case", "rule")

    def __init__(self, item: str, case: str, rule: Rule) -> None:
        self.item, self.case, self.rule = item, case, rule
        super().__init__(Diagnostic.create(
            ErrorCode.INVALID_CONTEXTUAL_CASE,
            f"contextual case `{case}` must have {rule}",
            item,
            case=case,
        ))


class DuplicateWrappedType(GenerationError):
    """Two contextual cases of one capability wrap the same failure type."""

    __slots__ = ("item", "scope", "wrapped_type", "first_case", "second_case")

    def __init__(self, item: str, scope: str, wrapped_type: str, first_case: str, second_case: str) -> None:
        self.item, self.scope, self.wrapped_type = item, scope, wrapped_type
        self.first_case, self.second_case = first_case, second_case
        super().__init__(Diagnostic.create(
            ErrorCode.DUPLICATE_WRAPPED_TYPE,
            f"`{wrapped_type}` is wrapped by both `{first_case}` and `{second_case}` in capability `{scope}`; "
            "a failure type may be wrapped by at most one contextual case",
            item,
            case=second_case,
            scope=scope,
        ))


class InvalidOptions(GenerationError):
    """Item-level generator options could not be parsed."""

    __slots__ = ("item", "reason")

    def __init__(self, item: str, reason: str) -> None:
        self.item, self.reason = item, reason
        super().__init__(Diagnostic.create(ErrorCode.INVALID_OPTIONS, reason, item))
