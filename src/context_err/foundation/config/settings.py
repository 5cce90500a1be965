"""Environment-based configuration using pydantic-settings.

Controls the conventional names the generator emits (capability name,
conversion operation, injected message field) and the attribute names it
recognises on incoming items.

Example:
    >>> from context_err.foundation.config import get_settings
    >>> get_settings().generator.default_capability
    'ContextErr'

    # Or with environment variables:
    # CONTEXT_ERR_GEN_DEFAULT_CAPABILITY=WithContext
    # CONTEXT_ERR_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

import keyword
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _identifier(v: str) -> str:
    if not v.isidentifier() or keyword.iskeyword(v):
        raise ValueError(f"{v!r} is not a valid identifier")
    return v


class GeneratorSettings(BaseSettings):
    """Names used by the generator."""

    model_config = SettingsConfigDict(
        env_prefix="CONTEXT_ERR_GEN_",
        extra="ignore",
    )

    default_capability: str = Field(default="ContextErr", description="Capability name when an item sets none")
    operation: str = Field(default="context", description="Name of the conversion operation")
    message_field: str = Field(default="message", description="Injected context message field")
    context_marker: str = Field(default="context", description="Case attribute marking a contextual case")
    display_attr: str = Field(default="display", description="Case attribute holding a display template")
    source_attr: str = Field(default="source", description="Field attribute marking the causal source")
    derive_attr: str = Field(default="derive", description="Item attribute handed to the error derivation")

    @field_validator("default_capability", "operation", "message_field")
    @classmethod
    def _check_identifier(cls, v: str) -> str:
        return _identifier(v)


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="CONTEXT_ERR_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ContextErrSettings(BaseSettings):
    """Root settings.

    Example environment variables:
        CONTEXT_ERR_GEN_MESSAGE_FIELD=context
        CONTEXT_ERR_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="CONTEXT_ERR_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    generator: GeneratorSettings = Field(default_factory=GeneratorSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> ContextErrSettings:
    """Get the global settings instance (cached)."""
    return ContextErrSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    The next get_settings() call reloads configuration from environment.
    """
    get_settings.cache_clear()
