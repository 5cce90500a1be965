"""Configuration management using pydantic-settings."""

from .logging import configure_logging
from .settings import (
    ContextErrSettings,
    GeneratorSettings,
    LoggingSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "ContextErrSettings",
    "GeneratorSettings",
    "LoggingSettings",
    "clear_settings_cache",
    "configure_logging",
    "get_settings",
]
