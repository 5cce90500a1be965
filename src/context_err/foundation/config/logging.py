"""Logging setup for the ``context_err`` logger namespace."""

from __future__ import annotations

import logging

from .settings import get_settings

ROOT_LOGGER = "context_err"


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Apply LoggingSettings to the package logger.

    Adds a stream handler only if the logger has none, so repeated calls are safe.
    """
    cfg = get_settings().logging
    log = logging.getLogger(ROOT_LOGGER)
    log.setLevel(level if level is not None else cfg.level)
    if not log.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(cfg.format))
        log.addHandler(handler)
    return log
