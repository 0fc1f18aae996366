"""
Logging setup for applications embedding the library.

The library itself only creates module loggers; nothing here runs on
import. Call configure_logging() from an entry point.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from hashtree.config.runtime import DEFAULT_LOG_FORMAT, LoggingConfig


def resolve_log_level(level: Optional[str | int] = None) -> int:
    """Resolve log level from the argument or HASHTREE_LOG_LEVEL, defaulting to INFO."""
    if isinstance(level, int):
        return level
    raw = level or os.getenv("HASHTREE_LOG_LEVEL")
    value = getattr(logging, (raw or "INFO").upper(), None)
    # Only the numeric level constants count; logging also exports BASIC_FORMAT etc.
    return value if isinstance(value, int) else logging.INFO


def configure_logging(
    level: Optional[str | int] = None,
    config: Optional[LoggingConfig] = None,
) -> None:
    """
    Configure root logging with the standard format.

    An explicit ``level`` wins over ``config.level``, which wins over the
    environment.
    """
    if level is None and config is not None:
        level = config.level
    fmt = config.format if config is not None else DEFAULT_LOG_FORMAT

    logging.basicConfig(level=resolve_log_level(level), format=fmt)
    logging.getLogger("hashtree").setLevel(resolve_log_level(level))
