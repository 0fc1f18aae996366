from .runtime import (
    DEFAULT_BLOCK_SIZE,
    LoggingConfig,
    RuntimeConfig,
    TreeConfig,
)
from .logging_setup import configure_logging, resolve_log_level

__all__ = [
    "DEFAULT_BLOCK_SIZE",
    "LoggingConfig",
    "RuntimeConfig",
    "TreeConfig",
    "configure_logging",
    "resolve_log_level",
]
