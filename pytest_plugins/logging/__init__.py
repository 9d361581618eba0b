"""Logging setup shared by the simulator plugins and libraries."""

from .logging import (
    FAIL_LEVEL,
    VERBOSE_LEVEL,
    ColorFormatter,
    LiteDebugLogger,
    LogLevel,
    UTCFormatter,
    configure_logging,
    get_logger,
)

__all__ = (
    "FAIL_LEVEL",
    "VERBOSE_LEVEL",
    "ColorFormatter",
    "LiteDebugLogger",
    "LogLevel",
    "UTCFormatter",
    "configure_logging",
    "get_logger",
)
