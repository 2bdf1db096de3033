"""ByteCalc Logging System.

This module provides the logging layer used for program trace output:
loggers, a manager that routes entries to handlers, and text, JSON and
program-log formatting.
"""

from .core import (
    ByteCalcLogger,
    LogConfig,
    LogContext,
    LogEntry,
    LogFormatter,
    LogHandler,
    LogLevel,
    LogManager,
    get_logger,
    setup_logging,
    shutdown_logging,
)
from .formatters import JSONFormatter, ProgramLogFormatter, TextFormatter
from .handlers import ConsoleHandler, MemoryHandler

__all__ = [
    # Core
    "LogLevel",
    "LogConfig",
    "LogContext",
    "LogEntry",
    "LogFormatter",
    "LogHandler",
    "LogManager",
    "ByteCalcLogger",
    "get_logger",
    "setup_logging",
    "shutdown_logging",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "ProgramLogFormatter",
    # Handlers
    "ConsoleHandler",
    "MemoryHandler",
]
