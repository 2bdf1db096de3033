"""Core logging interfaces and data structures for ByteCalc.

Program trace lines (``Addition: 10 + 5``, ``Result = 15``) are routed
through a :class:`ByteCalcLogger`. A logger belongs to a :class:`LogManager`,
which fans entries out to the handlers enabled in its :class:`LogConfig`.
Hosts that want to capture program output build their own manager with a
memory handler and hand its logger to the evaluator.
"""

import json
import os
import sys
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class LogLevel(Enum):
    """Log levels."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


_LEVEL_ORDER = {level: index for index, level in enumerate(LogLevel)}


@dataclass
class LogContext:
    """Log context information."""

    program_id: Optional[str] = None
    component: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert context to dictionary."""
        return {
            "program_id": self.program_id,
            "component": self.component,
            "metadata": self.metadata,
        }

    def merge(self, other: Optional["LogContext"]) -> "LogContext":
        """Return a new context where set fields of ``other`` win."""
        if other is None:
            return self
        return LogContext(
            program_id=other.program_id or self.program_id,
            component=other.component or self.component,
            metadata={**self.metadata, **other.metadata},
        )


@dataclass
class LogEntry:
    """Log entry data structure."""

    timestamp: float
    level: LogLevel
    message: str
    logger_name: str
    context: LogContext
    thread_id: Optional[int] = None
    process_id: Optional[int] = None

    def __post_init__(self):
        if self.thread_id is None:
            self.thread_id = threading.get_ident()
        if self.process_id is None:
            self.process_id = os.getpid()

    def to_dict(self) -> Dict[str, Any]:
        """Convert log entry to dictionary."""
        return {
            "timestamp": self.timestamp,
            "level": self.level.value,
            "message": self.message,
            "logger_name": self.logger_name,
            "context": self.context.to_dict(),
            "thread_id": self.thread_id,
            "process_id": self.process_id,
        }

    def to_json(self) -> str:
        """Convert log entry to JSON string."""
        return json.dumps(self.to_dict(), default=str)


class LogConfig:
    """Log configuration."""

    def __init__(
        self,
        name: str = "bytecalc",
        level: LogLevel = LogLevel.INFO,
        format_type: str = "text",
        handlers: List[str] = None,
        stream: Any = None,
    ):
        self.name = name
        self.level = level
        self.format_type = format_type
        self.handlers = handlers if handlers is not None else ["console"]
        self.stream = stream

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "level": self.level.value,
            "format_type": self.format_type,
            "handlers": list(self.handlers),
        }


class LogFormatter(ABC):
    """Abstract log formatter."""

    @abstractmethod
    def format(self, entry: LogEntry) -> str:
        """Format log entry."""
        pass


class LogHandler(ABC):
    """Abstract log handler."""

    def __init__(self, name: str = None):
        self.name = name or self.__class__.__name__
        self.formatter: Optional[LogFormatter] = None
        self.level: LogLevel = LogLevel.DEBUG
        self._lock = threading.RLock()

    def set_formatter(self, formatter: LogFormatter) -> None:
        """Set formatter."""
        with self._lock:
            self.formatter = formatter

    def set_level(self, level: LogLevel) -> None:
        """Set log level."""
        with self._lock:
            self.level = level

    def should_handle(self, entry: LogEntry) -> bool:
        """Check if handler should handle the entry."""
        with self._lock:
            return _LEVEL_ORDER[entry.level] >= _LEVEL_ORDER[self.level]

    def format(self, entry: LogEntry) -> str:
        """Format an entry with the configured formatter or a plain default."""
        if self.formatter:
            return self.formatter.format(entry)
        return f"{entry.timestamp} [{entry.level.value.upper()}] {entry.logger_name}: {entry.message}"

    @abstractmethod
    def emit(self, entry: LogEntry) -> None:
        """Emit log entry."""
        pass

    def handle(self, entry: LogEntry) -> None:
        """Handle log entry."""
        if self.should_handle(entry):
            self.emit(entry)

    def close(self) -> None:
        """Release handler resources."""


class LogManager:
    """Log manager routing entries from loggers to handlers."""

    def __init__(self, config: LogConfig = None):
        self.config = config or LogConfig()
        self.loggers: Dict[str, "ByteCalcLogger"] = {}
        self.handlers: Dict[str, LogHandler] = {}
        self._lock = threading.RLock()
        self._context = LogContext()

        self._setup_defaults()

    def _setup_defaults(self) -> None:
        """Setup default logging components."""
        from .formatters import JSONFormatter, TextFormatter
        from .handlers import ConsoleHandler

        if "console" in self.config.handlers:
            console = ConsoleHandler(self.config.stream or sys.stderr)
            if self.config.format_type == "json":
                console.set_formatter(JSONFormatter())
            else:
                console.set_formatter(TextFormatter())
            self.add_handler("console", console)

    def get_logger(self, name: str) -> "ByteCalcLogger":
        """Get logger."""
        with self._lock:
            if name not in self.loggers:
                self.loggers[name] = ByteCalcLogger(name, self, self.config.level)
            return self.loggers[name]

    def add_handler(self, name: str, handler: LogHandler) -> None:
        """Add handler."""
        with self._lock:
            self.handlers[name] = handler

    def set_context(self, context: LogContext) -> None:
        """Set global context."""
        with self._lock:
            self._context = context

    def log(
        self,
        level: LogLevel,
        message: str,
        logger_name: str = "root",
        context: LogContext = None,
    ) -> None:
        """Log a message."""
        with self._lock:
            entry = LogEntry(
                timestamp=time.time(),
                level=level,
                message=message,
                logger_name=logger_name,
                context=self._context.merge(context),
            )

            for handler_name in self.config.handlers:
                if handler_name in self.handlers:
                    self.handlers[handler_name].handle(entry)

    def shutdown(self) -> None:
        """Shutdown log manager."""
        with self._lock:
            for handler in self.handlers.values():
                handler.close()

            self.loggers.clear()
            self.handlers.clear()


class ByteCalcLogger:
    """ByteCalc logger implementation."""

    def __init__(
        self, name: str, manager: LogManager, level: LogLevel = LogLevel.INFO
    ):
        self.name = name
        self.manager = manager
        self.level = level
        self._lock = threading.RLock()

    def set_level(self, level: LogLevel) -> None:
        """Set log level."""
        with self._lock:
            self.level = level

    def is_enabled_for(self, level: LogLevel) -> bool:
        """Check if logger is enabled for level."""
        with self._lock:
            return _LEVEL_ORDER[level] >= _LEVEL_ORDER[self.level]

    def log(
        self,
        level: LogLevel,
        message: str,
        context: LogContext = None,
    ) -> None:
        """Log a message."""
        if self.is_enabled_for(level):
            self.manager.log(
                level=level,
                message=message,
                logger_name=self.name,
                context=context,
            )

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message."""
        self.log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        """Log info message."""
        self.log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message."""
        self.log(LogLevel.WARNING, message, **kwargs)


# Global log manager instance
_global_manager: Optional[LogManager] = None


def get_logger(name: str = "root") -> ByteCalcLogger:
    """Get logger instance."""
    global _global_manager
    if _global_manager is None:
        _global_manager = LogManager()
    return _global_manager.get_logger(name)


def setup_logging(config: LogConfig) -> LogManager:
    """Setup logging with configuration."""
    global _global_manager
    if _global_manager is not None:
        _global_manager.shutdown()
    _global_manager = LogManager(config)
    return _global_manager


def shutdown_logging() -> None:
    """Shutdown logging."""
    global _global_manager
    if _global_manager is not None:
        _global_manager.shutdown()
        _global_manager = None
