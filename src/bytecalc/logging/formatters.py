"""Log formatters for ByteCalc.

This module provides the text, JSON and program-log formatters used by the
ByteCalc logging system.
"""

import json
import time

from .core import LogEntry, LogFormatter


class JSONFormatter(LogFormatter):
    """JSON log formatter, one object per line."""

    def format(self, entry: LogEntry) -> str:
        """Format log entry as JSON."""
        data = {
            "timestamp": self._format_timestamp(entry.timestamp),
            "level": entry.level.value,
            "logger": entry.logger_name,
            "context": entry.context.to_dict(),
            "message": entry.message,
        }
        return json.dumps(data, default=str)

    def _format_timestamp(self, timestamp: float) -> str:
        """Format timestamp as ISO 8601 UTC."""
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(timestamp))
            + f".{int((timestamp % 1) * 1000000):06d}Z"
        )


class TextFormatter(LogFormatter):
    """Text log formatter."""

    def __init__(
        self,
        format_string: str = None,
        include_timestamp: bool = True,
        include_level: bool = True,
        include_logger: bool = True,
        timestamp_format: str = "%Y-%m-%d %H:%M:%S",
    ):
        self.include_timestamp = include_timestamp
        self.include_level = include_level
        self.include_logger = include_logger
        self.timestamp_format = timestamp_format
        self.format_string = format_string or self._get_default_format()

    def _get_default_format(self) -> str:
        """Get default format string."""
        parts = []

        if self.include_timestamp:
            parts.append("%(timestamp)s")

        if self.include_level:
            parts.append("[%(level)s]")

        if self.include_logger:
            parts.append("%(logger)s:")

        parts.append("%(message)s")

        return " ".join(parts)

    def format(self, entry: LogEntry) -> str:
        """Format log entry."""
        format_data = {
            "timestamp": time.strftime(
                self.timestamp_format, time.gmtime(entry.timestamp)
            ),
            "level": entry.level.value.upper(),
            "logger": entry.logger_name,
            "message": entry.message,
        }

        return self.format_string % format_data


class ProgramLogFormatter(LogFormatter):
    """Render entries the way a runtime prints program output.

    Messages are prefixed with ``Program log:`` unless they already carry a
    ``Program`` prefix, which the runtime uses for its own invoke and
    completion lines.
    """

    prefix = "Program log: "

    def format(self, entry: LogEntry) -> str:
        if entry.message.startswith("Program "):
            return entry.message
        return self.prefix + entry.message
