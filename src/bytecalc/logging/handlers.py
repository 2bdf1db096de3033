"""Log handlers for ByteCalc.

Console output for interactive use and an in-memory buffer used by the
local runtime to collect program logs per transaction.
"""

import sys
import threading
from typing import Any, Dict, List

from .core import LogEntry, LogHandler


class ConsoleHandler(LogHandler):
    """Console log handler."""

    def __init__(self, stream: Any = None):
        super().__init__()
        self.stream = stream or sys.stderr
        self._lock = threading.RLock()

    def emit(self, entry: LogEntry) -> None:
        """Emit log entry to console."""
        with self._lock:
            self.stream.write(self.format(entry) + "\n")
            self.stream.flush()

    def close(self) -> None:
        """Flush the stream; process streams are left open."""
        with self._lock:
            self.stream.flush()


class MemoryHandler(LogHandler):
    """Memory log handler."""

    def __init__(self, max_size: int = 1000):
        super().__init__()
        self.max_size = max_size
        self.buffer: List[Dict[str, Any]] = []
        self._lock = threading.RLock()

    def emit(self, entry: LogEntry) -> None:
        """Emit log entry to memory."""
        with self._lock:
            self.buffer.append(
                {
                    "timestamp": entry.timestamp,
                    "level": entry.level.value,
                    "message": entry.message,
                    "logger_name": entry.logger_name,
                    "formatted": self.format(entry),
                }
            )

            # Remove old entries if buffer is full
            if len(self.buffer) > self.max_size:
                self.buffer.pop(0)

    def get_logs(self) -> List[Dict[str, Any]]:
        """Get all logs from memory."""
        with self._lock:
            return self.buffer.copy()

    def get_lines(self) -> List[str]:
        """Get the formatted lines in emission order."""
        with self._lock:
            return [record["formatted"] for record in self.buffer]

    def get_messages(self) -> List[str]:
        """Get the raw messages in emission order."""
        with self._lock:
            return [record["message"] for record in self.buffer]

    def clear_logs(self) -> None:
        """Clear all logs from memory."""
        with self._lock:
            self.buffer.clear()

    def close(self) -> None:
        """Close handler."""
        with self._lock:
            self.buffer.clear()
