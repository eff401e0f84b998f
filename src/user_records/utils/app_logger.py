"""
Application log entries for request outcomes

Each entry is one JSON object per line:
{"timestamp": ..., "level": "info"|"warn"|"error", "message": ..., **context}
"""

import json
import logging
import queue
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from typing import Any, Dict, Optional

from user_records.utils.error_handling import ErrorHandlingConfig, describe_exception

logger = logging.getLogger(__name__)

STDLIB_LEVELS = {
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def build_log_entry(level: str, message: str, context: Dict[str, Any]) -> Dict[str, Any]:
    """Assemble a log entry, converting exceptions and redacting sensitive fields"""
    entry = {
        "timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        "level": level,
        "message": message,
    }
    for key, value in context.items():
        if isinstance(value, BaseException):
            value = describe_exception(value)
        entry[key] = ErrorHandlingConfig.sanitize_data(value)
    return entry


class AppLogger(ABC):
    """Sink for request-outcome log entries; writing must never raise"""

    @abstractmethod
    def log(self, level: str, message: str, **context: Any) -> None:
        ...

    def start(self) -> None:
        """Acquire resources before the app serves traffic"""

    def stop(self) -> None:
        """Flush and release resources at shutdown"""

    def info(self, message: str, **context: Any) -> None:
        self.log("info", message, **context)

    def warn(self, message: str, **context: Any) -> None:
        self.log("warn", message, **context)

    def error(self, message: str, **context: Any) -> None:
        self.log("error", message, **context)


class JsonLineLogger(AppLogger):
    """
    Appends entries to <log_dir>/app.log and echoes them to the stdlib logger

    Entries are put on a queue by the caller; a QueueListener thread owns
    the FileHandler, so the event loop never waits on disk I/O.
    """

    def __init__(self, log_dir: str, filename: str = "app.log"):
        self.log_dir = Path(log_dir)
        self.path = self.log_dir / filename
        self._queue: "queue.SimpleQueue[logging.LogRecord]" = queue.SimpleQueue()
        # Unregistered logger: entries only reach the queue, never the root handlers
        self._file_logger = logging.Logger("user_records.app_log", logging.INFO)
        self._file_logger.addHandler(QueueHandler(self._queue))
        self._file_handler: Optional[logging.FileHandler] = None
        self._listener: Optional[QueueListener] = None

    def start(self) -> None:
        if self._listener is not None:
            return

        handlers = []
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self._file_handler = logging.FileHandler(self.path, encoding="utf-8", delay=True)
            self._file_handler.setFormatter(logging.Formatter("%(message)s"))
            handlers.append(self._file_handler)
        except OSError as e:
            logger.warning(f"Failed to open log file {self.path}: {e}")

        self._listener = QueueListener(self._queue, *handlers)
        self._listener.start()

    def stop(self) -> None:
        if self._listener is not None:
            self._listener.stop()
            self._listener = None
        if self._file_handler is not None:
            self._file_handler.close()
            self._file_handler = None

    def log(self, level: str, message: str, **context: Any) -> None:
        entry = build_log_entry(level, message, context)
        line = json.dumps(entry, ensure_ascii=False, default=str)

        if self._listener is None:
            self.start()
        self._file_logger.log(STDLIB_LEVELS.get(level, logging.INFO), line)

        logger.log(STDLIB_LEVELS.get(level, logging.INFO), line)
