"""
echo-inspector logging package.

Rich console output and a component-aware Logger on top of the standard
logging module. Handlers are installed through the dictConfig built in
echo_inspector.server.
"""

import logging
from typing import Dict, Any, Optional, List

from echo_inspector.utils.logging.console import (
    console,
    print_json,
    print_plain,
)
from echo_inspector.utils.logging.logger import Logger
from echo_inspector.utils.logging.emojis import get_emoji
from echo_inspector.utils.logging.formatter import (
    EchoLogRecord,
    SimpleLogFormatter,
    DetailedLogFormatter,
    RichLoggingHandler,
    create_rich_console_handler,
)

# Global logger instance for importing
logger = Logger("echo_inspector")


def capture_logs(level: Optional[str] = None) -> "LogCapture":
    """Create a context manager to capture logs.

    Args:
        level: Minimum log level to capture

    Returns:
        Log capture context manager
    """
    return LogCapture(level)


class LogCapture:
    """Context manager for capturing logs emitted under the package logger."""

    def __init__(self, level: Optional[str] = None, name: str = "echo_inspector"):
        """Initialize the log capture.

        Args:
            level: Minimum log level to capture
            name: Logger the capture handler is attached to
        """
        self.level = level
        self.level_num = getattr(logging, self.level.upper(), 0) if self.level else 0
        self.name = name
        self.logs: List[Dict[str, Any]] = []
        self.handler = self._create_handler()

    def _create_handler(self) -> logging.Handler:
        class CaptureHandler(logging.Handler):
            def __init__(self, capture):
                super().__init__()
                self.capture = capture

            def emit(self, record):
                if record.levelno < self.capture.level_num:
                    return

                self.capture.logs.append({
                    "level": record.levelname,
                    "message": record.getMessage(),
                    "name": record.name,
                    "component": getattr(record, "component", None),
                    "operation": getattr(record, "operation", None),
                    "context": getattr(record, "context", None),
                })

        return CaptureHandler(self)

    def __enter__(self) -> "LogCapture":
        logging.getLogger(self.name).addHandler(self.handler)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        logging.getLogger(self.name).removeHandler(self.handler)

    def get_logs(self, level: Optional[str] = None) -> List[Dict[str, Any]]:
        """Get captured logs, optionally filtered by minimum level."""
        if not level:
            return self.logs

        level_num = getattr(logging, level.upper(), 0)
        return [log for log in self.logs if getattr(logging, log["level"], 0) >= level_num]

    def get_messages(self, level: Optional[str] = None) -> List[str]:
        return [log["message"] for log in self.get_logs(level)]

    def contains(self, text: str, level: Optional[str] = None) -> bool:
        """Check if captured log messages contain a specific text."""
        return any(text in message for message in self.get_messages(level))


__all__ = [
    # Console
    "console",
    "print_json",
    "print_plain",

    # Logger and utilities
    "logger",
    "Logger",
    "get_emoji",
    "capture_logs",
    "LogCapture",

    # Formatters and handlers
    "EchoLogRecord",
    "SimpleLogFormatter",
    "DetailedLogFormatter",
    "RichLoggingHandler",
    "create_rich_console_handler",
]
