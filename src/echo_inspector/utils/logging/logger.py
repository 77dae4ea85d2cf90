"""
Main Logger class for echo-inspector.

The Logger wraps a standard library logger and forwards the component,
operation and context fields as record extras so the Rich handler can
render them.
"""
import sys
import time
import logging
from typing import Dict, List, Optional, Any, Tuple
from datetime import datetime
from contextlib import contextmanager

from .emojis import get_emoji

LEVEL_MAP = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

LEVEL_PRIORITY = {
    "debug": 0,
    "info": 1,
    "success": 1,  # Same as info
    "warning": 2,
    "error": 3,
    "critical": 4,
}


class Logger:
    """Logger with component/operation/context fields."""

    def __init__(
        self,
        name: str = "echo_inspector",
        level: str = "info",
        component: Optional[str] = None,
    ):
        """Initialize the logger.

        Args:
            name: Logger name
            level: Initial log level
            component: Default component name
        """
        self.name = name
        self.component = component
        self.python_logger = logging.getLogger(name)
        self.set_level(level)

    def set_level(self, level: str) -> None:
        """Set the log level.

        Args:
            level: Log level (debug, info, warning, error, critical)
        """
        level = level.lower()
        self.level = level
        self.python_logger.setLevel(LEVEL_MAP.get(level, logging.INFO))

    def get_level(self) -> str:
        return self.level

    def should_log(self, level: str) -> bool:
        """Check if a message at the given level should be logged."""
        current_priority = LEVEL_PRIORITY.get(self.level, 1)
        message_priority = LEVEL_PRIORITY.get(level.lower(), 1)
        return message_priority >= current_priority

    def _log(
        self,
        level: str,
        message: str,
        component: Optional[str] = None,
        operation: Optional[str] = None,
        emoji: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        exception_info: Optional[Tuple] = None,
    ) -> None:
        if not self.should_log(level):
            return

        component = component or self.component

        log_func = getattr(self.python_logger, level if level != "success" else "info")

        # Extra fields for the Rich handler
        extras = {
            "component": component,
            "operation": operation,
            "emoji": emoji,
            "context": context,
        }

        if exception_info and level in ("error", "critical"):
            log_func(message, exc_info=exception_info, extra=extras)
        else:
            log_func(message, extra=extras)

    def debug(
        self,
        message: str,
        component: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._log("debug", message, component, operation, context=context)

    def info(
        self,
        message: str,
        component: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._log("info", message, component, operation, context=context)

    def success(
        self,
        message: str,
        component: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._log("success", message, component, operation, emoji=get_emoji("level", "success"), context=context)

    def warning(
        self,
        message: str,
        component: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        details: Optional[List[str]] = None,
    ) -> None:
        """Log a warning message.

        Args:
            message: Log message
            component: Component name
            operation: Operation being performed
            context: Additional contextual data
            details: Optional list of detail points
        """
        warning_context = dict(context or {})
        if details:
            warning_context["details"] = details

        self._log("warning", message, component, operation, context=warning_context)

    def error(
        self,
        message: str,
        component: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        exception: Optional[Exception] = None,
        error_code: Optional[str] = None,
    ) -> None:
        """Log an error message.

        Args:
            message: Log message
            component: Component name
            operation: Operation being performed
            context: Additional contextual data
            exception: Optional exception that caused the error
            error_code: Optional error code for reference
        """
        error_context = dict(context or {})
        if error_code:
            error_context["error_code"] = error_code

        exc_info = None
        if exception:
            exc_info = (type(exception), exception, exception.__traceback__)

        self._log("error", message, component, operation, context=error_context, exception_info=exc_info)

    def critical(
        self,
        message: str,
        component: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        exception: Optional[Exception] = None,
    ) -> None:
        exc_info = None
        if exception:
            exc_info = (type(exception), exception, exception.__traceback__)

        self._log("critical", message, component, operation, context=context, exception_info=exc_info)

    @contextmanager
    def time_operation(
        self,
        operation: str,
        component: Optional[str] = None,
        level: str = "debug",
    ):
        """Context manager that logs how long the wrapped block took.

        Args:
            operation: Operation name
            component: Component name
            level: Level used for the completion message
        """
        start_time = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start_time
            self._log(
                level,
                f"{operation} completed in {elapsed * 1000:.2f}ms",
                component,
                operation,
                context={"duration_ms": round(elapsed * 1000, 3)},
            )

    def startup(self, version: str, host: str, port: int, component: Optional[str] = None) -> None:
        """Log server startup."""
        self._log(
            "info",
            f"Starting echo-inspector {version} on http://{host}:{port}",
            component,
            operation="startup",
            context={
                "version": version,
                "python_version": sys.version.split()[0],
                "timestamp": datetime.now().isoformat(),
            },
        )

    def shutdown(self, component: Optional[str] = None, duration: Optional[float] = None) -> None:
        """Log server shutdown."""
        duration_str = f" after {duration:.2f}s" if duration else ""
        self._log("info", f"Shutting down echo-inspector{duration_str}", component, operation="shutdown")
