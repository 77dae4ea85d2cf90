"""
Log formatters for the echo-inspector logging system.

This module provides formatters that convert log records into Rich renderables
with consistent styling, and the Rich handler that plugs them into the
standard logging machinery.
"""
import time
import logging
from typing import Dict, Any, Optional, Tuple
from datetime import datetime

from rich.console import Console, ConsoleRenderable
from rich.text import Text
from rich.panel import Panel
from rich.table import Table
from rich.logging import RichHandler
from rich.traceback import Traceback
from rich.style import Style
from rich.columns import Columns

from .emojis import LEVEL_EMOJIS, UNKNOWN, get_emoji
from .themes import get_level_style, get_component_style


class EchoLogRecord:
    """Log record carrying the component/operation/context fields."""

    def __init__(
        self,
        level: str,
        message: str,
        component: Optional[str] = None,
        operation: Optional[str] = None,
        emoji: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        timestamp: Optional[float] = None,
        exception_info: Optional[Tuple] = None,
    ):
        """Initialize a log record.

        Args:
            level: Log level (info, debug, warning, error, critical, success)
            message: Log message
            component: Component name (core, api, server, ...)
            operation: Operation being performed
            emoji: Custom emoji override
            context: Additional contextual data
            timestamp: Unix timestamp (defaults to current time)
            exception_info: Exception info tuple (type, value, traceback)
        """
        self.level = level.lower()
        self.message = message
        self.component = component.lower() if component else None
        self.operation = operation.lower() if operation else None
        self.custom_emoji = emoji
        self.context = context or {}
        self.timestamp = timestamp or time.time()
        self.exception_info = exception_info

    @property
    def emoji(self) -> str:
        """Get the appropriate emoji for this log record."""
        if self.custom_emoji:
            return self.custom_emoji

        if self.operation:
            operation_emoji = get_emoji("operation", self.operation)
            if operation_emoji != UNKNOWN:
                return operation_emoji

        return LEVEL_EMOJIS.get(self.level, UNKNOWN)

    @property
    def style(self) -> Style:
        return get_level_style(self.level)

    @property
    def component_style(self) -> Style:
        if not self.component:
            return self.style
        return get_component_style(self.component)

    @property
    def format_time(self) -> str:
        """Format the timestamp for display."""
        dt = datetime.fromtimestamp(self.timestamp)
        return dt.strftime("%H:%M:%S.%f")[:-3]  # milliseconds

    def has_exception(self) -> bool:
        return self.exception_info is not None


class EchoLogFormatter:
    """Base formatter that converts records to Rich renderables."""

    def __init__(self, show_time: bool = True, show_level: bool = True, show_component: bool = True):
        self.show_time = show_time
        self.show_level = show_level
        self.show_component = show_component

    def _header(self, record: EchoLogRecord) -> Text:
        header = Text()

        if self.show_time:
            header.append(f"[{record.format_time}] ", style="timestamp")

        header.append(f"{record.emoji} ", style=record.style)

        if self.show_level:
            header.append(f"[{record.level.upper()}] ", style=record.style)

        if self.show_component and record.component:
            header.append(f"[{record.component}] ", style=record.component_style)

        if record.operation:
            header.append(f"{record.operation}: ", style="operation")

        header.append(record.message)
        return header

    def format_record(self, record: EchoLogRecord) -> ConsoleRenderable:
        """Format a record into a Rich renderable.

        Args:
            record: The log record to format

        Returns:
            A Rich renderable object
        """
        raise NotImplementedError("Subclasses must implement format_record")


class SimpleLogFormatter(EchoLogFormatter):
    """Simple single-line log formatter."""

    def format_record(self, record: EchoLogRecord) -> Text:
        return self._header(record)


class DetailedLogFormatter(EchoLogFormatter):
    """Multi-line formatter that can include context data and tracebacks."""

    def __init__(
        self,
        show_time: bool = True,
        show_level: bool = True,
        show_component: bool = True,
        show_context: bool = True,
        context_max_depth: int = 2,
    ):
        super().__init__(show_time, show_level, show_component)
        self.show_context = show_context
        self.context_max_depth = context_max_depth

    def _format_value(self, value: Any, depth: int = 0) -> str:
        if depth >= self.context_max_depth and isinstance(value, (dict, list)):
            return f"<{type(value).__name__} with {len(value)} items>"
        if isinstance(value, dict):
            return "{...}" if value else "{}"
        if isinstance(value, (list, tuple)):
            if not value:
                return "[]" if isinstance(value, list) else "()"
            return "[...]" if isinstance(value, list) else "(...)"
        return str(value)

    def format_record(self, record: EchoLogRecord) -> ConsoleRenderable:
        """Format a record with its context table and traceback, if any.

        Args:
            record: The log record to format

        Returns:
            Formatted Panel, Columns or Text object
        """
        header = self._header(record)

        if not self.show_context or (not record.context and not record.has_exception()):
            return header

        elements = [header]

        if record.context:
            context_table = Table(box=None, expand=False, padding=(0, 1))
            context_table.add_column("Key", style="bright_black")
            context_table.add_column("Value")
            for key, value in record.context.items():
                context_table.add_row(str(key), self._format_value(value))
            elements.append(context_table)

        if record.has_exception():
            exc_type, exc_value, exc_tb = record.exception_info
            elements.append(Traceback.from_exception(exc_type, exc_value, exc_tb))

        if record.level in ("error", "critical"):
            return Panel(
                Columns(elements, padding=(0, 1)),
                title=f"{record.level.upper()} in {record.component or 'echo_inspector'}",
                border_style=record.style,
                padding=(1, 2),
            )

        return Columns(elements, padding=(0, 2))


class RichLoggingHandler(RichHandler):
    """Rich logging handler that renders records with our formatters."""

    def __init__(
        self,
        level: int = logging.NOTSET,
        console: Optional[Console] = None,
        formatter: Optional[EchoLogFormatter] = None,
        **kwargs
    ):
        """Initialize the Rich logging handler.

        Args:
            level: Logging level
            console: Rich console to use
            formatter: Record formatter
            **kwargs: Additional arguments passed to RichHandler
        """
        super().__init__(level=level, console=console, **kwargs)
        self.echo_formatter = formatter or SimpleLogFormatter()

    def render(
        self,
        *,
        record: logging.LogRecord,
        traceback: Optional[Traceback],
        message_renderable: ConsoleRenderable,
    ) -> ConsoleRenderable:
        """Render a log record using the configured formatter.

        Component, operation, emoji and context travel in the record extras.
        """
        echo_record = EchoLogRecord(
            level=record.levelname.lower(),
            message=record.getMessage(),
            component=getattr(record, "component", None),
            operation=getattr(record, "operation", None),
            emoji=getattr(record, "emoji", None),
            context=getattr(record, "context", None),
            timestamp=record.created,
            exception_info=(record.exc_info if record.exc_info else None),
        )
        return self.echo_formatter.format_record(echo_record)


def create_rich_console_handler(**kwargs):
    """Factory function to create a RichLoggingHandler for dictConfig."""
    # Imported here to avoid a circular import at module level
    from .console import console

    formatter = DetailedLogFormatter() if kwargs.get("detailed") else SimpleLogFormatter()
    return RichLoggingHandler(
        level=kwargs.get("level", logging.NOTSET),
        console=console,
        formatter=formatter,
        show_path=kwargs.get("show_path", False),
        markup=kwargs.get("markup", False),
        rich_tracebacks=kwargs.get("rich_tracebacks", True),
    )
