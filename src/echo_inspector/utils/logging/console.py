"""
Rich console configuration for echo-inspector.

This module provides the configured Rich console instance used by the
logger and the CLI, along with a few printing helpers.
"""
import json
from typing import Any

from rich.console import Console
from rich.syntax import Syntax

from .themes import RICH_THEME

# Configure global console with our theme
console = Console(
    theme=RICH_THEME,
    highlight=True,
    markup=True,
    emoji=True,
    record=False,
    width=None,  # Auto-width
    color_system="auto",
)


def print_json(data: Any, indent: int = 2) -> None:
    """Print data as syntax-highlighted JSON."""
    rendered = data if isinstance(data, str) else json.dumps(data, indent=indent, ensure_ascii=False)
    console.print(Syntax(rendered, "json", theme="monokai", word_wrap=True))


def print_plain(text: str) -> None:
    """Print text exactly as given, without markup or highlighting."""
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)
