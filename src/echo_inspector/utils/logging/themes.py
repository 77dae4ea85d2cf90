"""
Console styles for echo-inspector.

Log levels, the components that log (api, echo, server, config, cli) and a
few inline markup names used by the CLI all resolve through RICH_THEME.
"""
from rich.style import Style
from rich.theme import Theme

LEVEL_STYLES = {
    "debug": Style(color="bright_black"),
    "info": Style(color="bright_blue"),
    "success": Style(color="green", bold=True),
    "warning": Style(color="yellow", bold=True),
    "error": Style(color="red", bold=True),
    "critical": Style(color="bright_red", bold=True, reverse=True),
}

COMPONENT_STYLES = {
    "api": Style(color="bright_yellow", bold=True),
    "echo": Style(color="bright_green", bold=True),
    "server": Style(color="bright_cyan", bold=True),
    "config": Style(color="bright_magenta", bold=True),
    "cli": Style(color="cyan", bold=True),
}

MARKUP_STYLES = {
    "operation": Style(color="magenta", bold=True),
    "timestamp": Style(color="bright_black", dim=True),
    "path": Style(color="bright_blue", underline=True),
    "muted": Style(color="bright_black", dim=True),
}

RICH_THEME = Theme({**LEVEL_STYLES, **COMPONENT_STYLES, **MARKUP_STYLES})


def get_level_style(level: str) -> Style:
    return LEVEL_STYLES.get(level.lower(), LEVEL_STYLES["info"])


def get_component_style(component: str) -> Style:
    """Style for a component name; unknown components fall back to the info style."""
    return COMPONENT_STYLES.get(component.lower(), LEVEL_STYLES["info"])
