"""
Emoji markers shown in front of log records.
"""
from typing import Dict

UNKNOWN = "❓"

LEVEL_EMOJIS: Dict[str, str] = {
    "debug": "🔍",
    "info": "ℹ️",
    "success": "✅",
    "warning": "⚠️",
    "error": "❌",
    "critical": "🚨",
}

# Keyed by the operation names passed to Logger calls
OPERATION_EMOJIS: Dict[str, str] = {
    "request": "📥",
    "response": "📤",
    "normalize": "🧹",
    "validation": "🚧",
    "exception": "💥",
    "startup": "🔆",
    "shutdown": "🔅",
}


def get_emoji(category: str, name: str) -> str:
    """Look up an emoji.

    Args:
        category: 'level' or 'operation'
        name: Level or operation name

    Returns:
        The emoji, or UNKNOWN when there is none
    """
    table = LEVEL_EMOJIS if category.lower() == "level" else OPERATION_EMOJIS
    return table.get(name.lower(), UNKNOWN)
