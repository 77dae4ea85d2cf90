"""
Utility packages for echo-inspector: logging and error types.
"""

from echo_inspector.utils.errors import EchoInspectorError, ConfigurationError

__all__ = [
    "EchoInspectorError",
    "ConfigurationError",
]
