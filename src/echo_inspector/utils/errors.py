"""
echo-inspector error definitions.

The normalization core never raises; these errors belong to the ambient
layers (configuration, CLI, server wiring).
"""

from typing import Optional, Dict, Any


class EchoInspectorError(Exception):
    """Base exception class for all echo-inspector errors."""

    def __init__(
        self, message: str, code: Optional[str] = None, details: Optional[Dict[str, Any]] = None
    ):
        """Initialize an error with optional error code and details.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
            details: Additional error context and details
        """
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(EchoInspectorError):
    """Error raised when there's an issue with configuration."""

    def __init__(
        self, message: str, path: Optional[str] = None, details: Optional[Dict[str, Any]] = None
    ):
        error_details = details or {}
        if path:
            error_details["path"] = path
        super().__init__(message, "CONFIGURATION_ERROR", error_details)
