"""
Middleware for the echo-inspector server: request logging and error handling.
"""

from echo_inspector.api.middleware.error import add_error_handlers
from echo_inspector.api.middleware.logging import add_logging_middleware

__all__ = ["add_error_handlers", "add_logging_middleware"]
