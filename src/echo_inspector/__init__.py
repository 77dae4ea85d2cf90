"""
echo-inspector - HTTP request inspector.

Echoes any incoming HTTP request back as structured JSON or as a
reconstructed raw HTTP message. Useful for debugging webhooks, proxies and
HTTP clients.
"""

from .version import __version__

# Initialize logging early
from echo_inspector.utils.logging import logger

from echo_inspector.config import load_config, get_config
from echo_inspector.core import ClientInfo, NormalizedRequest, normalize_request
from echo_inspector.output import JsonRenderer, RawRenderer, RawSelector, render_json, render_raw

# Package metadata
__title__ = "echo-inspector"
__description__ = "HTTP request inspector that echoes requests back as JSON or raw HTTP"
__license__ = "MIT"

__all__ = [
    "ClientInfo",
    "NormalizedRequest",
    "normalize_request",
    "JsonRenderer",
    "RawRenderer",
    "RawSelector",
    "render_json",
    "render_raw",
    "load_config",
    "get_config",
    "logger",
    "__version__",
]
