"""
HTTP layer for echo-inspector: routers and middleware.
"""

from echo_inspector.api.app import create_api_router

__all__ = ["create_api_router"]
