"""
Defines the API routers mounted by the echo-inspector server.
"""

from fastapi import APIRouter

from echo_inspector.api.routes.echo import router as echo_router
from echo_inspector.api.routes.service import router as service_router


def create_api_router(mount_service_routes: bool = True) -> APIRouter:
    """Create the main router.

    Args:
        mount_service_routes: Whether to include /, /health and /version

    Returns:
        Router with the echo routes and, optionally, the service routes
    """
    api_router = APIRouter()
    if mount_service_routes:
        api_router.include_router(service_router)
    api_router.include_router(echo_router)
    return api_router
