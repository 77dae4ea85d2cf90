"""
Service routes: index, health and version.
"""

from fastapi import APIRouter

from echo_inspector.version import __version__, get_version_info

router = APIRouter(tags=["System"])

ENDPOINTS = [
    {
        "path": "/json",
        "description": "Returns all request data as JSON (method, URL, query, client, headers, body, data)",
    },
    {
        "path": "/raw",
        "description": "Returns the request in raw HTTP format with client info, headers and body",
    },
    {"path": "/raw/h", "description": "Returns the request line and headers only"},
    {"path": "/raw/b", "description": "Returns the request line and body only"},
]


@router.get("/")
async def index():
    """Describe the service and its echo endpoints."""
    return {
        "name": "echo-inspector",
        "description": (
            "A simple HTTP request inspector that echoes back your requests. "
            "Add ?__body=... to any echo URL to override the request body."
        ),
        "version": __version__,
        "endpoints": ENDPOINTS,
    }


@router.get("/health")
async def health():
    return {"status": "ok", "version": __version__}


@router.get("/version")
async def version():
    return get_version_info()
