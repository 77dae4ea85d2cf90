"""
Echo routes: /json and /raw.

These handlers only adapt the Starlette request into the explicit inputs
the normalizer takes and pick the renderer. They always answer 200.
"""

from fastapi import APIRouter, Request, Response

from echo_inspector.constants import ECHO_METHODS
from echo_inspector.core.models import NormalizedRequest
from echo_inspector.core.normalizer import BodyReader, normalize_request
from echo_inspector.output.formatter import RequestRenderer
from echo_inspector.output.json_output import JsonRenderer
from echo_inspector.output.raw_output import RawRenderer, RawSelector
from echo_inspector.utils.logging import logger

router = APIRouter()


def request_url(request: Request) -> str:
    """Rebuild the full URL with the request target exactly as it arrived."""
    raw_path = request.scope.get("raw_path")
    if raw_path:
        target = raw_path.split(b"?", 1)[0].decode("latin-1")
    else:
        target = request.url.path
    query = request.scope.get("query_string", b"").decode("latin-1")

    url = f"{request.url.scheme}://{request.url.netloc}{target}"
    return f"{url}?{query}" if query else url


def body_reader(request: Request) -> BodyReader:
    """Wrap the request body in a lazy reader."""

    async def read() -> bytes:
        return await request.body()

    return read


async def normalize(request: Request) -> NormalizedRequest:
    with logger.time_operation("normalize", component="echo"):
        return await normalize_request(
            request.method,
            request_url(request),
            request.headers.items(),
            body_reader(request),
        )


def _respond(renderer: RequestRenderer, normalized: NormalizedRequest) -> Response:
    return Response(content=renderer.render_bytes(normalized), media_type=renderer.media_type)


@router.api_route("/json", methods=ECHO_METHODS, tags=["Echo"])
@router.api_route("/json/{path:path}", methods=ECHO_METHODS, tags=["Echo"])
async def echo_json(request: Request) -> Response:
    """
    Echo the request as JSON.

    Returns method, URL parts, query, client info, headers, body and the
    body parsed as JSON (or null).
    """
    normalized = await normalize(request)
    return _respond(JsonRenderer(), normalized)


@router.api_route("/raw", methods=ECHO_METHODS, tags=["Echo"])
@router.api_route("/raw/{parts:path}", methods=ECHO_METHODS, tags=["Echo"])
async def echo_raw(request: Request) -> Response:
    """
    Echo the request as a raw HTTP message.

    ``/raw/h`` returns only the headers, ``/raw/b`` only the body; any other
    suffix returns client info, headers and body.
    """
    selector = RawSelector.from_suffix(request.path_params.get("parts"))
    normalized = await normalize(request)
    return _respond(RawRenderer(selector), normalized)
