"""
Request normalization.

Turns the explicit parts of an inbound request (method, full URL, header
collection and an optional lazy body reader) into a NormalizedRequest.
Nothing here knows about the web framework, and nothing here raises:
unreadable bodies become "" and non-JSON bodies give ``data = None``.
"""
import json
import math
from typing import Any, Awaitable, Callable, Dict, Iterable, Mapping, Optional, Tuple, Union
from urllib.parse import parse_qsl, urlsplit

from echo_inspector.constants import (
    BODY_OVERRIDE_PARAM,
    BODYLESS_METHODS,
    DEFAULT_CLIENT_IP,
    DEFAULT_HOST,
    DEFAULT_PROTOCOL,
    HEADER_FORWARDED_FOR,
    HEADER_FORWARDED_PROTO,
    HEADER_HOST,
    HEADER_JOIN_SEPARATOR,
    HEADER_REAL_IP,
    HEADER_USER_AGENT,
)
from echo_inspector.core.models import ClientInfo, NormalizedRequest

HeaderSource = Union[Mapping[str, str], Iterable[Tuple[Any, Any]]]
BodyReader = Callable[[], Awaitable[Union[str, bytes]]]


def _to_str(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return str(value)


def _header_pairs(headers: HeaderSource) -> Iterable[Tuple[Any, Any]]:
    # Prefer the multi-valued view so repeated names are not lost
    if hasattr(headers, "multi_items"):
        return headers.multi_items()
    if hasattr(headers, "items"):
        return headers.items()
    return headers


def collect_headers(headers: HeaderSource) -> Dict[str, str]:
    """Build the lower-cased header map.

    Names keep the position of their first arrival. A name that repeats is
    collapsed into one entry whose values are joined with ", ".
    """
    collected: Dict[str, str] = {}
    for name, value in _header_pairs(headers):
        key = _to_str(name).strip().lower()
        text = _to_str(value)
        if key in collected:
            collected[key] = f"{collected[key]}{HEADER_JOIN_SEPARATOR}{text}"
        else:
            collected[key] = text
    return collected


def split_url(url: str) -> Tuple[str, str]:
    """Return ``(pathname, search)`` for a full URL or a bare request target."""
    parts = urlsplit(url)
    pathname = parts.path or "/"
    search = f"?{parts.query}" if parts.query else ""
    return pathname, search


def _query_pairs(search: str):
    return parse_qsl(search.lstrip("?"), keep_blank_values=True)


def parse_query(search: str) -> Dict[str, str]:
    """Parse a query string into a map, dropping the body override key.

    When a key repeats the last value wins.
    """
    return {key: value for key, value in _query_pairs(search) if key != BODY_OVERRIDE_PARAM}


def find_body_override(search: str) -> Optional[str]:
    """Return the first ``__body`` value in the query string, or None if absent."""
    for key, value in _query_pairs(search):
        if key == BODY_OVERRIDE_PARAM:
            return value
    return None


def _first_forwarded(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    return value.split(",")[0].strip()


def resolve_client_info(headers: Mapping[str, str]) -> ClientInfo:
    """Derive client details from a lower-cased header map.

    Empty header values are treated as missing.
    """
    real_ip = _first_forwarded(headers.get(HEADER_FORWARDED_FOR))
    return ClientInfo(
        ip=headers.get(HEADER_REAL_IP) or real_ip or DEFAULT_CLIENT_IP,
        real_ip=real_ip,
        protocol=headers.get(HEADER_FORWARDED_PROTO) or DEFAULT_PROTOCOL,
        host=headers.get(HEADER_HOST) or DEFAULT_HOST,
        user_agent=headers.get(HEADER_USER_AGENT) or None,
    )


async def resolve_body(method: str, search: str, read_body: Optional[BodyReader] = None) -> str:
    """Work out the effective request body.

    Order: the ``__body`` override (any method), then "" for GET and HEAD,
    then whatever the reader returns. The reader is only awaited in the last
    case, and any failure there yields "".
    """
    override = find_body_override(search)
    if override is not None:
        return override

    if method.upper() in BODYLESS_METHODS or read_body is None:
        return ""

    try:
        raw = await read_body()
    except Exception:
        return ""

    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw or ""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _parse_float(text: str) -> Optional[float]:
    value = float(text)
    # Out-of-range literals such as 1e400 have no JSON representation
    return value if math.isfinite(value) else None


def parse_data(body: str) -> Any:
    """Strictly parse ``body`` as JSON; None when empty or invalid."""
    if not body:
        return None
    try:
        return json.loads(body, parse_constant=_reject_constant, parse_float=_parse_float)
    except (ValueError, RecursionError):
        return None


async def normalize_request(
    method: str,
    url: str,
    headers: HeaderSource,
    read_body: Optional[BodyReader] = None,
) -> NormalizedRequest:
    """Build the NormalizedRequest for one inbound request.

    Args:
        method: HTTP method token, kept verbatim
        url: Full request URL (or request target) including the query string
        headers: Header pairs or mapping; names may repeat
        read_body: Coroutine function returning the entity body; only called
            when the body is actually needed

    Returns:
        The immutable normalized request
    """
    pathname, search = split_url(url)
    header_map = collect_headers(headers)
    body = await resolve_body(method, search, read_body)

    return NormalizedRequest(
        method=method,
        url=url,
        pathname=pathname,
        search=search,
        query=parse_query(search),
        client=resolve_client_info(header_map),
        headers=header_map,
        body=body,
        data=parse_data(body),
    )
