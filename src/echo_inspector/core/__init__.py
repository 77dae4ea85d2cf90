"""
Request normalization core.
"""

from echo_inspector.core.models import ClientInfo, NormalizedRequest
from echo_inspector.core.normalizer import (
    BodyReader,
    collect_headers,
    find_body_override,
    normalize_request,
    parse_data,
    parse_query,
    resolve_body,
    resolve_client_info,
    split_url,
)

__all__ = [
    "ClientInfo",
    "NormalizedRequest",
    "BodyReader",
    "collect_headers",
    "find_body_override",
    "normalize_request",
    "parse_data",
    "parse_query",
    "resolve_body",
    "resolve_client_info",
    "split_url",
]
