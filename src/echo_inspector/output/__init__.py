"""
Output renderers for inspected requests.
"""

from echo_inspector.output.formatter import RequestRenderer
from echo_inspector.output.json_output import JsonRenderer, render_json
from echo_inspector.output.raw_output import (
    RawRenderer,
    RawSelector,
    canonical_header_name,
    render_raw,
)

__all__ = [
    "RequestRenderer",
    "JsonRenderer",
    "render_json",
    "RawRenderer",
    "RawSelector",
    "canonical_header_name",
    "render_raw",
]
