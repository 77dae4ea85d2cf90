"""
JSON output for inspected requests.
"""

import json
import re
from typing import Optional

from echo_inspector.constants import CONTENT_TYPE_JSON
from echo_inspector.core.models import NormalizedRequest
from echo_inspector.output.formatter import RequestRenderer

_SURROGATE = re.compile(r"[\ud800-\udfff]")


class JsonRenderer(RequestRenderer):
    """Serialize a NormalizedRequest as a JSON object.

    Keys are always ``method, httpVersion, url, pathname, search, query,
    client, headers, body, data`` in that order; nothing is dropped when
    empty, so ``data`` may be ``null`` and ``query`` may be ``{}``.
    """

    media_type = CONTENT_TYPE_JSON

    def __init__(self, indent: Optional[int] = None):
        """Initialize the JSON renderer.

        Args:
            indent: Indentation for pretty output; compact when None
        """
        self.indent = indent

    def render(self, request: NormalizedRequest) -> str:
        separators = None if self.indent is not None else (",", ":")
        wire = request.to_wire()
        text = json.dumps(wire, indent=self.indent, separators=separators, ensure_ascii=False)
        # Lone surrogates from \uXXXX escapes cannot be encoded as UTF-8
        if _SURROGATE.search(text):
            text = json.dumps(wire, indent=self.indent, separators=separators, ensure_ascii=True)
        return text


def render_json(request: NormalizedRequest, indent: Optional[int] = None) -> str:
    """Render ``request`` as JSON text."""
    return JsonRenderer(indent=indent).render(request)
