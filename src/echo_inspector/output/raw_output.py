"""
Raw HTTP/1.1-style output for inspected requests.

The message is rebuilt line by line: the request line, then optional
client pseudo-headers, the captured headers and a blank-line-separated
body. Values and body are written verbatim; a body containing blank lines
or header-like lines makes the output ambiguous, and that is accepted.
"""

from enum import Enum
from typing import List, Optional

from echo_inspector.constants import CONTENT_TYPE_RAW, RAW_BODY_TOKEN, RAW_HEADERS_TOKEN
from echo_inspector.core.models import NormalizedRequest
from echo_inspector.output.formatter import RequestRenderer


class RawSelector(str, Enum):
    """Which sections of the raw message to emit."""

    ALL = "all"
    HEADERS = "headers"
    BODY = "body"

    @classmethod
    def from_suffix(cls, suffix: Optional[str]) -> "RawSelector":
        """Derive the selector from the path after ``/raw/``.

        Only the first segment counts: ``h`` selects headers, ``b`` selects
        the body, anything else (or nothing) selects everything.
        """
        segment = (suffix or "").lstrip("/").split("/", 1)[0]
        if segment == RAW_HEADERS_TOKEN:
            return cls.HEADERS
        if segment == RAW_BODY_TOKEN:
            return cls.BODY
        return cls.ALL

    @property
    def includes_client(self) -> bool:
        return self is RawSelector.ALL

    @property
    def includes_headers(self) -> bool:
        return self in (RawSelector.ALL, RawSelector.HEADERS)

    @property
    def includes_body(self) -> bool:
        return self in (RawSelector.ALL, RawSelector.BODY)


def canonical_header_name(name: str) -> str:
    """Upper-case the first character of each hyphen-delimited segment.

    ``content-type`` becomes ``Content-Type``; the rest of each segment is
    left as it is.
    """
    return "-".join(part[:1].upper() + part[1:] for part in name.split("-"))


class RawRenderer(RequestRenderer):
    """Rebuild a plaintext HTTP message from a NormalizedRequest."""

    media_type = CONTENT_TYPE_RAW

    def __init__(self, selector: RawSelector = RawSelector.ALL):
        self.selector = selector

    def request_line(self, request: NormalizedRequest) -> str:
        return f"{request.method} {request.pathname}{request.search} HTTP/1.1"

    def client_lines(self, request: NormalizedRequest) -> List[str]:
        client = request.client
        lines = [f"X-Client-IP: {client.ip}"]
        if client.real_ip:
            lines.append(f"X-Real-IP: {client.real_ip}")
        lines.append(f"X-Protocol: {client.protocol}")
        lines.append(f"X-Host: {client.host}")
        if client.user_agent:
            lines.append(f"X-User-Agent: {client.user_agent}")
        return lines

    def header_lines(self, request: NormalizedRequest) -> List[str]:
        return [f"{canonical_header_name(name)}: {value}" for name, value in request.headers.items()]

    def render(self, request: NormalizedRequest) -> str:
        lines = [self.request_line(request)]

        if self.selector.includes_client:
            lines.extend(self.client_lines(request))

        if self.selector.includes_headers:
            lines.extend(self.header_lines(request))

        if self.selector.includes_body:
            # Blank separator is kept even when the body is empty
            lines.append("")
            lines.append(request.body)

        return "\n".join(lines)


def render_raw(request: NormalizedRequest, selector: RawSelector = RawSelector.ALL) -> str:
    """Render ``request`` as a raw HTTP message limited to ``selector``."""
    return RawRenderer(selector).render(request)
