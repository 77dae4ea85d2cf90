"""
Base renderer for inspected requests.

A renderer turns a NormalizedRequest into the response payload of one
output format and knows the content type that goes with it.
"""

from abc import ABC, abstractmethod
from typing import TextIO

from echo_inspector.core.models import NormalizedRequest


class RequestRenderer(ABC):
    """Base class for all request renderers."""

    #: Content type sent with the rendered payload
    media_type: str = "text/plain; charset=utf-8"

    @abstractmethod
    def render(self, request: NormalizedRequest) -> str:
        """Render the request as text.

        Args:
            request: The normalized request

        Returns:
            Rendered text
        """

    def render_bytes(self, request: NormalizedRequest) -> bytes:
        """Render the request as UTF-8 bytes."""
        return self.render(request).encode("utf-8")

    def render_stream(self, request: NormalizedRequest, stream: TextIO) -> None:
        """Write the rendered request to a text stream."""
        stream.write(self.render(request))
