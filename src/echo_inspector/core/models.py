"""
Data models for inspected requests.

Both models are frozen: a NormalizedRequest is built once per inbound
request and only read afterwards. Field names are snake_case in Python and
camelCase on the wire (``model_dump(by_alias=True)``).
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from echo_inspector.version import REPORTED_HTTP_VERSION


class ClientInfo(BaseModel):
    """Client address and edge information derived from request headers."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ip: str = Field(..., min_length=1, description="Resolved address of the caller")
    real_ip: Optional[str] = Field(None, alias="realIp", description="First x-forwarded-for entry")
    protocol: str = Field(..., description="Scheme as seen by the edge")
    host: str = Field(..., description="Host header value")
    user_agent: Optional[str] = Field(None, alias="userAgent", description="User-Agent header value")


class NormalizedRequest(BaseModel):
    """Canonical representation of one inbound request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    method: str = Field(..., description="Verbatim HTTP method token")
    http_version: str = Field(REPORTED_HTTP_VERSION, alias="httpVersion")
    url: str = Field(..., description="Full request URL as received")
    pathname: str = Field(..., description="URL path component")
    search: str = Field("", description="'?' plus the query string, or empty")
    query: Dict[str, str] = Field(default_factory=dict, description="Query parameters without __body")
    client: ClientInfo
    headers: Dict[str, str] = Field(default_factory=dict, description="Lower-cased header name to value")
    body: str = Field("", description="Raw body text or the __body override")
    data: Any = Field(None, description="Body parsed as JSON, or None")

    def to_wire(self) -> Dict[str, Any]:
        """Return the camelCase dictionary used by the JSON output."""
        return self.model_dump(by_alias=True)
