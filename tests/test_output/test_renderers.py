import json

import pytest

from echo_inspector.core.models import ClientInfo, NormalizedRequest
from echo_inspector.output.json_output import JsonRenderer, render_json
from echo_inspector.output.raw_output import (
    RawRenderer,
    RawSelector,
    canonical_header_name,
    render_raw,
)


def make_request(**overrides) -> NormalizedRequest:
    fields = dict(
        method="GET",
        url="http://example.com/raw?x=1",
        pathname="/raw",
        search="?x=1",
        query={"x": "1"},
        client=ClientInfo(ip="127.0.0.1", protocol="http", host="example.com", user_agent="test"),
        headers={"host": "example.com", "content-type": "text/plain", "x-foo": "bar", "user-agent": "test"},
        body="",
        data=None,
    )
    fields.update(overrides)
    return NormalizedRequest(**fields)


# --- selector ---

@pytest.mark.parametrize(
    "suffix, expected",
    [
        (None, RawSelector.ALL),
        ("", RawSelector.ALL),
        ("h", RawSelector.HEADERS),
        ("b", RawSelector.BODY),
        ("h/extra", RawSelector.HEADERS),
        ("/b", RawSelector.BODY),
        ("hb", RawSelector.ALL),
        ("anything", RawSelector.ALL),
        ("H", RawSelector.ALL),
    ],
)
def test_selector_from_suffix(suffix, expected):
    assert RawSelector.from_suffix(suffix) is expected


def test_selector_sections_are_exclusive():
    assert (RawSelector.ALL.includes_client, RawSelector.ALL.includes_headers, RawSelector.ALL.includes_body) == (
        True, True, True,
    )
    assert (RawSelector.HEADERS.includes_client, RawSelector.HEADERS.includes_body) == (False, False)
    assert (RawSelector.BODY.includes_client, RawSelector.BODY.includes_headers) == (False, False)


# --- raw renderer ---

@pytest.mark.parametrize(
    "name, expected",
    [
        ("content-type", "Content-Type"),
        ("x-foo", "X-Foo"),
        ("host", "Host"),
        ("x--double", "X--Double"),
        ("www-authenticate", "Www-Authenticate"),
    ],
)
def test_canonical_header_name(name, expected):
    assert canonical_header_name(name) == expected


def test_raw_all_sections_in_order():
    output = render_raw(make_request(body="hello"))
    assert output.split("\n") == [
        "GET /raw?x=1 HTTP/1.1",
        "X-Client-IP: 127.0.0.1",
        "X-Protocol: http",
        "X-Host: example.com",
        "X-User-Agent: test",
        "Host: example.com",
        "Content-Type: text/plain",
        "X-Foo: bar",
        "User-Agent: test",
        "",
        "hello",
    ]


def test_raw_optional_client_lines():
    client = ClientInfo(ip="9.9.9.9", real_ip="1.1.1.1", protocol="https", host="h", user_agent=None)
    lines = render_raw(make_request(client=client, headers={})).split("\n")
    assert lines[1:5] == ["X-Client-IP: 9.9.9.9", "X-Real-IP: 1.1.1.1", "X-Protocol: https", "X-Host: h"]
    assert not any(line.startswith("X-User-Agent") for line in lines)


def test_raw_headers_only():
    request = make_request(headers={"content-type": "text/plain", "x-foo": "bar"}, body="ignored")
    output = RawRenderer(RawSelector.HEADERS).render(request)
    assert output.split("\n") == ["GET /raw?x=1 HTTP/1.1", "Content-Type: text/plain", "X-Foo: bar"]


def test_raw_body_only():
    output = RawRenderer(RawSelector.BODY).render(make_request(body="hello"))
    first, rest = output.split("\n", 1)
    assert first == "GET /raw?x=1 HTTP/1.1"
    assert rest == "\nhello"


def test_raw_empty_body_keeps_blank_separator():
    output = render_raw(make_request(headers={}), RawSelector.BODY)
    assert output == "GET /raw?x=1 HTTP/1.1\n\n"


def test_raw_body_is_not_escaped():
    body = "line one\n\nX-Injected: yes"
    output = render_raw(make_request(body=body), RawSelector.BODY)
    assert output.endswith("\n\n" + body)


def test_raw_renderer_media_type():
    assert RawRenderer.media_type == "text/plain; charset=utf-8"


# --- json renderer ---

def test_json_keys_and_nesting():
    document = json.loads(render_json(make_request()))
    assert list(document) == [
        "method", "httpVersion", "url", "pathname", "search", "query", "client", "headers", "body", "data",
    ]
    assert list(document["client"]) == ["ip", "realIp", "protocol", "host", "userAgent"]
    assert document["httpVersion"] == "1.1"


def test_json_keeps_empty_fields():
    request = make_request(query={}, search="", body="", data=None, client=ClientInfo(
        ip="127.0.0.1", protocol="http", host="localhost",
    ))
    document = json.loads(render_json(request))
    assert document["query"] == {}
    assert document["data"] is None
    assert document["client"]["realIp"] is None
    assert document["client"]["userAgent"] is None


def test_json_round_trip_preserves_core_fields():
    request = make_request(method="POST", body='{"k": [1, 2]}', data={"k": [1, 2]})
    document = json.loads(JsonRenderer().render(request))
    assert document["method"] == request.method
    assert document["pathname"] == request.pathname
    assert document["query"] == request.query
    assert document["data"] == {"k": [1, 2]}


def test_json_output_is_compact_utf8_and_indent_is_optional():
    request = make_request(body="café")
    compact = render_json(request)
    assert '"body":"café"' in compact
    assert JsonRenderer(indent=2).render(request).startswith('{\n  "method": "GET"')
    assert JsonRenderer().render_bytes(request) == compact.encode("utf-8")


def test_json_escapes_lone_surrogates():
    request = make_request(body='"\\ud800"', data="\ud800")
    renderer = JsonRenderer()

    payload = renderer.render_bytes(request)

    assert b'"data":"\\ud800"' in payload
    assert json.loads(payload)["data"] == "\ud800"


def test_json_keeps_utf8_when_no_surrogates():
    assert '"data":"é"' in render_json(make_request(data="é"))
