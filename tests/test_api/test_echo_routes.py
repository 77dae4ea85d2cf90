import pytest
import httpx

from echo_inspector.config import EchoInspectorConfig, ServerConfig
from echo_inspector.server import create_server
from echo_inspector.utils.logging import capture_logs


def make_app(**server_options):
    return create_server(EchoInspectorConfig(server=ServerConfig(**server_options)))


class EchoClient:
    """Test client that talks to the app in-process through the ASGI transport."""

    def __init__(self, app=None):
        self._client = httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app or make_app()),
            base_url="http://testserver",
            timeout=30.0,
        )

    async def __aenter__(self):
        return self._client

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self._client.aclose()


# --- /json ---

@pytest.mark.asyncio
async def test_json_get_echoes_request():
    async with EchoClient() as client:
        response = await client.get("/json?x=1&y=two", headers={"user-agent": "test", "x-foo": "bar"})

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    document = response.json()
    assert document["method"] == "GET"
    assert document["httpVersion"] == "1.1"
    assert document["url"] == "http://testserver/json?x=1&y=two"
    assert document["pathname"] == "/json"
    assert document["search"] == "?x=1&y=two"
    assert document["query"] == {"x": "1", "y": "two"}
    assert document["client"] == {
        "ip": "127.0.0.1",
        "realIp": None,
        "protocol": "http",
        "host": "testserver",
        "userAgent": "test",
    }
    assert document["headers"]["x-foo"] == "bar"
    assert document["body"] == ""
    assert document["data"] is None


@pytest.mark.asyncio
async def test_json_post_parses_body():
    async with EchoClient() as client:
        response = await client.post("/json", json={"hello": "world", "n": [1, 2]})

    document = response.json()
    assert document["method"] == "POST"
    assert document["data"] == {"hello": "world", "n": [1, 2]}
    assert document["headers"]["content-type"] == "application/json"


@pytest.mark.asyncio
async def test_json_post_non_json_body():
    async with EchoClient() as client:
        response = await client.put("/json", content=b"plain text")

    document = response.json()
    assert document["body"] == "plain text"
    assert document["data"] is None


@pytest.mark.asyncio
async def test_json_body_override_on_get():
    async with EchoClient() as client:
        response = await client.get("/json", params={"__body": '{"a":1}', "k": "v"})

    document = response.json()
    assert document["body"] == '{"a":1}'
    assert document["data"] == {"a": 1}
    assert document["query"] == {"k": "v"}


@pytest.mark.asyncio
async def test_json_body_override_beats_entity_body():
    async with EchoClient() as client:
        response = await client.post("/json?__body=override", content=b"entity")

    assert response.json()["body"] == "override"


@pytest.mark.asyncio
async def test_json_client_ip_from_proxy_headers():
    async with EchoClient() as client:
        response = await client.get(
            "/json",
            headers={"x-real-ip": "9.9.9.9", "x-forwarded-for": "1.1.1.1, 2.2.2.2", "x-forwarded-proto": "https"},
        )

    client_info = response.json()["client"]
    assert client_info["ip"] == "9.9.9.9"
    assert client_info["realIp"] == "1.1.1.1"
    assert client_info["protocol"] == "https"


@pytest.mark.asyncio
async def test_json_repeated_headers_and_query_keys():
    async with EchoClient() as client:
        response = await client.get("/json?a=1&a=2", headers=[("x-dup", "a"), ("x-dup", "b")])

    document = response.json()
    assert document["headers"]["x-dup"] == "a, b"
    assert document["query"] == {"a": "2"}


@pytest.mark.asyncio
async def test_json_any_subpath_keeps_raw_target():
    async with EchoClient() as client:
        response = await client.get("/json/some/deep%20path")

    assert response.status_code == 200
    assert response.json()["pathname"] == "/json/some/deep%20path"


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["DELETE", "PATCH", "OPTIONS"])
async def test_json_other_methods(method):
    async with EchoClient() as client:
        response = await client.request(method, "/json", content=b"[1]")

    assert response.status_code == 200
    assert response.json()["method"] == method
    assert response.json()["data"] == [1]


@pytest.mark.asyncio
async def test_json_head_is_answered():
    async with EchoClient() as client:
        response = await client.head("/json")

    assert response.status_code == 200


# --- /raw ---

@pytest.mark.asyncio
async def test_raw_default_sections():
    async with EchoClient() as client:
        response = await client.get("/raw?x=1", headers={"user-agent": "test"})

    assert response.status_code == 200
    assert response.headers["content-type"] == "text/plain; charset=utf-8"
    lines = response.text.split("\n")
    assert lines[:5] == [
        "GET /raw?x=1 HTTP/1.1",
        "X-Client-IP: 127.0.0.1",
        "X-Protocol: http",
        "X-Host: testserver",
        "X-User-Agent: test",
    ]
    assert "Host: testserver" in lines
    assert "User-Agent: test" in lines
    assert lines[-2:] == ["", ""]


@pytest.mark.asyncio
async def test_raw_headers_only():
    async with EchoClient() as client:
        response = await client.post(
            "/raw/h", content=b"body", headers={"content-type": "text/plain", "x-foo": "bar"}
        )

    lines = response.text.split("\n")
    assert lines[0] == "POST /raw/h HTTP/1.1"
    assert "Content-Type: text/plain" in lines
    assert "X-Foo: bar" in lines
    assert not any(line.startswith("X-Client-IP") for line in lines)
    assert "" not in lines
    assert "body" not in lines


@pytest.mark.asyncio
async def test_raw_body_only():
    async with EchoClient() as client:
        response = await client.post("/raw/b", content=b"hello")

    assert response.text == "POST /raw/b HTTP/1.1\n\nhello"


@pytest.mark.asyncio
async def test_raw_body_only_with_override():
    async with EchoClient() as client:
        response = await client.get("/raw/b?__body=hi%20there")

    assert response.text == "GET /raw/b?__body=hi%20there HTTP/1.1\n\nhi there"


@pytest.mark.asyncio
async def test_raw_unknown_suffix_prints_everything():
    async with EchoClient() as client:
        response = await client.get("/raw/whatever")

    lines = response.text.split("\n")
    assert lines[0] == "GET /raw/whatever HTTP/1.1"
    assert lines[1] == "X-Client-IP: 127.0.0.1"
    assert lines[-2:] == ["", ""]


# --- service routes, middleware, config switches ---

@pytest.mark.asyncio
async def test_service_routes():
    async with EchoClient() as client:
        index = await client.get("/")
        health = await client.get("/health")
        version = await client.get("/version")

    assert index.status_code == 200
    assert [endpoint["path"] for endpoint in index.json()["endpoints"]] == ["/json", "/raw", "/raw/h", "/raw/b"]
    assert health.json()["status"] == "ok"
    assert "package_version" in version.json()


@pytest.mark.asyncio
async def test_service_routes_can_be_disabled():
    async with EchoClient(make_app(mount_service_routes=False)) as client:
        response = await client.get("/health")
        echo = await client.get("/json")

    assert response.status_code == 404
    assert echo.status_code == 200


@pytest.mark.asyncio
async def test_request_logging_middleware():
    with capture_logs("info") as logs:
        async with EchoClient() as client:
            response = await client.get("/json", headers={"x-request-id": "abc-123"})

    assert response.headers["x-request-id"] == "abc-123"
    assert "x-process-time" in response.headers
    assert logs.contains("Request abc-123: GET /json")
    assert logs.contains("Response abc-123: 200")


@pytest.mark.asyncio
async def test_access_log_can_be_disabled():
    async with EchoClient(make_app(access_log=False)) as client:
        response = await client.get("/json")

    assert "x-request-id" not in response.headers


# --- malformed input still echoes ---

@pytest.mark.asyncio
async def test_json_body_with_lone_surrogate_escape():
    async with EchoClient() as client:
        posted = await client.post("/json", content=b'"\\ud800"')
        overridden = await client.get("/json", params={"__body": '"\\ud800"'})

    for response in (posted, overridden):
        assert response.status_code == 200
        assert response.json()["body"] == '"\\ud800"'
        assert response.json()["data"] == "\ud800"


@pytest.mark.asyncio
async def test_preflight_options_is_echoed():
    headers = {"origin": "http://a.example", "access-control-request-method": "POST"}
    async with EchoClient() as client:
        as_json = await client.options("/json", headers=headers)
        as_raw = await client.options("/raw/h", headers=headers)

    assert as_json.status_code == 200
    assert as_json.headers["content-type"] == "application/json"
    document = as_json.json()
    assert document["method"] == "OPTIONS"
    assert document["headers"]["access-control-request-method"] == "POST"
    assert document["headers"]["origin"] == "http://a.example"

    assert as_raw.status_code == 200
    assert as_raw.text.split("\n")[0] == "OPTIONS /raw/h HTTP/1.1"
    assert "Access-Control-Request-Method: POST" in as_raw.text.split("\n")


@pytest.mark.asyncio
async def test_cors_headers_when_origins_configured():
    async with EchoClient(make_app(cors_origins=["http://a.example"])) as client:
        response = await client.get("/json", headers={"origin": "http://a.example"})

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://a.example"
