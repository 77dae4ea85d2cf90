import json

import pytest
from typer.testing import CliRunner

from echo_inspector import config as config_module
from echo_inspector.__main__ import app, parse_header_option

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    for key in list(config_module.os.environ):
        if key.startswith("ECHO_INSPECTOR_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATHS", [])
    config_module.reset_config()
    yield
    config_module.reset_config()


def test_render_raw():
    result = runner.invoke(
        app, ["render", "http://localhost/raw?x=1", "--format", "raw", "-H", "User-Agent: test"]
    )

    assert result.exit_code == 0, result.output
    lines = result.output.split("\n")
    assert lines[:6] == [
        "GET /raw?x=1 HTTP/1.1",
        "X-Client-IP: 127.0.0.1",
        "X-Protocol: http",
        "X-Host: localhost",
        "X-User-Agent: test",
        "User-Agent: test",
    ]


def test_render_raw_body_only():
    result = runner.invoke(
        app, ["render", "/raw/b", "-X", "POST", "-d", "hello", "--format", "raw", "--parts", "b"]
    )

    assert result.exit_code == 0, result.output
    assert result.output.startswith("POST /raw/b HTTP/1.1\n\nhello")


def test_render_json():
    result = runner.invoke(
        app,
        ["render", "http://example.com/json?__body=%5B1%5D&k=v", "-H", "Host: example.com", "-H", "X-Dup: a",
         "-H", "X-Dup: b"],
    )

    assert result.exit_code == 0, result.output
    document = json.loads(result.output)
    assert document["body"] == "[1]"
    assert document["data"] == [1]
    assert document["query"] == {"k": "v"}
    assert document["client"]["host"] == "example.com"
    assert document["headers"]["x-dup"] == "a, b"


def test_render_rejects_malformed_header():
    result = runner.invoke(app, ["render", "/json", "-H", "no-colon"])
    assert result.exit_code != 0


def test_parse_header_option():
    assert parse_header_option("Content-Type:  text/plain ") == ("Content-Type", "text/plain")
    assert parse_header_option("X-Empty:") == ("X-Empty", "")


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_config_show_json():
    result = runner.invoke(app, ["config", "show", "--json"])
    assert result.exit_code == 0, result.output
    assert '"port": 8080' in result.output


def test_config_save(tmp_path):
    target = tmp_path / "saved.yaml"
    result = runner.invoke(app, ["config", "save", str(target)])

    assert result.exit_code == 0, result.output
    assert "port: 8080" in target.read_text()


def test_missing_config_file_exits_with_error(tmp_path):
    result = runner.invoke(app, ["--config", str(tmp_path / "missing.yaml"), "version"])
    assert result.exit_code == 1
