"""
Command-line interface for echo-inspector.

This module provides the main entry point for the echo-inspector CLI.
"""
import asyncio
import sys
from enum import Enum
from typing import List, Optional, Tuple

import typer
import yaml
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from echo_inspector.config import get_config_as_dict, load_config, save_config
from echo_inspector.core.normalizer import normalize_request
from echo_inspector.output.formatter import RequestRenderer
from echo_inspector.output.json_output import JsonRenderer
from echo_inspector.output.raw_output import RawRenderer, RawSelector
from echo_inspector.utils.errors import ConfigurationError
from echo_inspector.utils.logging import console, logger, print_json, print_plain
from echo_inspector.version import get_version_info

# Create the Typer app
app = typer.Typer(
    name="echo-inspector",
    help="echo-inspector - HTTP request inspector that echoes requests back",
    add_completion=False,
)

config_app = typer.Typer(help="Configuration management commands")
app.add_typer(config_app, name="config")


class OutputFormat(str, Enum):
    json = "json"
    raw = "raw"


@app.callback()
def callback(
    ctx: typer.Context,
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="Path to configuration file"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output"
    ),
):
    """echo-inspector command-line interface."""
    try:
        config = load_config(config_file)
    except (ConfigurationError, FileNotFoundError) as e:
        console.print(f"[error]Failed to load configuration: {escape(str(e))}[/error]")
        raise typer.Exit(code=1)

    final_log_level = "debug" if verbose else config.server.log_level
    logger.set_level(final_log_level)
    ctx.meta["final_log_level"] = final_log_level
    ctx.meta["config_file"] = config_file


@app.command()
def serve(
    ctx: typer.Context,
    host: Optional[str] = typer.Option(None, "--host", "-h", help="Host to bind to"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to bind to"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", help="Number of worker processes"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override the log level"),
):
    """Run the echo server."""
    # Imported lazily so offline commands don't pay for uvicorn
    from echo_inspector.server import start_server

    start_server(
        host=host,
        port=port,
        workers=workers,
        log_level=log_level or ctx.meta.get("final_log_level"),
        reload=reload,
        config_file=ctx.meta.get("config_file"),
    )


@app.command()
def version():
    """Show version information."""
    info = get_version_info()

    title = Text()
    title.append("echo-inspector", style="bold bright_blue")

    version_table = Table(box=None, show_header=False, padding=(0, 2))
    version_table.add_column("Key", style="bright_black")
    version_table.add_column("Value", style="bright_blue")

    version_table.add_row("Version", info["package_version"])
    version_table.add_row("Reported HTTP Version", info["reported_http_version"])
    version_table.add_row("Min Python Version", info["minimum_python_version"])

    console.print(Panel(version_table, title=title, border_style="bright_blue", padding=(1, 2)))


def parse_header_option(value: str) -> Tuple[str, str]:
    """Split a ``Name: value`` option into its parts."""
    name, sep, header_value = value.partition(":")
    if not sep or not name.strip():
        raise typer.BadParameter(f"Header must look like 'Name: value', got {value!r}")
    return name.strip(), header_value.strip()


@app.command()
def render(
    url: str = typer.Argument(..., help="Request URL or target, e.g. 'http://localhost/raw?x=1'"),
    method: str = typer.Option("GET", "--method", "-X", help="HTTP method"),
    header: Optional[List[str]] = typer.Option(
        None, "--header", "-H", help="Header as 'Name: value' (repeatable)"
    ),
    body: Optional[str] = typer.Option(None, "--body", "-d", help="Request body"),
    output_format: OutputFormat = typer.Option(OutputFormat.json, "--format", "-f", help="Output format"),
    parts: Optional[str] = typer.Option(None, "--parts", help="Raw sections: 'h' headers only, 'b' body only"),
):
    """Normalize an offline request and print it as the server would."""
    headers = [parse_header_option(value) for value in header or []]

    async def read_body() -> str:
        return body or ""

    normalized = asyncio.run(normalize_request(method, url, headers, read_body))

    renderer: RequestRenderer
    if output_format is OutputFormat.raw:
        renderer = RawRenderer(RawSelector.from_suffix(parts))
    else:
        renderer = JsonRenderer(indent=2)

    renderer.render_stream(normalized, sys.stdout)
    sys.stdout.write("\n")


@config_app.command("show")
def config_show(
    as_json: bool = typer.Option(False, "--json", help="Print as JSON instead of YAML"),
):
    """Show the effective configuration."""
    config = get_config_as_dict()
    if as_json:
        print_json(config)
    else:
        print_plain(yaml.safe_dump(config, default_flow_style=False).rstrip())


@config_app.command("save")
def config_save(
    path: str = typer.Argument(..., help="Destination file (.yaml, .yml or .json)"),
):
    """Save the effective configuration to a file."""
    try:
        save_config(path)
    except ConfigurationError as e:
        console.print(f"[error]{escape(e.message)}[/error]")
        raise typer.Exit(code=1)
    console.print(f"[success]Configuration saved to {path}[/success]")


def main():
    app()


if __name__ == "__main__":
    main()
