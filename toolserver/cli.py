"""Command-line entry point — one process per transport.

Invariants:
    - stdio transports never write anything but protocol lines to stdout
    - Logging configured once per command from settings (stderr)
"""

import asyncio
import json
import sys
from typing import Optional

import typer

from toolserver.config import get_settings
from toolserver.infrastructure.observability import setup_logging

app = typer.Typer(
    name="toolserver",
    help="Developer tools exposed over JSON-RPC (MCP tools/list + tools/call).",
    no_args_is_help=True,
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        settings = get_settings()
        typer.echo(f"{settings.server_name} {settings.server_version}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Run the tool server over HTTP or stdio, or proxy stdio to a remote server."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)


@app.command("serve-http")
def serve_http(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Bind port"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes"),
) -> None:
    """Serve POST /mcp and the health probes with uvicorn."""
    import uvicorn

    uvicorn.run("toolserver.main:app", host=host, port=port, reload=reload, log_config=None)


@app.command("serve-stdio")
def serve_stdio_command() -> None:
    """Serve newline-delimited JSON-RPC on stdin/stdout."""
    from toolserver.api.stdio_server import serve_stdio
    from toolserver.services.jsonrpc_dispatch import build_rpc_dispatcher

    dispatcher = build_rpc_dispatcher(get_settings())
    asyncio.run(serve_stdio(dispatcher, sys.stdin, sys.stdout))


@app.command("proxy")
def proxy_command(
    url: Optional[str] = typer.Option(
        None,
        "--url",
        "-u",
        help="Remote /mcp endpoint (defaults to PROXY_TARGET_URL)",
        envvar="PROXY_TARGET_URL",
    ),
) -> None:
    """Forward stdin JSON-RPC to a remote HTTP endpoint."""
    from toolserver.api.stdio_proxy import StdioProxy

    proxy = StdioProxy.from_settings(get_settings(), target_url=url)
    asyncio.run(proxy.run(sys.stdin, sys.stdout))


@app.command("tools")
def tools_command(
    names_only: bool = typer.Option(False, "--names", "-n", help="Print tool names only"),
) -> None:
    """Print the tool catalog as JSON."""
    from toolserver.services.tools_registry import list_tools

    tools = list_tools(get_settings())
    if names_only:
        for tool in tools:
            typer.echo(tool["name"])
        return
    typer.echo(json.dumps(tools, indent=2, ensure_ascii=False))
