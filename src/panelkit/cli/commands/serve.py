"""Serve the HTTP API."""

import logging
from typing import Annotated

import typer
import uvicorn

from panelkit.api.app import create_app
from panelkit.cli.context import CLIContext


def serve_command(
    ctx: typer.Context,
    host: Annotated[str, typer.Option("--host", help="Interface to bind")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", "-p", help="Port to listen on")] = 8000,
    log_level: Annotated[str, typer.Option("--log-level", help="Logging level")] = "info",
) -> None:
    """Bootstrap the panel and serve the API with uvicorn."""
    cli_ctx: CLIContext = ctx.obj
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    panel = cli_ctx.get_panel()
    try:
        panel.bootstrap()
        uvicorn.run(create_app(panel), host=host, port=port, log_level=log_level.lower())
    finally:
        cli_ctx.close()
