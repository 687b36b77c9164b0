# filmwiki/cli/server.py
from __future__ import annotations

import typer
import uvicorn

from filmwiki import config


def serve(
    host: str = typer.Option(config.DEFAULT_HOST, help="Interface to bind"),
    port: int = typer.Option(config.DEFAULT_PORT, help="Port to listen on"),
    reload: bool = typer.Option(False, help="Reload on code changes (development)"),
) -> None:
    """
    Serve the lookup endpoint (POST /wikipedia) over HTTP.
    """
    uvicorn.run("filmwiki.api:app", host=host, port=port, reload=reload)
