# filmwiki/api.py
"""FastAPI surface for the Wikipedia lookup.

The browser client calls this cross-origin, so every response (including
the bare OPTIONS preflight) carries permissive CORS headers.

Each request gets its own WikiClient (and so its own requests.Session),
closed when the request ends; nothing is shared between threadpool workers.
"""

from __future__ import annotations

from typing import Any, Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from filmwiki import __version__, config
from filmwiki.handler import handle
from filmwiki.wiki_client import WikiClient


def _handle_with_fresh_client(
    payload: Any, client_factory: Callable[[], WikiClient]
) -> tuple[int, dict[str, Any]]:
    with client_factory() as client:
        return handle(payload, client=client)


def create_app(client_factory: Callable[[], WikiClient] | None = None) -> FastAPI:
    """
    Build the app. `client_factory` is called once per request (WikiClient by default).
    """
    app = FastAPI(title="filmwiki", version=__version__)
    factory = client_factory or WikiClient

    async def lookup(request: Request) -> JSONResponse:
        try:
            payload: Any = await request.json()
        except ValueError:
            payload = None
        # the pipeline does blocking HTTP calls
        status, body = await run_in_threadpool(_handle_with_fresh_client, payload, factory)
        return JSONResponse(body, status_code=status, headers=config.CORS_HEADERS)

    async def preflight() -> Response:
        return Response(status_code=200, headers=config.CORS_HEADERS)

    for path in ("/", "/wikipedia"):
        app.add_api_route(path, lookup, methods=["POST"])
        app.add_api_route(path, preflight, methods=["OPTIONS"])

    @app.get("/health")
    async def health() -> dict[str, Any]:
        return {"status": "ok"}

    return app


app = create_app()
