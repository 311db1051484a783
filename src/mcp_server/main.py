"""MCP Server entry point.

Wires the Zendesk client, cache and tools into a dispatcher and serves it
either over stdio (default) or as a FastAPI application accepting one
JSON-RPC document per POST.
"""

import argparse
import asyncio
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel

from shared.config import Settings, get_settings
from shared.logging import get_logger, setup_logging
from mcp_server.dispatcher import ProtocolDispatcher
from mcp_server.registry import ToolRegistry
from mcp_server.stdio import StdioServer
from zendesk.cache import TTLCache
from zendesk.client import ZendeskClient
from zendesk.facade import CachingZendeskClient
from zendesk.tools import register_zendesk_tools

logger = get_logger(__name__)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str


def create_api(settings: Settings) -> CachingZendeskClient:
    """Create the cached Zendesk client from settings."""
    return CachingZendeskClient(
        client=ZendeskClient.from_settings(settings.zendesk),
        cache=TTLCache(),
        settings=settings.cache,
    )


def create_dispatcher(api: CachingZendeskClient) -> ProtocolDispatcher:
    """Create a dispatcher exposing the Zendesk tools."""
    registry = ToolRegistry()
    register_zendesk_tools(registry, api)
    return ProtocolDispatcher(registry)


def create_app(dispatcher: Optional[ProtocolDispatcher] = None) -> FastAPI:
    """
    Create the HTTP application.

    Args:
        dispatcher: Dispatcher to serve; built from settings at startup if omitted
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        api: Optional[CachingZendeskClient] = None

        if app.state.dispatcher is None:
            settings = get_settings()
            api = create_api(settings)
            app.state.dispatcher = create_dispatcher(api)

        logger.info("Starting MCP Server", transport="http")

        yield

        logger.info("Shutting down MCP Server")
        if api is not None:
            await api.close()

    app = FastAPI(
        title="Zendesk MCP Server",
        description="MCP bridge to the Zendesk Help Center API",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.dispatcher = dispatcher

    @app.post("/", tags=["MCP"])
    async def handle_rpc(request: Request) -> Response:
        """Handle one JSON-RPC request document."""
        body = await request.body()
        if not body.strip():
            return PlainTextResponse(
                "Empty request body",
                status_code=status.HTTP_400_BAD_REQUEST
            )

        response = await request.app.state.dispatcher.handle(body)
        return Response(content=response, media_type="application/json")

    @app.get("/health", response_model=HealthResponse, tags=["System"])
    async def health_check() -> HealthResponse:
        """Liveness probe. Static; reports nothing about the cache or Zendesk."""
        return HealthResponse(status="healthy")

    return app


app = create_app()


async def run_stdio(settings: Settings) -> None:
    """Serve over stdin/stdout until end of input."""
    api = create_api(settings)
    try:
        await StdioServer(create_dispatcher(api)).serve()
    finally:
        await api.close()


def main(argv: Optional[list[str]] = None) -> None:
    """Run the MCP Server."""
    parser = argparse.ArgumentParser(description="Zendesk Help Center MCP server")
    parser.add_argument(
        "--http",
        action="store_true",
        help="serve over HTTP instead of stdio"
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings.log_level, json_output=settings.log_json)

    if args.http or settings.server.mode == "http":
        import uvicorn

        host, port = settings.server.bind_address()
        logger.info("Zendesk MCP Server running in HTTP mode", host=host, port=port)
        uvicorn.run(app, host=host, port=port, log_level=settings.log_level.lower())
    else:
        asyncio.run(run_stdio(settings))


if __name__ == "__main__":
    main()
