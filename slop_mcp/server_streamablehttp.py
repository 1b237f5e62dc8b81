import contextlib
import logging
import os
from collections.abc import AsyncIterator

from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route
from starlette.types import Receive, Scope, Send

from slop_mcp import registry
from slop_mcp.config import ServerConfig, configure_logging
from slop_mcp.core import SERVER_NAME, SlopMCPServer


async def health_handler(request: Request) -> JSONResponse:
    """Health check endpoint"""
    return JSONResponse({
        "status": "healthy",
        "server": SERVER_NAME,
        "tools": [tool.name for tool in registry.list_tools()],
    })


def build_app(config: ServerConfig) -> Starlette:
    """Starlette app serving MCP on ``/`` and a health check on ``/health``"""
    mcp_server = SlopMCPServer(config).get_server()

    session_manager = StreamableHTTPSessionManager(
        app=mcp_server,
        event_store=None,
        json_response=True,
        stateless=True,
    )

    async def handle_streamable_http(scope: Scope, receive: Receive, send: Send) -> None:
        await session_manager.handle_request(scope, receive, send)

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        """Context manager for session manager lifecycle."""
        async with session_manager.run():
            logging.info(f"[SlopHTTP] SLOP MCP Streamable HTTP server v{config.version} started")
            logging.info(f"[SlopHTTP]   - Upstream: {config.base_url}")
            logging.info(f"[SlopHTTP]   - Tools: {[tool.name for tool in registry.list_tools()]}")
            try:
                yield
            finally:
                logging.info("[SlopHTTP] SLOP MCP server shutting down...")

    return Starlette(
        debug=config.debug,
        routes=[
            Route("/health", health_handler, methods=["GET"]),
            Mount("/", app=handle_streamable_http),
        ],
        lifespan=lifespan,
    )


def main(config: ServerConfig = None) -> None:
    config = config or ServerConfig.from_env()
    configure_logging(config, default_level=logging.INFO)
    port = int(os.getenv("PORT", 8080))
    host = os.getenv("HOST", "0.0.0.0")

    logging.info(f"[SlopHTTP] Listening on http://{host}:{port} (MCP on /, health on /health)")

    import uvicorn
    uvicorn.run(build_app(config), host=host, port=port)


if __name__ == "__main__":
    main()
