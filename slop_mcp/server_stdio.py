"""Run the SLOP MCP server over stdio, the transport Claude Desktop uses."""

import asyncio
import contextlib
import logging

from mcp.server.stdio import stdio_server

from .config import ServerConfig
from .core import SlopMCPServer
from .errors import FatalStartupError


def _log_background_fault(loop: asyncio.AbstractEventLoop, context: dict) -> None:
    exc = context.get("exception")
    logging.error(f"[SlopMCP] Unhandled background error: {context.get('message')}", exc_info=exc)


async def run_stdio(config: ServerConfig) -> None:
    """Serve MCP requests on stdin/stdout until the host closes the channel

    Raises:
        FatalStartupError: If the stdio channel cannot be established
    """
    asyncio.get_running_loop().set_exception_handler(_log_background_fault)

    server = SlopMCPServer(config).get_server()
    logging.info("[SlopMCP] Starting SLOP MCP server...")

    async with contextlib.AsyncExitStack() as stack:
        try:
            read_stream, write_stream = await stack.enter_async_context(stdio_server())
        except Exception as e:
            raise FatalStartupError(f"Could not open stdio transport: {e}", cause=e) from e

        logging.info("[SlopMCP] Server connected and running")
        await server.run(read_stream, write_stream, server.create_initialization_options())


__all__ = [
    "run_stdio",
]
