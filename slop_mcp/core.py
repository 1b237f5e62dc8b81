"""Core MCP server implementation for the SLOP tools.

This module provides the SlopMCPServer class which handles tool listing and
execution, resolving each call through the tool registry and turning every
outcome into a well-formed CallToolResult.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from mcp import types as mcp_types
from mcp.server.lowlevel import Server

from . import registry
from .config import ServerConfig
from .errors import SlopError
from .upstream import UpstreamGateway

SERVER_NAME = "slop"


def text_result(text: str, is_error: bool = False) -> mcp_types.CallToolResult:
    return mcp_types.CallToolResult(
        content=[mcp_types.TextContent(type="text", text=text)],
        isError=is_error,
    )


def error_result(message: str) -> mcp_types.CallToolResult:
    return text_result(f"Error: {message}", is_error=True)


class SlopMCPServer:
    """MCP server exposing the OpenAPI search tools

    The server never lets a tool failure escape: unknown tools, invalid
    arguments and upstream failures all come back as error-flagged results.

    Args:
        config: Server configuration
        gateway: Upstream gateway, built from the config when omitted
    """

    def __init__(self, config: ServerConfig, gateway: Optional[UpstreamGateway] = None):
        self.config = config
        self.gateway = gateway or UpstreamGateway(config)
        self.server = Server(SERVER_NAME, version=config.version)
        self._setup_server()
        logging.debug(f"[SlopMCP] Initialized MCP server '{SERVER_NAME}' v{config.version}")

    def _setup_server(self) -> None:
        """Register list_tools and call_tool handlers on the MCP server"""

        @self.server.list_tools()
        async def list_tools():
            return await self.list_tools()

        # Arguments are validated by the argument structures, not by jsonschema,
        # so a missing field reports MissingParameterError.
        @self.server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: dict):
            return await self.call_tool(name, arguments)

    async def list_tools(self) -> List[mcp_types.Tool]:
        logging.debug("[SlopMCP] Received list tools request")
        return registry.list_tools()

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> mcp_types.CallToolResult:
        logging.debug(f"[SlopMCP] Tool call: {name} with args: {json.dumps(arguments, default=str)}")
        try:
            entry = registry.get_tool(name)
            args = entry.arguments_type.from_arguments(arguments)
            text = await entry.handler(self.gateway, args)
        except SlopError as e:
            logging.debug(f"[SlopMCP] Tool '{name}' failed ({e.kind.value}): {e.message}")
            return error_result(e.message)
        except Exception as e:
            logging.exception(f"[SlopMCP] Error executing tool '{name}': {e}")
            return error_result(str(e) or type(e).__name__)

        logging.debug(f"[SlopMCP] Tool '{name}' returned {len(text)} characters")
        return text_result(text)

    def get_server(self) -> Server:
        """Get the configured MCP server instance

        Returns:
            The underlying MCP Server instance
        """
        return self.server


__all__ = [
    "SERVER_NAME",
    "SlopMCPServer",
    "error_result",
    "text_result",
]
