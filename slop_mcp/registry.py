"""Static catalogue of the tools this server exposes.

Each entry keeps the MCP descriptor, the argument structure and the handler
together so a tool cannot be listed without being callable.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Tuple

from mcp import types as mcp_types

from .errors import UnknownToolError
from .formatting import format_api_id
from .models import OperationArguments, OverviewArguments
from .upstream import UpstreamGateway

ID_DESCRIPTION = (
    "API identifier, can be a known ID from openapisearch.com or a URL "
    "(without protocol) with slashes replaced by '__'"
)

FORMAT_SCHEMA = {
    "type": "string",
    "description": "Response format (json or yaml)",
    "enum": ["json", "yaml"],
    "default": "json",
}


async def get_api_overview(gateway: UpstreamGateway, args: OverviewArguments) -> str:
    formatted_id = format_api_id(args.id)
    logging.debug(f"[Tool] getApiOverview for API: {formatted_id}")
    return await gateway.fetch_overview(formatted_id, args.format)


async def get_api_operation(gateway: UpstreamGateway, args: OperationArguments) -> str:
    formatted_id = format_api_id(args.id)
    logging.debug(f"[Tool] getApiOperation for API: {formatted_id}, operation: {args.operation_id_or_route}")
    return await gateway.fetch_operation(formatted_id, args.operation_id_or_route, args.format)


@dataclass(frozen=True)
class ToolEntry:
    """A registered tool

    Args:
        tool: MCP descriptor returned by list_tools
        arguments_type: Structure the raw arguments are validated into
        handler: Coroutine producing the text result
    """
    tool: mcp_types.Tool
    arguments_type: Any
    handler: Callable[[UpstreamGateway, Any], Awaitable[str]]

    @property
    def name(self) -> str:
        return self.tool.name


GET_API_OVERVIEW = ToolEntry(
    tool=mcp_types.Tool(
        name="getApiOverview",
        description=(
            "Get an overview of an OpenAPI specification. "
            "This should be the first step when working with any API."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "id": {"type": "string", "description": ID_DESCRIPTION},
                "format": FORMAT_SCHEMA,
            },
            "required": ["id"],
        },
    ),
    arguments_type=OverviewArguments,
    handler=get_api_overview,
)

GET_API_OPERATION = ToolEntry(
    tool=mcp_types.Tool(
        name="getApiOperation",
        description=(
            "Get details about a specific operation from an OpenAPI specification. "
            "Use this after getting an overview."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "id": {"type": "string", "description": ID_DESCRIPTION},
                "operationIdOrRoute": {
                    "type": "string",
                    "description": "Operation ID or route path to retrieve",
                },
                "format": FORMAT_SCHEMA,
            },
            "required": ["id", "operationIdOrRoute"],
        },
    ),
    arguments_type=OperationArguments,
    handler=get_api_operation,
)

ALL_TOOLS: Tuple[ToolEntry, ...] = (GET_API_OVERVIEW, GET_API_OPERATION)
_BY_NAME: Dict[str, ToolEntry] = {entry.name: entry for entry in ALL_TOOLS}


def list_tools() -> list:
    """Descriptors of every registered tool, in registration order"""
    return [entry.tool for entry in ALL_TOOLS]


def get_tool(name: str) -> ToolEntry:
    """Look up a tool by name

    Raises:
        UnknownToolError: If no tool with this name is registered
    """
    try:
        return _BY_NAME[name]
    except KeyError:
        raise UnknownToolError(name) from None


__all__ = [
    "ToolEntry",
    "ALL_TOOLS",
    "GET_API_OVERVIEW",
    "GET_API_OPERATION",
    "get_api_overview",
    "get_api_operation",
    "list_tools",
    "get_tool",
]
