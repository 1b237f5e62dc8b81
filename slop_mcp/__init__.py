"""SLOP MCP server package.

This package exposes the OpenAPI search service (oapis.org) to MCP hosts as
two tools, ``getApiOverview`` and ``getApiOperation``.
"""

from .config import ServerConfig
from .core import SlopMCPServer
from .formatting import format_api_id
from .upstream import UpstreamGateway

__all__ = [
    "ServerConfig",
    "SlopMCPServer",
    "UpstreamGateway",
    "format_api_id",
]
