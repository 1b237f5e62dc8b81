"""Error kinds raised while serving a tool call.

Every error that can happen during a single call derives from ``SlopError``
and is turned into an error-flagged tool result by the dispatcher. Only
``FatalStartupError`` ends the process.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Closed set of failure kinds"""
    UNKNOWN_TOOL = "unknown_tool"
    MISSING_PARAMETER = "missing_parameter"
    INVALID_PARAMETER = "invalid_parameter"
    UPSTREAM = "upstream"
    TRANSPORT = "transport"
    MALFORMED_RESPONSE = "malformed_response"
    FATAL_STARTUP = "fatal_startup"


class SlopError(Exception):
    """Base class for all server errors

    Args:
        message: Human readable message, shown to the MCP client
        cause: Underlying exception, if any
    """
    kind: ErrorKind

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class UnknownToolError(SlopError):
    kind = ErrorKind.UNKNOWN_TOOL

    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class MissingParameterError(SlopError):
    kind = ErrorKind.MISSING_PARAMETER

    def __init__(self, parameter: str):
        super().__init__(f"Missing required parameter: {parameter}")
        self.parameter = parameter


class InvalidParameterError(SlopError):
    kind = ErrorKind.INVALID_PARAMETER

    def __init__(self, parameter: str, reason: str):
        super().__init__(f"Invalid parameter '{parameter}': {reason}")
        self.parameter = parameter


class UpstreamError(SlopError):
    """Upstream answered with a non-2xx status; the message is its body"""
    kind = ErrorKind.UPSTREAM

    def __init__(self, body: str, status: int):
        super().__init__(body)
        self.status = status


class TransportError(SlopError):
    kind = ErrorKind.TRANSPORT


class MalformedResponseError(SlopError):
    kind = ErrorKind.MALFORMED_RESPONSE


class FatalStartupError(SlopError):
    kind = ErrorKind.FATAL_STARTUP


__all__ = [
    "ErrorKind",
    "SlopError",
    "UnknownToolError",
    "MissingParameterError",
    "InvalidParameterError",
    "UpstreamError",
    "TransportError",
    "MalformedResponseError",
    "FatalStartupError",
]
