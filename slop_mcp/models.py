"""Data models for tool arguments and response formats.

Each tool gets its own argument structure, built from the raw MCP
``arguments`` mapping and rejected up front when a required field is absent.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from .errors import InvalidParameterError, MissingParameterError


class ResponseFormat(Enum):
    """Formats the upstream can answer with"""
    JSON = "json"
    YAML = "yaml"

    @property
    def accept_header(self) -> str:
        return "text/yaml" if self is ResponseFormat.YAML else "application/json"

    @classmethod
    def parse(cls, value: Optional[Any]) -> "ResponseFormat":
        """Parse the ``format`` argument, defaulting to JSON when omitted"""
        if value is None:
            return cls.JSON
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(f.value for f in cls)
            raise InvalidParameterError("format", f"expected one of {allowed}, got {value!r}") from None


def _required_string(arguments: Mapping[str, Any], name: str) -> str:
    value = arguments.get(name)
    if value is None or value == "":
        raise MissingParameterError(name)
    if not isinstance(value, str):
        raise InvalidParameterError(name, f"expected a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class OverviewArguments:
    """Arguments of ``getApiOverview``

    Args:
        id: API identifier, a known oapis.org id or a spec URL
        format: Requested response format
    """
    id: str
    format: ResponseFormat = ResponseFormat.JSON

    @classmethod
    def from_arguments(cls, arguments: Optional[Mapping[str, Any]]) -> "OverviewArguments":
        arguments = arguments or {}
        return cls(
            id=_required_string(arguments, "id"),
            format=ResponseFormat.parse(arguments.get("format")),
        )


@dataclass(frozen=True)
class OperationArguments:
    """Arguments of ``getApiOperation``

    Args:
        id: API identifier, a known oapis.org id or a spec URL
        operation_id_or_route: Operation id or route path to retrieve
        format: Requested response format
    """
    id: str
    operation_id_or_route: str
    format: ResponseFormat = ResponseFormat.JSON

    @classmethod
    def from_arguments(cls, arguments: Optional[Mapping[str, Any]]) -> "OperationArguments":
        arguments = arguments or {}
        return cls(
            id=_required_string(arguments, "id"),
            operation_id_or_route=_required_string(arguments, "operationIdOrRoute"),
            format=ResponseFormat.parse(arguments.get("format")),
        )


__all__ = [
    "ResponseFormat",
    "OverviewArguments",
    "OperationArguments",
]
