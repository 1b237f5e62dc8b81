"""Process configuration.

The configuration is read once at start-up (environment plus an optional
``.env`` file) and passed explicitly to the server and the upstream gateway.
"""

import logging
import os
import sys
from dataclasses import dataclass
from importlib import metadata
from typing import Mapping, Optional

from dotenv import load_dotenv

DISTRIBUTION_NAME = "mcp-server-slop"
FALLBACK_VERSION = "0.1.0"
DEFAULT_BASE_URL = "https://oapis.org"
LOG_FORMAT = '[%(levelname)s] %(message)s'

_TRUTHY = {"1", "true", "yes", "on"}


def package_version() -> str:
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return FALLBACK_VERSION


@dataclass(frozen=True)
class ServerConfig:
    """Immutable server configuration

    Args:
        debug: Emit diagnostic logging to stderr
        version: Version reported to MCP clients
        base_url: Root URL of the OpenAPI search service
        request_timeout: Total timeout per upstream request in seconds, None disables it
        max_attempts: Upstream attempts per call; transport failures only are retried
    """
    debug: bool = False
    version: str = FALLBACK_VERSION
    base_url: str = DEFAULT_BASE_URL
    request_timeout: Optional[float] = None
    max_attempts: int = 1

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, load_env_file: bool = True) -> "ServerConfig":
        """Build the configuration from environment variables

        Raises:
            ValueError: If a numeric setting cannot be parsed
        """
        if environ is None:
            if load_env_file:
                load_dotenv()
            environ = os.environ

        timeout = environ.get("SLOP_REQUEST_TIMEOUT")
        max_attempts = int(environ.get("SLOP_MAX_ATTEMPTS", "1"))

        return cls(
            debug=environ.get("DEBUG", "").strip().lower() in _TRUTHY,
            version=package_version(),
            base_url=environ.get("SLOP_API_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            request_timeout=float(timeout) if timeout else None,
            max_attempts=max_attempts,
        )


def configure_logging(config: ServerConfig, default_level: int = logging.WARNING) -> None:
    """Send logs to stderr; stdout belongs to the MCP stdio transport"""
    level = logging.DEBUG if config.debug else default_level
    logging.basicConfig(stream=sys.stderr, level=level, format=LOG_FORMAT, force=True)


__all__ = [
    "ServerConfig",
    "configure_logging",
    "package_version",
]
