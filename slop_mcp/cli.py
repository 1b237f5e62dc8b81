"""Command line entry point: ``init``, ``run`` and ``serve-http``."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from .config import ServerConfig, configure_logging
from .errors import FatalStartupError
from .install import InstallError, init
from .server_stdio import run_stdio

console = Console(stderr=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mcp-server-slop",
        description="MCP server for searching and reading OpenAPI specifications via oapis.org",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    init_parser = commands.add_parser("init", help="Install the server into Claude Desktop")
    init_parser.add_argument("--config-path", type=Path, default=None,
                             help="Claude Desktop config file to update")
    commands.add_parser("run", help="Serve MCP over stdio")
    commands.add_parser("serve-http", help="Serve MCP over Streamable HTTP")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    try:
        config = ServerConfig.from_env()
    except ValueError as e:
        console.print(f"[bold red]Invalid configuration:[/bold red] {e}")
        sys.exit(1)

    if args.command == "init":
        configure_logging(config)
        try:
            init(config, config_path=args.config_path, console=Console())
        except InstallError as e:
            console.print(f"[bold red]Error during initialization:[/bold red] {e}")
            sys.exit(1)
        Console().print("Initialization complete!")

    elif args.command == "run":
        configure_logging(config)
        try:
            asyncio.run(run_stdio(config))
        except FatalStartupError as e:
            logging.exception(f"[SlopMCP] Fatal error: {e.message}")
            sys.exit(1)

    elif args.command == "serve-http":
        from .server_streamablehttp import main as serve_http
        serve_http(config)


if __name__ == "__main__":
    main()
