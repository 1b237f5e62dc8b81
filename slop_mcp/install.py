"""Register this server with Claude Desktop.

The ``init`` command writes (or merges into) ``claude_desktop_config.json``
an ``mcpServers.slop`` entry that launches ``python -m slop_mcp run``.
"""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.panel import Panel

from .config import ServerConfig

SERVER_KEY = "slop"
CONFIG_FILE_NAME = "claude_desktop_config.json"


class InstallError(Exception):
    pass


def claude_config_path(platform: str = sys.platform, home: Optional[Path] = None) -> Path:
    """Location of the Claude Desktop config file on this platform"""
    home = home or Path.home()
    if platform == "darwin":
        base = home / "Library" / "Application Support"
    elif platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", home / "AppData" / "Roaming"))
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", home / ".config"))
    return base / "Claude" / CONFIG_FILE_NAME


def server_entry(python: Optional[str] = None) -> dict:
    return {
        "command": python or sys.executable or "python3",
        "args": ["-m", "slop_mcp", "run"],
    }


def load_existing(config_path: Path) -> dict:
    if not config_path.exists():
        return {"mcpServers": {}}
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise InstallError(f"Could not read {config_path}: {e}") from e
    if not isinstance(data, dict):
        raise InstallError(f"{config_path} does not contain a JSON object")
    return data


def merge_config(existing: dict, entry: dict) -> dict:
    """Return a copy of ``existing`` with the slop server entry set"""
    servers = dict(existing.get("mcpServers") or {})
    servers[SERVER_KEY] = entry
    return {**existing, "mcpServers": servers}


def init(config: ServerConfig, config_path: Optional[Path] = None, console: Optional[Console] = None) -> bool:
    """Install the server into Claude Desktop

    Returns:
        True if the config file was written, False if Claude Desktop was not
        found and manual instructions were printed instead

    Raises:
        InstallError: If the existing config cannot be read or the new one written
    """
    console = console or Console()
    config_path = config_path or claude_config_path()
    entry = server_entry()

    console.print(Panel.fit(
        f"👋 Welcome to [yellow]mcp-server-slop[/yellow] v{config.version}!\n"
        f"💁 This [green]'init'[/green] process will install the SLOP MCP Server into Claude Desktop\n"
        f"   enabling Claude to search and analyze OpenAPI specifications.\n"
        f"🧡 Let's get started.",
        border_style="grey50",
    ))
    console.print("[yellow]Step 1:[/yellow] Checking for Claude Desktop...")
    console.print(f"Looking for existing config in: [yellow]{config_path.parent}[/yellow]")

    if not config_path.parent.is_dir():
        snippet = json.dumps({"mcpServers": {SERVER_KEY: entry}}, indent=2)
        console.print(
            f"Couldn't detect Claude Desktop config at {config_path}.\n"
            f"To add the SLOP MCP server manually, add the following config to your "
            f"[yellow]{CONFIG_FILE_NAME}[/yellow] file:\n"
        )
        console.print(snippet, markup=False, highlight=False)
        logging.info(f"[Install] No Claude Desktop directory at {config_path.parent}")
        return False

    existing = load_existing(config_path)
    previous = (existing.get("mcpServers") or {}).get(SERVER_KEY)
    if previous is not None:
        console.print("[green]Note:[/green] Replacing existing SLOP MCP config:")
        console.print(json.dumps(previous), style="grey50", markup=False, highlight=False)

    console.print("[yellow]Step 2:[/yellow] Writing config...")
    try:
        config_path.write_text(json.dumps(merge_config(existing, entry), indent=2), encoding="utf-8")
    except OSError as e:
        raise InstallError(f"Could not write {config_path}: {e}") from e

    logging.info(f"[Install] Wrote {SERVER_KEY} entry to {config_path}")
    console.print("[yellow]mcp-server-slop[/yellow] configured & added to Claude Desktop!")
    console.print(f"Wrote config to [yellow]{config_path}[/yellow]")
    console.print('[blue]Try asking Claude to "search for an OpenAPI specification" to get started![/blue]')
    return True


__all__ = [
    "InstallError",
    "claude_config_path",
    "init",
    "merge_config",
    "server_entry",
]
