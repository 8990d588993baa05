"""Entry point for `python -m mcp_devcontainers` / `mcp-devcontainers`.

Subcommands:
    mcp-devcontainers                   Serve MCP over stdio (default)
    mcp-devcontainers discover [ROOT]   Print workspace folders with a devcontainer config
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from mcp_devcontainers import __version__


def _serve() -> None:
    from mcp_devcontainers.server import DevcontainerServer

    asyncio.run(DevcontainerServer().run_stdio())


def _discover(root: str | None) -> int:
    from mcp_devcontainers.discovery import discover_workspaces, render_workspaces
    from mcp_devcontainers.errors import DevcontainerError

    try:
        paths = asyncio.run(discover_workspaces(root))
    except DevcontainerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(render_workspaces(paths))
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="mcp-devcontainers",
        description="MCP server for devcontainer lifecycle operations",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("serve", help="Serve MCP over stdio (default)")
    discover = sub.add_parser("discover", help="Print workspace folders with a devcontainer config")
    discover.add_argument("root", nargs="?", default=None, help="Directory to search from")

    args = parser.parse_args(argv)

    if args.command == "discover":
        sys.exit(_discover(args.root))
    _serve()


if __name__ == "__main__":
    main()
