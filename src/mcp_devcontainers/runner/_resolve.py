"""Executable resolution — turn a program name into a runnable command prefix.

The devcontainer CLI ships as an npm package, so besides a plain PATH lookup
it can be found as ``@devcontainers/cli`` under a ``node_modules`` directory
and run through ``node``.
"""

from __future__ import annotations

import json
import shutil
from pathlib import Path

from mcp_devcontainers.config import get_settings
from mcp_devcontainers.errors import ExecutableResolutionError

DEVCONTAINER = "devcontainer"
DEVCONTAINER_PACKAGE = "@devcontainers/cli"


def resolve_command(program: str) -> list[str]:
    """Return the argv prefix that runs *program*.

    Raises ExecutableResolutionError if it cannot be found. Never spawns.
    """
    if program == DEVCONTAINER:
        return _resolve_devcontainer()
    path = shutil.which(program)
    if path is None:
        raise ExecutableResolutionError(program, f"{program!r} not found on PATH")
    return [path]


def _resolve_devcontainer() -> list[str]:
    cfg = get_settings().devcontainer

    if cfg.cli_path:
        path = shutil.which(cfg.cli_path)
        if path is None:
            raise ExecutableResolutionError(
                DEVCONTAINER, f"configured cli_path {cfg.cli_path!r} is not executable"
            )
        return [path]

    if path := shutil.which(DEVCONTAINER):
        return [path]

    search_dirs = [Path(d) for d in cfg.node_modules_dirs] + [Path.cwd() / "node_modules"]
    for modules_dir in search_dirs:
        script = _package_bin(modules_dir / DEVCONTAINER_PACKAGE / "package.json")
        if script is None:
            continue
        node = shutil.which(cfg.node)
        if node is None:
            raise ExecutableResolutionError(
                DEVCONTAINER, f"found {script} but {cfg.node!r} is not on PATH"
            )
        return [node, str(script)]

    searched = ", ".join(str(d) for d in search_dirs)
    raise ExecutableResolutionError(
        DEVCONTAINER,
        f"not on PATH and {DEVCONTAINER_PACKAGE} not found in: {searched}",
    )


def _package_bin(package_json: Path) -> Path | None:
    """Read the ``devcontainer`` bin entry from an npm package.json, if usable."""
    try:
        pkg = json.loads(package_json.read_text())
    except (OSError, ValueError):
        return None
    bin_entry = pkg.get("bin")
    if isinstance(bin_entry, dict):
        bin_entry = bin_entry.get(DEVCONTAINER)
    if not isinstance(bin_entry, str):
        return None
    script = package_json.parent / bin_entry
    return script if script.is_file() else None
