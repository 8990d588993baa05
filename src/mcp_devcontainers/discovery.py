"""Workspace discovery — find devcontainer configurations under a directory.

Walks the tree concurrently: every subdirectory is its own task and every
``.devcontainer`` candidate gets its own existence check. A semaphore caps
how many filesystem calls are in flight. It is held only around the call
itself, never while waiting on child tasks, so a deep tree cannot starve
the pool.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

from mcp_devcontainers.config import DiscoveryConfig, get_settings
from mcp_devcontainers.errors import DiscoveryTimeoutError, NoWorkspacesFoundError
from mcp_devcontainers.logger import logger


class _Scanner:
    def __init__(self, cfg: DiscoveryConfig) -> None:
        self._cfg = cfg
        self._skip = frozenset(cfg.skip_dirs)
        self._sem = asyncio.Semaphore(cfg.max_concurrency)
        self.found: set[Path] = set()

    async def scan(self, directory: Path) -> None:
        """Explore *directory*; returns once its whole subtree is done."""
        async with self._sem:
            try:
                subdirs = await asyncio.to_thread(_list_subdirs, directory)
            except OSError as exc:
                logger.debug("Skipping unreadable directory", path=str(directory), err=str(exc))
                return

        pending = []
        for name in subdirs:
            if name in self._skip:
                continue
            child = directory / name
            if name == self._cfg.marker_dir:
                pending.append(self._check_marker(child))
            else:
                pending.append(self.scan(child))
        if pending:
            await asyncio.gather(*pending)

    async def _check_marker(self, marker_dir: Path) -> None:
        async with self._sem:
            try:
                ok = await asyncio.to_thread(_is_config_file, marker_dir / self._cfg.marker_file)
            except OSError as exc:
                logger.debug(
                    "Skipping unreadable marker directory", path=str(marker_dir), err=str(exc)
                )
                return
        if ok:
            self.found.add(marker_dir)
        else:
            logger.debug("Marker directory without config", path=str(marker_dir))


def _is_config_file(path: Path) -> bool:
    # Path.is_file() raises on EACCES (listable but unsearchable parent) before 3.14.
    return path.is_file()


def _list_subdirs(directory: Path) -> list[str]:
    # Symlinked directories are not followed: descent stays strictly downward.
    with os.scandir(directory) as it:
        return [e.name for e in it if e.is_dir(follow_symlinks=False)]


async def discover_workspaces(root: str | Path | None = None) -> list[Path]:
    """Return every ``<dir>/.devcontainer`` under *root* that holds a devcontainer.json.

    *root* defaults to the current working directory. Raises
    NoWorkspacesFoundError when nothing matches, DiscoveryTimeoutError when
    the scan exceeds ``[discovery] timeout_seconds``.
    """
    cfg = get_settings().discovery
    root_path = Path(root).expanduser().resolve() if root else Path.cwd()

    scanner = _Scanner(cfg)
    logger.info("Discovering workspaces", root=str(root_path))
    try:
        await asyncio.wait_for(scanner.scan(root_path), timeout=cfg.timeout_seconds)
    except TimeoutError:
        raise DiscoveryTimeoutError(root_path, cfg.timeout_seconds or 0) from None

    if not scanner.found:
        raise NoWorkspacesFoundError(root_path)
    logger.info("Workspaces discovered", root=str(root_path), count=len(scanner.found))
    return sorted(scanner.found)


def render_workspaces(paths: list[Path]) -> str:
    return "\n".join(str(p) for p in paths)
