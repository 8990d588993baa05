"""Shared test fixtures for mcp-devcontainers."""

from __future__ import annotations

from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Shared helpers (plain functions, not fixtures — importable by test files)
# ---------------------------------------------------------------------------


def make_settings(**overrides):
    """Create a Settings object with defaults, without reading config.toml or env.

    Usage::

        s = make_settings(runner=RunnerConfig(timeout_seconds=1))
        s = make_settings(docker=DockerConfig(cli="podman"))
    """
    from mcp_devcontainers.config import (
        DevcontainerConfig,
        DiscoveryConfig,
        DockerConfig,
        RunnerConfig,
        ServerConfig,
        Settings,
    )

    defaults = {
        "devcontainer": DevcontainerConfig(),
        "docker": DockerConfig(),
        "runner": RunnerConfig(),
        "discovery": DiscoveryConfig(),
        "server": ServerConfig(),
    }
    defaults.update(overrides)
    return Settings.model_construct(**defaults)


def make_workspace(root: Path, rel: str, *, valid: bool = True) -> Path:
    """Create ``root/rel/.devcontainer`` (with devcontainer.json when *valid*)."""
    marker = root / rel / ".devcontainer" if rel else root / ".devcontainer"
    marker.mkdir(parents=True, exist_ok=True)
    if valid:
        (marker / "devcontainer.json").write_text('{"image": "python:3.12"}')
    return marker


# ---------------------------------------------------------------------------
# Autouse fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def settings(monkeypatch):
    """Install a fresh Settings singleton for every test.

    Tests mutate the returned object (``settings.runner.timeout_seconds = 1``);
    every module sees it through ``get_settings()``.
    """
    s = make_settings()
    monkeypatch.setattr("mcp_devcontainers.config._settings", s)
    return s
