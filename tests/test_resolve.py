"""Tests for resolve_command — PATH lookup and the @devcontainers/cli npm fallback."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from mcp_devcontainers.errors import ExecutableResolutionError
from mcp_devcontainers.runner import resolve_command

_WHICH = "mcp_devcontainers.runner._resolve.shutil.which"


def _install_cli_package(modules_dir: Path, bin_entry: object = None) -> Path:
    pkg_dir = modules_dir / "@devcontainers" / "cli"
    pkg_dir.mkdir(parents=True)
    script = pkg_dir / "devcontainer.js"
    script.write_text("#!/usr/bin/env node\n")
    if bin_entry is None:
        bin_entry = {"devcontainer": "devcontainer.js"}
    (pkg_dir / "package.json").write_text(json.dumps({"name": "@devcontainers/cli", "bin": bin_entry}))
    return script


class TestGenericProgram:
    def test_found_on_path(self):
        with patch(_WHICH, return_value="/usr/bin/docker"):
            assert resolve_command("docker") == ["/usr/bin/docker"]

    def test_missing_raises(self):
        with patch(_WHICH, return_value=None):
            with pytest.raises(ExecutableResolutionError, match="docker"):
                resolve_command("docker")


class TestDevcontainer:
    def test_configured_cli_path_wins(self, settings):
        settings.devcontainer.cli_path = "/opt/dc/bin/devcontainer"
        with patch(_WHICH, side_effect=lambda name: name):
            assert resolve_command("devcontainer") == ["/opt/dc/bin/devcontainer"]

    def test_configured_cli_path_not_executable(self, settings):
        settings.devcontainer.cli_path = "/nope/devcontainer"
        with patch(_WHICH, return_value=None):
            with pytest.raises(ExecutableResolutionError, match="cli_path"):
                resolve_command("devcontainer")

    def test_on_path(self):
        with patch(_WHICH, return_value="/usr/local/bin/devcontainer"):
            assert resolve_command("devcontainer") == ["/usr/local/bin/devcontainer"]

    def test_npm_package_fallback(self, settings, tmp_path: Path):
        modules = tmp_path / "global" / "node_modules"
        script = _install_cli_package(modules)
        settings.devcontainer.node_modules_dirs = [str(modules)]

        def which(name):
            return "/usr/bin/node" if name == "node" else None

        with patch(_WHICH, side_effect=which):
            assert resolve_command("devcontainer") == ["/usr/bin/node", str(script)]

    def test_npm_package_in_cwd(self, tmp_path: Path, monkeypatch):
        script = _install_cli_package(tmp_path / "node_modules", bin_entry="devcontainer.js")
        monkeypatch.chdir(tmp_path)

        def which(name):
            return "/usr/bin/node" if name == "node" else None

        with patch(_WHICH, side_effect=which):
            command = resolve_command("devcontainer")
        assert command[0] == "/usr/bin/node"
        assert Path(command[1]).resolve() == script.resolve()

    def test_package_without_node(self, settings, tmp_path: Path):
        modules = tmp_path / "node_modules"
        _install_cli_package(modules)
        settings.devcontainer.node_modules_dirs = [str(modules)]

        with patch(_WHICH, return_value=None):
            with pytest.raises(ExecutableResolutionError, match="node"):
                resolve_command("devcontainer")

    def test_broken_package_json_is_ignored(self, settings, tmp_path: Path, monkeypatch):
        modules = tmp_path / "node_modules"
        pkg_dir = modules / "@devcontainers" / "cli"
        pkg_dir.mkdir(parents=True)
        (pkg_dir / "package.json").write_text("{not json")
        settings.devcontainer.node_modules_dirs = [str(modules)]
        monkeypatch.chdir(tmp_path)

        with patch(_WHICH, side_effect=lambda n: "/usr/bin/node" if n == "node" else None):
            with pytest.raises(ExecutableResolutionError) as exc_info:
                resolve_command("devcontainer")
        assert str(modules) in str(exc_info.value)

    def test_not_found_anywhere(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with patch(_WHICH, return_value=None):
            with pytest.raises(ExecutableResolutionError, match="@devcontainers/cli"):
                resolve_command("devcontainer")
