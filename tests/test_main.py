"""Tests for the command-line entry point."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from conftest import make_workspace

from mcp_devcontainers.__main__ import main


def test_discover_prints_paths(tmp_path: Path, capsys):
    make_workspace(tmp_path, "svc")

    with pytest.raises(SystemExit) as exc_info:
        main(["discover", str(tmp_path)])

    assert exc_info.value.code == 0
    assert capsys.readouterr().out.strip() == str(tmp_path.resolve() / "svc" / ".devcontainer")


def test_discover_nothing_found(tmp_path: Path, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["discover", str(tmp_path)])

    assert exc_info.value.code == 1
    assert "Error: No devcontainer workspace folders found" in capsys.readouterr().err


def test_default_command_serves():
    with patch("mcp_devcontainers.__main__._serve") as serve:
        main([])
    serve.assert_called_once()


def test_version(capsys):
    with pytest.raises(SystemExit):
        main(["--version"])
    assert "mcp-devcontainers 1.0.1" in capsys.readouterr().out
