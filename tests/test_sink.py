"""Tests for OutputSink — the file that mirrors live stdout."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from mcp_devcontainers.errors import SinkCreationError
from mcp_devcontainers.runner import OutputSink


class TestOpen:
    def test_default_is_null_device(self):
        sink = OutputSink.open()
        assert sink.path == os.devnull
        sink.write(b"discarded")
        sink.close()
        assert sink.closed

    def test_writes_land_in_file(self, tmp_path: Path):
        target = tmp_path / "out.log"
        with OutputSink.open(str(target)) as sink:
            sink.write(b"hello ")
            sink.write(b"world")
        assert target.read_bytes() == b"hello world"

    def test_truncates_existing_file(self, tmp_path: Path):
        target = tmp_path / "out.log"
        target.write_text("stale content from a previous run")
        with OutputSink.open(str(target)) as sink:
            sink.write(b"new")
        assert target.read_bytes() == b"new"

    def test_missing_parent_is_not_created(self, tmp_path: Path):
        target = tmp_path / "missing" / "out.log"
        with pytest.raises(SinkCreationError) as exc_info:
            OutputSink.open(str(target))
        assert exc_info.value.path == str(target)
        assert not target.parent.exists()

    def test_directory_path_rejected(self, tmp_path: Path):
        with pytest.raises(SinkCreationError):
            OutputSink.open(str(tmp_path))


class TestClose:
    def test_close_is_idempotent(self, tmp_path: Path):
        sink = OutputSink.open(str(tmp_path / "out.log"))
        sink.close()
        sink.close()
        assert sink.closed

    def test_writes_after_close_are_dropped(self):
        handle = MagicMock()
        sink = OutputSink("mem", handle)
        sink.close()
        sink.write(b"late")
        handle.write.assert_not_called()
        handle.close.assert_called_once()


class TestWriteFailure:
    def test_failure_stops_further_writes(self):
        handle = MagicMock()
        handle.write.side_effect = [None, OSError("disk full"), None]
        sink = OutputSink("mem", handle)

        sink.write(b"one")
        sink.write(b"two")
        sink.write(b"three")

        assert sink.failed
        # The third chunk never reaches the handle.
        assert handle.write.call_count == 2

    def test_close_after_failure_releases_without_raising(self):
        handle = MagicMock()
        handle.write.side_effect = OSError("disk full")
        handle.close.side_effect = OSError("bad descriptor")
        sink = OutputSink("mem", handle)

        sink.write(b"x")
        sink.close()
        sink.close()

        handle.close.assert_called_once()
        assert sink.closed
