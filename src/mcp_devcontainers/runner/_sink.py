"""Output sink — a file (or the null device) mirroring live stdout."""

from __future__ import annotations

import contextlib
import os
from typing import BinaryIO

from mcp_devcontainers.errors import SinkCreationError
from mcp_devcontainers.logger import logger


class OutputSink:
    """Exclusively-owned binary writer for one invocation.

    After the first failed write the sink stops accepting data, so the file
    never holds output past the failure point. ``close()`` is idempotent and
    never raises once a write has failed.
    """

    def __init__(self, path: str, handle: BinaryIO) -> None:
        self.path = path
        self._handle = handle
        self._closed = False
        self._error: OSError | None = None

    @classmethod
    def open(cls, path: str | None = None) -> OutputSink:
        """Open *path* for writing, truncating it. ``None`` means the null device.

        Missing parent directories are not created.
        """
        target = path or os.devnull
        try:
            handle = open(target, "wb")  # noqa: SIM115
        except OSError as exc:
            raise SinkCreationError(target, exc) from exc
        return cls(target, handle)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def failed(self) -> bool:
        return self._error is not None

    def write(self, data: bytes) -> None:
        if self._closed or self._error is not None:
            return
        try:
            self._handle.write(data)
            self._handle.flush()
        except OSError as exc:
            self._error = exc
            logger.warning("Output sink write failed", path=self.path, err=str(exc))

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._error is None:
            try:
                self._handle.close()
            except OSError as exc:
                logger.warning("Output sink close failed", path=self.path, err=str(exc))
            return
        # Already failed: release the descriptor, don't report a second error.
        with contextlib.suppress(OSError):
            self._handle.close()

    def __enter__(self) -> OutputSink:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
