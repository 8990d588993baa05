"""Process runner — spawn one command, tee stdout to a sink, classify the exit.

Provides:
  - Invocation / InvocationResult — immutable request and success result
  - run_command() — resolve, open sink, spawn, pump stdout/stderr, classify
  - _kill() — SIGKILL the whole process group on timeout or cancellation
  - _classify_exit() — map a non-zero return code to the matching failure
"""

from __future__ import annotations

import asyncio
import contextlib
import os
import signal
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from mcp_devcontainers.config import get_settings
from mcp_devcontainers.errors import (
    CommandFailedError,
    CommandTimeoutError,
    ProcessExitFailure,
    ProcessSignalTermination,
    ProcessSpawnError,
)
from mcp_devcontainers.logger import logger
from mcp_devcontainers.runner._resolve import resolve_command
from mcp_devcontainers.runner._sink import OutputSink

_CHUNK_SIZE = 8192

# How long to wait for a killed process group to be reaped.
_KILL_GRACE_SECONDS = 5.0

# Sentinel so callers can pass ``timeout=None`` to disable the configured default.
_DEFAULT_TIMEOUT: Any = object()


@dataclass(frozen=True)
class Invocation:
    """One command to run: program name, its arguments, and where stdout is mirrored."""

    program: str
    args: tuple[str, ...] = ()
    stdio_path: str | None = None


@dataclass(frozen=True)
class InvocationResult:
    """Successful (exit code 0) invocation."""

    invocation: Invocation
    exit_code: int
    stdout: str
    duration_ms: float

    def render(self) -> str:
        return f"success with code {self.exit_code}\n-------\n{self.stdout}"


async def run_command(
    invocation: Invocation,
    *,
    timeout: float | None = _DEFAULT_TIMEOUT,
) -> InvocationResult:
    """Run *invocation* to completion.

    Resolution and sink creation happen before anything is spawned, so their
    errors never leave a process or an open file behind. Raises a
    CommandFailedError subclass for non-zero exits, signals and timeouts.
    """
    if timeout is _DEFAULT_TIMEOUT:
        timeout = get_settings().runner.timeout_seconds

    command = resolve_command(invocation.program)
    sink = OutputSink.open(invocation.stdio_path)
    try:
        return await _spawn_and_collect(invocation, command, sink, timeout)
    finally:
        sink.close()


async def _spawn_and_collect(
    invocation: Invocation,
    command: list[str],
    sink: OutputSink,
    timeout: float | None,
) -> InvocationResult:
    start_time = time.monotonic()
    logger.info("Running command", program=invocation.program, args=list(invocation.args))

    try:
        proc = await asyncio.create_subprocess_exec(
            *command,
            *invocation.args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            start_new_session=True,  # own process group, killed as a whole
        )
    except OSError as exc:
        logger.error("Process spawn failed", program=invocation.program, err=str(exc))
        raise ProcessSpawnError(invocation.program, exc) from exc

    assert proc.stdout is not None
    assert proc.stderr is not None

    stdout_chunks: list[bytes] = []
    stderr_chunks: list[bytes] = []

    def _log_stderr(chunk: bytes) -> None:
        for line in chunk.decode(errors="replace").strip().splitlines():
            if line:
                logger.debug(line, program=invocation.program)

    async def _collect() -> int:
        # Exit status is only read after both pipes hit EOF, so every chunk
        # is captured before the result is decided.
        await asyncio.gather(
            _pump(proc.stdout, stdout_chunks, sink.write),
            _pump(proc.stderr, stderr_chunks, _log_stderr),
        )
        return await proc.wait()

    try:
        returncode = await asyncio.wait_for(_collect(), timeout=timeout)
    except TimeoutError:
        await _kill(proc)
        logger.error(
            "Command timed out",
            program=invocation.program,
            timeout=timeout,
        )
        raise CommandTimeoutError(
            invocation.program,
            invocation.args,
            _join(stderr_chunks).strip(),
            timeout or 0,
        ) from None
    except asyncio.CancelledError:
        await _kill(proc)
        raise

    duration_ms = (time.monotonic() - start_time) * 1000
    if returncode != 0:
        failure = _classify_exit(invocation, returncode, _join(stderr_chunks).strip())
        logger.warning(
            "Command failed",
            program=invocation.program,
            reason=failure.reason,
            duration_ms=round(duration_ms),
        )
        raise failure

    logger.info(
        "Command completed",
        program=invocation.program,
        duration_ms=round(duration_ms),
        stdout_bytes=sum(len(c) for c in stdout_chunks),
    )
    return InvocationResult(
        invocation=invocation,
        exit_code=returncode,
        stdout=_join(stdout_chunks),
        duration_ms=duration_ms,
    )


async def _pump(
    stream: asyncio.StreamReader,
    chunks: list[bytes],
    on_chunk: Callable[[bytes], None] | None = None,
) -> None:
    while True:
        chunk = await stream.read(_CHUNK_SIZE)
        if not chunk:
            return
        chunks.append(chunk)
        if on_chunk is not None:
            on_chunk(chunk)


async def _kill(proc: asyncio.subprocess.Process) -> None:
    """SIGKILL the child's process group, then wait a bounded time for the exit.

    Descendants (docker clients started by the devcontainer CLI) share the
    group and may hold the pipes open, so killing only the child is not enough.
    """
    if hasattr(os, "killpg"):
        with contextlib.suppress(ProcessLookupError, PermissionError):
            os.killpg(proc.pid, signal.SIGKILL)
    with contextlib.suppress(ProcessLookupError):
        proc.kill()
    try:
        await asyncio.wait_for(proc.wait(), timeout=_KILL_GRACE_SECONDS)
    except TimeoutError:
        logger.warning(
            "Killed process did not exit",
            pid=proc.pid,
            grace_seconds=_KILL_GRACE_SECONDS,
        )


def _join(chunks: list[bytes]) -> str:
    return b"".join(chunks).decode(errors="replace")


def _classify_exit(invocation: Invocation, returncode: int, stderr: str) -> CommandFailedError:
    """Negative return codes mean the process was killed by that signal."""
    if returncode < 0:
        try:
            sig_name = signal.Signals(-returncode).name
        except ValueError:
            sig_name = str(-returncode)
        return ProcessSignalTermination(invocation.program, invocation.args, stderr, sig_name)
    return ProcessExitFailure(invocation.program, invocation.args, stderr, returncode)
