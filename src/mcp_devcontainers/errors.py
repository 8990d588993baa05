"""Error taxonomy for command invocations and workspace discovery.

Every error a tool can report derives from :class:`DevcontainerError`.
Command failures keep their structured fields (program, args, stderr,
exit status) and only become text through ``str(exc)`` at the server
boundary.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class DevcontainerError(Exception):
    """Base class for every error surfaced to tool callers."""


class UnknownToolError(DevcontainerError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class ExecutableResolutionError(DevcontainerError):
    """The program could not be located; nothing was spawned."""

    def __init__(self, program: str, detail: str) -> None:
        self.program = program
        self.detail = detail
        super().__init__(f"Failed to locate {program} CLI: {detail}")


class SinkCreationError(DevcontainerError):
    def __init__(self, path: str, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to create output stream {path}: {cause}")


class ProcessSpawnError(DevcontainerError):
    def __init__(self, program: str, cause: OSError) -> None:
        self.program = program
        self.cause = cause
        super().__init__(f"Process spawn failed: {program}: {cause}")


class CommandFailedError(DevcontainerError):
    """A spawned command did not finish with exit code 0.

    Subclasses fill in ``reason``; the rendered message is::

        Command failed: <program> <args> (<reason>)
        -------
        <stderr>
    """

    reason: str = "failed"

    def __init__(self, program: str, args: Sequence[str], stderr: str) -> None:
        self.program = program
        self.args_list = list(args)
        self.stderr = stderr
        super().__init__(program, *args)

    @property
    def command_line(self) -> str:
        return " ".join([self.program, *self.args_list])

    def __str__(self) -> str:
        return f"Command failed: {self.command_line} ({self.reason})\n-------\n{self.stderr}"


class ProcessExitFailure(CommandFailedError):
    def __init__(self, program: str, args: Sequence[str], stderr: str, returncode: int) -> None:
        self.returncode = returncode
        self.reason = f"exited with code {returncode}"
        super().__init__(program, args, stderr)


class ProcessSignalTermination(CommandFailedError):
    def __init__(self, program: str, args: Sequence[str], stderr: str, signal: str) -> None:
        self.signal = signal
        self.reason = f"terminated by signal {signal}"
        super().__init__(program, args, stderr)


class CommandTimeoutError(CommandFailedError):
    def __init__(self, program: str, args: Sequence[str], stderr: str, timeout: float) -> None:
        self.timeout = timeout
        self.reason = f"timed out after {timeout:g}s"
        super().__init__(program, args, stderr)


class ContainerListingError(DevcontainerError):
    """Listing managed containers failed, so cleanup could not proceed."""

    def __init__(self, cause: DevcontainerError) -> None:
        self.cause = cause
        super().__init__(f"Cannot list all docker ps: {cause}")


class NoWorkspacesFoundError(DevcontainerError):
    def __init__(self, root: Path) -> None:
        self.root = root
        super().__init__(f"No devcontainer workspace folders found under {root}")


class DiscoveryTimeoutError(DevcontainerError):
    def __init__(self, root: Path, timeout: float) -> None:
        self.root = root
        self.timeout = timeout
        super().__init__(f"Workspace discovery under {root} timed out after {timeout:g}s")
