"""Process runner — runs external CLIs and captures their output.

This package is split into focused submodules:
  _resolve  — Program name → runnable command prefix (PATH, npm package)
  _sink     — Output sink mirroring live stdout to a file or the null device
  _process  — Spawn, stdout/stderr pumping, exit classification, timeouts
"""

from mcp_devcontainers.runner._process import Invocation, InvocationResult, run_command
from mcp_devcontainers.runner._resolve import DEVCONTAINER, resolve_command
from mcp_devcontainers.runner._sink import OutputSink

__all__ = [
    "DEVCONTAINER",
    "Invocation",
    "InvocationResult",
    "OutputSink",
    "resolve_command",
    "run_command",
]
