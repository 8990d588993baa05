"""Command builders — map a validated request to argv and run it once.

  _devcontainer  — devcontainer up / run-user-commands / exec
  _docker        — list and clean up labelled containers
"""

from mcp_devcontainers.commands._devcontainer import (
    devcontainer_exec,
    devcontainer_run_user_commands,
    devcontainer_up,
)
from mcp_devcontainers.commands._docker import (
    NOTHING_TO_CLEAN,
    devcontainer_cleanup,
    devcontainer_list,
)

__all__ = [
    "NOTHING_TO_CLEAN",
    "devcontainer_cleanup",
    "devcontainer_exec",
    "devcontainer_list",
    "devcontainer_run_user_commands",
    "devcontainer_up",
]
