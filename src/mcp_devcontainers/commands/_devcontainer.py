"""devcontainer CLI commands: up, run-user-commands, exec."""

from __future__ import annotations

from mcp_devcontainers.runner import DEVCONTAINER, Invocation, InvocationResult, run_command
from mcp_devcontainers.schemas import DevExecRequest, DevRunUserCommandsRequest, DevUpRequest


def up_args(req: DevUpRequest) -> tuple[str, ...]:
    return ("up", "--workspace-folder", req.workspace_folder)


def run_user_commands_args(req: DevRunUserCommandsRequest) -> tuple[str, ...]:
    return ("run-user-commands", "--workspace-folder", req.workspace_folder)


def exec_args(req: DevExecRequest) -> tuple[str, ...]:
    return ("exec", "--workspace-folder", req.workspace_folder, *req.command)


async def devcontainer_up(req: DevUpRequest) -> InvocationResult:
    """Start (building if needed) the devcontainer for a workspace."""
    return await run_command(Invocation(DEVCONTAINER, up_args(req), req.stdio_file_path))


async def devcontainer_run_user_commands(req: DevRunUserCommandsRequest) -> InvocationResult:
    """Run postCreateCommand / postStartCommand hooks in the workspace's container."""
    return await run_command(
        Invocation(DEVCONTAINER, run_user_commands_args(req), req.stdio_file_path)
    )


async def devcontainer_exec(req: DevExecRequest) -> InvocationResult:
    # DevExecRequest guarantees a non-empty command.
    return await run_command(Invocation(DEVCONTAINER, exec_args(req), req.stdio_file_path))
