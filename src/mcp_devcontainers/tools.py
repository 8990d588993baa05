"""Tool catalogue and dispatch.

``TOOL_SPECS`` is the wire-facing table (name → request model, label,
description). Once arguments are parsed into a request model, dispatch is a
closed match over the model types: adding a request type without a branch
fails type checking at ``assert_never``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, assert_never

from mcp.types import Tool

from mcp_devcontainers.commands import (
    NOTHING_TO_CLEAN,
    devcontainer_cleanup,
    devcontainer_exec,
    devcontainer_list,
    devcontainer_run_user_commands,
    devcontainer_up,
)
from mcp_devcontainers.discovery import discover_workspaces, render_workspaces
from mcp_devcontainers.errors import UnknownToolError
from mcp_devcontainers.schemas import (
    DevCleanupRequest,
    DevExecRequest,
    DevListRequest,
    DevRunUserCommandsRequest,
    DevUpRequest,
    DevWorkspaceFoldersRequest,
    ToolRequest,
)


@dataclass(frozen=True)
class ToolSpec:
    name: str
    label: str
    description: str
    request_model: type[ToolRequest]

    def definition(self) -> Tool:
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.request_model.model_json_schema(by_alias=True),
        )


_SPECS = [
    ToolSpec(
        name="devcontainer_up",
        label="Devcontainer Up",
        description=(
            "Initializes and starts a devcontainer environment in the specified "
            "workspace folder. Ensures the devcontainer is operational and ready "
            "for development tasks."
        ),
        request_model=DevUpRequest,
    ),
    ToolSpec(
        name="devcontainer_run_user_commands",
        label="Devcontainer Run User Commands",
        description=(
            "Executes user-defined postCreateCommand and postStartCommand scripts "
            "within the devcontainer for the specified workspace. Use this to run "
            "setup or initialization tasks after container startup."
        ),
        request_model=DevRunUserCommandsRequest,
    ),
    ToolSpec(
        name="devcontainer_exec",
        label="Devcontainer Exec",
        description=(
            "Runs a custom shell command inside the devcontainer for the specified "
            "workspace. Useful for executing arbitrary commands or scripts within "
            "the devcontainer environment."
        ),
        request_model=DevExecRequest,
    ),
    ToolSpec(
        name="devcontainer_cleanup",
        label="Devcontainer Cleanup",
        description="Runs docker command to cleanup all devcontainer environments.",
        request_model=DevCleanupRequest,
    ),
    ToolSpec(
        name="devcontainer_list",
        label="Devcontainer List",
        description="Runs docker command to list all devcontainer environments.",
        request_model=DevListRequest,
    ),
    ToolSpec(
        name="devcontainer_workspace_folders",
        label="Devcontainer Workspace Folders",
        description=(
            "Searches a directory tree for workspace folders with a devcontainer "
            "config (.devcontainer/devcontainer.json)."
        ),
        request_model=DevWorkspaceFoldersRequest,
    ),
]

TOOL_SPECS: dict[str, ToolSpec] = {spec.name: spec for spec in _SPECS}


def get_spec(name: str) -> ToolSpec:
    spec = TOOL_SPECS.get(name)
    if spec is None:
        raise UnknownToolError(name)
    return spec


def all_tools() -> list[Tool]:
    return [spec.definition() for spec in _SPECS]


def parse_request(name: str, arguments: dict[str, Any] | None) -> ToolRequest:
    """Validate raw tool arguments into the tool's request model.

    Raises UnknownToolError or pydantic.ValidationError.
    """
    return get_spec(name).request_model.model_validate(arguments or {})


async def dispatch(request: ToolRequest) -> str:
    """Run the operation for *request* and return its rendered text."""
    if isinstance(request, DevUpRequest):
        return (await devcontainer_up(request)).render()
    if isinstance(request, DevRunUserCommandsRequest):
        return (await devcontainer_run_user_commands(request)).render()
    if isinstance(request, DevExecRequest):
        return (await devcontainer_exec(request)).render()
    if isinstance(request, DevCleanupRequest):
        result = await devcontainer_cleanup(request)
        return NOTHING_TO_CLEAN if result is None else result.render()
    if isinstance(request, DevListRequest):
        return (await devcontainer_list(request)).render()
    if isinstance(request, DevWorkspaceFoldersRequest):
        return render_workspaces(await discover_workspaces(request.root_path))
    assert_never(request)
