"""Tool argument models — one per tool, camelCase on the wire.

The models form a closed set (:data:`ToolRequest`); the dispatcher in
:mod:`mcp_devcontainers.tools` matches on them exhaustively.
"""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, Field

WS_FOLDER_DESC = "Path to the workspace folder (string)"
STDIO_FILE_PATH_DESC = f"Path for output logs (string), default is {os.devnull}"
COMMAND_DESC = "Command to execute (array of string)"
ROOT_PATH_DESC = "Directory to search from (string), default is the server's working directory"


class _Request(BaseModel):
    # Unknown keys are dropped, field names or aliases both accepted.
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class _WorkspaceRequest(_Request):
    workspace_folder: str = Field(alias="workspaceFolder", description=WS_FOLDER_DESC)
    stdio_file_path: str | None = Field(
        default=None, alias="stdioFilePath", description=STDIO_FILE_PATH_DESC
    )


class DevUpRequest(_WorkspaceRequest):
    pass


class DevRunUserCommandsRequest(_WorkspaceRequest):
    pass


class DevExecRequest(_WorkspaceRequest):
    command: list[str] = Field(min_length=1, description=COMMAND_DESC)


class DevCleanupRequest(_Request):
    pass


class DevListRequest(_Request):
    pass


class DevWorkspaceFoldersRequest(_Request):
    root_path: str | None = Field(default=None, alias="rootPath", description=ROOT_PATH_DESC)


ToolRequest = (
    DevUpRequest
    | DevRunUserCommandsRequest
    | DevExecRequest
    | DevCleanupRequest
    | DevListRequest
    | DevWorkspaceFoldersRequest
)
