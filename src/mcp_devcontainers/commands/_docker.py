"""Container runtime commands: list and clean up devcontainer-managed containers.

Containers are recognised by the label the devcontainer CLI stamps on them
(``dev.containers.id`` by default, see ``[docker] label``).
"""

from __future__ import annotations

from mcp_devcontainers.config import get_settings
from mcp_devcontainers.errors import ContainerListingError, DevcontainerError
from mcp_devcontainers.logger import logger
from mcp_devcontainers.runner import Invocation, InvocationResult, run_command
from mcp_devcontainers.schemas import DevCleanupRequest, DevListRequest

LOCAL_FOLDER_LABEL = "devcontainer.local_folder"

NOTHING_TO_CLEAN = (
    "No 'docker ps' results found; all devcontainers have already been cleaned up."
)


def ps_format(label: str) -> str:
    return (
        "{psID: {{.ID}}, psName: {{.Names}}, "
        f'workspaceFolder: {{{{.Label "{LOCAL_FOLDER_LABEL}"}}}}, '
        f'container: {{{{.Label "{label}"}}}}}}'
    )


def list_args(label: str) -> tuple[str, ...]:
    return ("ps", "-a", "--filter", f"label={label}", "--format", ps_format(label))


def list_ids_args(label: str) -> tuple[str, ...]:
    return ("ps", "-aq", "-f", f"label={label}")


def remove_args(ids: list[str]) -> tuple[str, ...]:
    return ("rm", "-f", *ids)


async def devcontainer_list(req: DevListRequest) -> InvocationResult:
    """One line per devcontainer-managed container (id, name, workspace, devcontainer id)."""
    cfg = get_settings().docker
    return await run_command(Invocation(cfg.cli, list_args(cfg.label)))


async def list_container_ids() -> list[str]:
    cfg = get_settings().docker
    try:
        result = await run_command(Invocation(cfg.cli, list_ids_args(cfg.label)))
    except DevcontainerError as exc:
        raise ContainerListingError(exc) from exc
    return [line.strip() for line in result.stdout.splitlines() if line.strip()]


async def devcontainer_cleanup(req: DevCleanupRequest) -> InvocationResult | None:
    """Force-remove every devcontainer-managed container.

    Returns None without running ``rm`` when there is nothing to remove:
    ``docker rm -f`` with no ids is an argument error, not a no-op.
    """
    ids = await list_container_ids()
    if not ids:
        logger.info("No devcontainers to clean up")
        return None

    logger.info("Removing devcontainers", count=len(ids))
    return await run_command(Invocation(get_settings().docker.cli, remove_args(ids)))
