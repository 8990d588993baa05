"""MCP server — tool listing, tool calls, resource update notifications.

:class:`DevcontainerServer` owns everything with a lifetime: the low-level
``mcp`` server, the resource subscriptions, and the notifier task that
re-announces subscribed resources on an interval. ``start()`` launches the
notifier; ``shutdown()`` cancels it and is safe to call more than once.
"""

from __future__ import annotations

import asyncio
import contextlib
from typing import Any

from mcp.server import Server
from mcp.server.session import ServerSession
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, TextContent, Tool
from pydantic import AnyUrl, ValidationError

from mcp_devcontainers import __version__
from mcp_devcontainers.config import Settings, get_settings
from mcp_devcontainers.errors import DevcontainerError, UnknownToolError
from mcp_devcontainers.logger import logger
from mcp_devcontainers.tools import all_tools, dispatch, get_spec, parse_request
from mcp_devcontainers.utils import create_background_task


def tool_error(msg: str) -> CallToolResult:
    """Return an MCP error result with a text message."""
    return CallToolResult(
        content=[TextContent(type="text", text=msg)],
        isError=True,
    )


class DevcontainerServer:
    def __init__(self, settings: Settings | None = None) -> None:
        s = settings or get_settings()
        self._interval = s.server.notification_interval_seconds
        self.server: Server[Any, Any] = Server(s.server.name, version=__version__)
        self._subscriptions: dict[str, ServerSession] = {}
        self._notifier: asyncio.Task[None] | None = None
        self._shut_down = False

        self.server.list_tools()(self.list_tools)
        self.server.call_tool()(self.call_tool)
        self.server.subscribe_resource()(self._subscribe)
        self.server.unsubscribe_resource()(self._unsubscribe)

    # --- Tool handlers ---

    async def list_tools(self) -> list[Tool]:
        return all_tools()

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> CallToolResult:
        try:
            spec = get_spec(name)
        except UnknownToolError as exc:
            logger.warning("Unknown tool requested", tool=name)
            return tool_error(str(exc))

        logger.info("Tool call", tool=name)
        try:
            text = await dispatch(parse_request(name, arguments))
        except ValidationError as exc:
            return tool_error(f"{spec.label} failure: {exc}")
        except DevcontainerError as exc:
            logger.warning("Tool call failed", tool=name, error_type=type(exc).__name__)
            return tool_error(f"{spec.label} failure: {exc}")

        return CallToolResult(
            content=[TextContent(type="text", text=f"{spec.label} result: {text}")],
        )

    # --- Resource subscriptions ---

    async def _subscribe(self, uri: AnyUrl) -> None:
        self._subscriptions[str(uri)] = self.server.request_context.session
        logger.debug("Resource subscribed", uri=str(uri))

    async def _unsubscribe(self, uri: AnyUrl) -> None:
        self._subscriptions.pop(str(uri), None)

    async def _notify_loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            for uri, session in list(self._subscriptions.items()):
                try:
                    await session.send_resource_updated(AnyUrl(uri))
                except Exception as exc:
                    # Session went away; stop notifying it.
                    logger.debug("Dropping resource subscription", uri=uri, err=str(exc))
                    self._subscriptions.pop(uri, None)

    # --- Lifecycle ---

    def start(self) -> None:
        if self._notifier is None and not self._shut_down:
            self._notifier = create_background_task(self._notify_loop(), name="resource-notifier")

    async def shutdown(self) -> None:
        if self._shut_down:
            return
        self._shut_down = True
        self._subscriptions.clear()
        if self._notifier is not None:
            self._notifier.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._notifier
            self._notifier = None
        logger.info("Server shut down")

    async def run_stdio(self) -> None:
        self.start()
        try:
            async with stdio_server() as (read_stream, write_stream):
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.server.create_initialization_options(),
                )
        finally:
            await self.shutdown()
