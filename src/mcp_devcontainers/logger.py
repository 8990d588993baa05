"""Logging — structlog over stdlib logging, stderr only.

stdout is the MCP stdio transport, so nothing is ever logged there. MCP
clients usually capture the server's stderr into a file; unless stderr is a
terminal, events are rendered as one JSON object per line.

The level comes from ``MCP_DEVCONTAINERS_LOG_LEVEL``, then ``LOG_LEVEL``.
It is read from the environment here because logging is configured at
import time, before ``Settings`` is first loaded.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from typing import IO, Any

import structlog

LOGGER_NAME = "mcp_devcontainers"
LEVEL_ENV_VARS = ("MCP_DEVCONTAINERS_LOG_LEVEL", "LOG_LEVEL")


def level_from_env(environ: Mapping[str, str] = os.environ) -> int:
    """First level variable that is set wins; unknown names mean INFO."""
    for var in LEVEL_ENV_VARS:
        value = environ.get(var, "").strip()
        if value:
            return logging.getLevelNamesMapping().get(value.upper(), logging.INFO)
    return logging.INFO


def build_processors(*, json_output: bool) -> list[Any]:
    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_output:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors += [
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    return processors


def configure_logging(stream: IO[str] | None = None) -> structlog.stdlib.BoundLogger:
    stream = stream or sys.stderr
    # The root logger also receives records from the mcp SDK.
    logging.basicConfig(level=level_from_env(), format="%(message)s", stream=stream)

    structlog.configure(
        processors=build_processors(json_output=not stream.isatty()),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return structlog.get_logger(LOGGER_NAME)


logger = configure_logging()


def _log_uncaught(
    exc_type: type[BaseException],
    exc_value: BaseException,
    exc_tb: object,
) -> None:
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_tb)  # type: ignore[arg-type]
        return
    logger.critical("Unhandled exception, exiting", exc_info=(exc_type, exc_value, exc_tb))
    sys.exit(1)


sys.excepthook = _log_uncaught
