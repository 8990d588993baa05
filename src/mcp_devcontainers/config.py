"""Centralized configuration — Pydantic BaseSettings with TOML + dotenv sources.

Settings live in config.toml in the working directory. Environment
variables override it, prefixed with ``MCP_DEVCONTAINERS_`` and using ``__``
as the nested delimiter (e.g. ``MCP_DEVCONTAINERS_RUNNER__TIMEOUT_SECONDS``).

Priority (highest wins): init args > env vars > .env > config.toml

Usage::

    from mcp_devcontainers.config import get_settings

    s = get_settings()
    print(s.docker.cli)
    print(s.discovery.skip_dirs)
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

# ---------------------------------------------------------------------------
# Sub-models (each maps to a [section] in config.toml)
# ---------------------------------------------------------------------------


class _StrictModel(BaseModel):
    """Base for all config sub-models — reject unknown keys so typos fail loudly."""

    model_config = {"extra": "forbid"}


class DevcontainerConfig(_StrictModel):
    """Where to find the devcontainer CLI.

    Lookup order: ``cli_path`` > ``devcontainer`` on PATH > the
    ``@devcontainers/cli`` npm package under one of ``node_modules_dirs``
    (run with ``node``).
    """

    cli_path: str | None = None
    node: str = "node"
    node_modules_dirs: list[str] = []


class DockerConfig(_StrictModel):
    cli: str = "docker"
    label: str = "dev.containers.id"  # label the devcontainer CLI puts on every container


class RunnerConfig(_StrictModel):
    timeout_seconds: float | None = 3600  # None = wait forever

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("timeout_seconds must be positive (or null to disable)")
        return v


class DiscoveryConfig(_StrictModel):
    marker_dir: str = ".devcontainer"
    marker_file: str = "devcontainer.json"
    skip_dirs: list[str] = [
        "node_modules",
        ".git",
        ".hg",
        ".svn",
        "dist",
        "build",
        "out",
        "target",
        "vendor",
        ".venv",
        "venv",
        "__pycache__",
        ".cache",
        ".tox",
        ".mypy_cache",
        ".pytest_cache",
    ]
    max_concurrency: int = 32
    timeout_seconds: float | None = 120

    @field_validator("max_concurrency")
    @classmethod
    def clamp_max_concurrency(cls, v: int) -> int:
        return max(1, v)


class ServerConfig(_StrictModel):
    name: str = "mcp-devcontainers"
    notification_interval_seconds: float = 10.0


# ---------------------------------------------------------------------------
# Root Settings
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        toml_file="config.toml",
        env_file=".env",
        env_prefix="MCP_DEVCONTAINERS_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    devcontainer: DevcontainerConfig = DevcontainerConfig()
    docker: DockerConfig = DockerConfig()
    runner: RunnerConfig = RunnerConfig()
    discovery: DiscoveryConfig = DiscoveryConfig()
    server: ServerConfig = ServerConfig()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Priority: init > env vars > .env > config.toml > file secrets."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


# ---------------------------------------------------------------------------
# Singleton
# ---------------------------------------------------------------------------

_settings: Settings | None = None


def get_settings() -> Settings:
    """Lazy cached singleton."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Clear the cached singleton (for tests)."""
    global _settings
    _settings = None
