"""MCP server exposing devcontainer lifecycle operations as tools."""

__version__ = "1.0.1"
