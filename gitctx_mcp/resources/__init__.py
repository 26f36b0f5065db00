"""MCP resources for gitctx MCP."""

from gitctx_mcp.resources.catalog import list_commands_resource

__all__ = ["list_commands_resource"]
