"""Data models for gitctx MCP."""

from gitctx_mcp.models.command import CommandResult

__all__ = ["CommandResult"]
