"""MCP tools for gitctx MCP."""

from gitctx_mcp.tools.git_context import git_context

__all__ = ["git_context"]
