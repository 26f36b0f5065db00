"""gitctx MCP middleware components."""

from gitctx_mcp.middleware.base import GitctxMiddleware
from gitctx_mcp.middleware.errors import ErrorHandlingMiddleware
from gitctx_mcp.middleware.logging import LoggingMiddleware

__all__ = [
    "ErrorHandlingMiddleware",
    "GitctxMiddleware",
    "LoggingMiddleware",
]
