"""gitctx MCP FastMCP server.

Thin wrapper that wires the git_context tool, the query catalog resource,
and the middleware stack into a FastMCP server. Command construction lives
in services/commands.py and input sanitizing in utils/.
"""

import logging
import os
import shutil
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from gitctx_mcp.middleware import ErrorHandlingMiddleware, LoggingMiddleware
from gitctx_mcp.resources import list_commands_resource
from gitctx_mcp.services import COMMANDS, get_config
from gitctx_mcp.tools import git_context
from gitctx_mcp.utils.console import MCPRequestFormatter


def _configure_logging() -> None:
    """Configure colorful logging for the gitctx_mcp package.

    Called at module load time so logging is in place however the server
    is started.
    """
    log_level = os.getenv("GITCTX_LOG_LEVEL", "INFO").upper()
    use_colors = os.getenv("GITCTX_LOG_COLORS", "true").lower() != "false"

    if not sys.stderr.isatty():
        use_colors = False

    package_logger = logging.getLogger("gitctx_mcp")
    package_logger.setLevel(getattr(logging, log_level, logging.INFO))

    # Only add handler if not already configured
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(MCPRequestFormatter(use_colors=use_colors))
        package_logger.addHandler(handler)
        package_logger.propagate = False

    for noisy_logger in [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
        "httpx",
        "httpcore",
        "fastmcp",
        "starlette",
        "anyio",
    ]:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)


_configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Log repository and git availability at startup.

    Args:
        server: The FastMCP server instance

    Yields:
        Dict with the repository path
    """
    config = get_config()
    logger.info("gitctx MCP server starting up")

    if shutil.which("git") is None:
        logger.warning("git executable not found on PATH; queries will fail")
    if not (config.repo_path / ".git").exists():
        logger.warning("%s does not look like a git repository", config.repo_path)

    logger.info(
        "Serving %d queries for %s (timeout=%ds)",
        len(COMMANDS),
        config.repo_path,
        config.command_timeout,
    )
    logger.info("gitctx MCP server ready to accept connections")

    try:
        yield {"repo_path": str(config.repo_path)}
    finally:
        logger.info("gitctx MCP server shutting down")


def configure_middleware(server: FastMCP) -> None:
    """Add middleware in order: ErrorHandling -> Logging (with timing).

    Args:
        server: The FastMCP server to configure.
    """
    config = get_config()

    # First added = innermost
    server.add_middleware(
        ErrorHandlingMiddleware(include_traceback=config.include_traceback)
    )
    server.add_middleware(
        LoggingMiddleware(
            include_payloads=config.log_payloads,
            slow_threshold_ms=float(config.slow_threshold_ms),
        )
    )


def create_server() -> FastMCP:
    """Create and configure the MCP server with middleware, tools and resources.

    Returns:
        Configured FastMCP server instance
    """
    server = FastMCP(
        "gitctx_mcp",
        lifespan=app_lifespan,
    )

    configure_middleware(server)

    server.tool()(git_context)
    server.resource("gitctx://commands")(list_commands_resource)

    @server.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        """Health check endpoint."""
        client_host = request.client.host if request.client else "unknown"
        logger.debug("Health check from %s", client_host)
        return PlainTextResponse("OK")

    return server


# Default server instance
mcp = create_server()
