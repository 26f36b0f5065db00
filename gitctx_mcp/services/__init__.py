"""Services for gitctx MCP."""

from gitctx_mcp.services.commands import (
    COMMANDS,
    build_command,
    describe_command,
)
from gitctx_mcp.services.executors import run_command
from gitctx_mcp.services.state import get_config, reset_state, set_config

__all__ = [
    "COMMANDS",
    "build_command",
    "describe_command",
    "get_config",
    "reset_state",
    "run_command",
    "set_config",
]
