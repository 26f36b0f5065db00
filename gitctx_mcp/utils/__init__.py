"""Utilities for gitctx MCP."""

from gitctx_mcp.utils.console import ColorfulFormatter, MCPRequestFormatter
from gitctx_mcp.utils.shell import (
    escape_double_quoted,
    escape_single_quoted,
    sanitize_extension,
)
from gitctx_mcp.utils.validation import (
    ExceedsMaximumError,
    InvalidArgumentError,
    InvalidCharacterError,
    InvalidLimitError,
    LeadingHyphenError,
    ShellSafetyError,
    TooLongError,
    validate_branch_name,
    validate_git_ref,
    validate_limit,
)

__all__ = [
    "ColorfulFormatter",
    "escape_double_quoted",
    "escape_single_quoted",
    "ExceedsMaximumError",
    "InvalidArgumentError",
    "InvalidCharacterError",
    "InvalidLimitError",
    "LeadingHyphenError",
    "MCPRequestFormatter",
    "sanitize_extension",
    "ShellSafetyError",
    "TooLongError",
    "validate_branch_name",
    "validate_git_ref",
    "validate_limit",
]
