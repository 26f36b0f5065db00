"""Colorful console logging formatter."""

import logging
import re
from datetime import datetime

# ANSI color codes
COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "white": "\033[37m",
    "cyan": "\033[36m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "bright_black": "\033[90m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
    "bright_yellow": "\033[93m",
    "bright_blue": "\033[94m",
    "bright_magenta": "\033[95m",
    "bright_cyan": "\033[96m",
    "bg_red": "\033[41m",
}

LEVEL_COLORS = {
    "DEBUG": COLORS["bright_black"],
    "INFO": COLORS["bright_green"],
    "WARNING": COLORS["bright_yellow"],
    "ERROR": COLORS["bright_red"],
    "CRITICAL": COLORS["bg_red"] + COLORS["white"] + COLORS["bold"],
}

# Component colors for logger names
COMPONENT_COLORS = {
    "gitctx_mcp.server": COLORS["bright_cyan"],
    "gitctx_mcp.services.executors": COLORS["bright_magenta"],
    "gitctx_mcp.tools": COLORS["bright_blue"],
    "gitctx_mcp.resources": COLORS["cyan"],
    "gitctx_mcp.middleware": COLORS["yellow"],
    "gitctx_mcp.config": COLORS["green"],
    "default": COLORS["white"],
}

_PACKAGE_PREFIX = "gitctx_mcp."

_GIT_COMMAND_PATTERN = re.compile(r"(git [\w-]+)")
_DURATION_PATTERN = re.compile(r"(\d+\.?\d*ms)")
_RETURNCODE_PATTERN = re.compile(r"(rc=-?\d+)")


class ColorfulFormatter(logging.Formatter):
    """Colorful log formatter with local timestamps and component highlighting."""

    def __init__(self, use_colors: bool = True) -> None:
        """Initialize the formatter.

        Args:
            use_colors: Whether to use ANSI colors.
        """
        super().__init__()
        self.use_colors = use_colors

    def _colorize(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if not self.use_colors:
            return text
        return f"{color}{text}{COLORS['reset']}"

    def _get_component_color(self, name: str) -> str:
        for prefix, color in COMPONENT_COLORS.items():
            if prefix != "default" and name.startswith(prefix):
                return color
        return COMPONENT_COLORS["default"]

    def _format_timestamp(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created)
        return f"{dt.strftime('%H:%M:%S')}.{int(record.msecs):03d} {dt.strftime('%m/%d')}"

    def _format_level(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelname, COLORS["white"])
        return self._colorize(f"{record.levelname:<8}", color)

    def _format_component(self, record: logging.LogRecord) -> str:
        name = record.name
        if name.startswith(_PACKAGE_PREFIX):
            name = name[len(_PACKAGE_PREFIX):]
        color = self._get_component_color(record.name)
        return self._colorize(f"{name:<20}", color)

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as ``time | level | component | message``."""
        timestamp = self._colorize(self._format_timestamp(record), COLORS["dim"])
        level = self._format_level(record)
        component = self._format_component(record)
        sep = self._colorize("|", COLORS["dim"])
        message = self._highlight_message(record.getMessage())

        return f"{timestamp} {sep} {level} {sep} {component} {sep} {message}"

    def _highlight_message(self, message: str) -> str:
        """Highlight git subcommands, durations and return codes."""
        if not self.use_colors:
            return message

        if "git " in message:
            message = _GIT_COMMAND_PATTERN.sub(
                f"{COLORS['bright_cyan']}\\1{COLORS['reset']}", message
            )

        if "ms" in message:
            message = _DURATION_PATTERN.sub(
                f"{COLORS['bright_yellow']}\\1{COLORS['reset']}", message
            )

        if "rc=" in message:
            message = _RETURNCODE_PATTERN.sub(
                f"{COLORS['bright_magenta']}\\1{COLORS['reset']}", message
            )

        return message


class MCPRequestFormatter(ColorfulFormatter):
    """Extended formatter with MCP request/response markers."""

    def format(self, record: logging.LogRecord) -> str:
        """Prefix the line with a marker for notable events."""
        base = super().format(record)

        if not self.use_colors:
            return base

        message = record.getMessage().lower()

        if "starting" in message or "ready" in message:
            return f"{COLORS['bright_green']}>>>{COLORS['reset']} {base}"
        elif "shutting down" in message or "shutdown" in message:
            return f"{COLORS['bright_red']}<<<{COLORS['reset']} {base}"
        elif "rejected" in message:
            return f"{COLORS['bright_magenta']}XX{COLORS['reset']}  {base}"
        elif "error" in message or "failed" in message or "timed out" in message:
            return f"{COLORS['bright_red']}!!{COLORS['reset']}  {base}"
        elif "slow" in message:
            return f"{COLORS['bright_yellow']}!{COLORS['reset']}   {base}"
        elif "completed" in message:
            return f"{COLORS['bright_green']}OK{COLORS['reset']}  {base}"

        return f"    {base}"
