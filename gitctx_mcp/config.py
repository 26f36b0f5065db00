"""Configuration management for gitctx MCP."""

import logging
import os
from contextlib import suppress
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("1", "true", "yes", "on")


def _get_env_int(key: str) -> int | None:
    """Read an integer environment variable, ignoring unparseable values."""
    if val := os.getenv(key):
        with suppress(ValueError):
            return int(val)
        logger.warning("Invalid int for %s: %r, ignoring", key, val)
    return None


def _get_env_bool(key: str) -> bool | None:
    if (val := os.getenv(key)) is None:
        return None
    return val.lower() in _TRUE_VALUES


@dataclass
class Config:
    """gitctx MCP configuration."""

    repo_path: Path = field(default_factory=Path.cwd)
    command_timeout: int = 30
    max_output_size: int = 65_536  # characters per stream
    # Transport configuration
    transport: str = "http"  # "http" or "stdio"
    http_host: str = "127.0.0.1"
    http_port: int = 8000
    # Middleware configuration
    log_payloads: bool = False
    slow_threshold_ms: int = 1000
    include_traceback: bool = False

    def __post_init__(self) -> None:
        """Apply GITCTX_* environment variable overrides."""
        if repo_path := os.getenv("GITCTX_REPO_PATH"):
            self.repo_path = Path(repo_path).expanduser()
        self.repo_path = Path(self.repo_path)

        val = _get_env_int("GITCTX_COMMAND_TIMEOUT")
        if val is not None:
            if val <= 0:
                logger.warning(
                    "GITCTX_COMMAND_TIMEOUT must be > 0, got %d. Using default: %d",
                    val,
                    self.command_timeout,
                )
            else:
                self.command_timeout = val

        val = _get_env_int("GITCTX_MAX_OUTPUT_SIZE")
        if val is not None:
            if val <= 0:
                logger.warning(
                    "GITCTX_MAX_OUTPUT_SIZE must be > 0, got %d. Using default: %d",
                    val,
                    self.max_output_size,
                )
            else:
                self.max_output_size = val

        transport = os.getenv("GITCTX_TRANSPORT", "").lower()
        if transport in ("http", "stdio"):
            self.transport = transport
        elif transport:
            logger.warning("Unknown GITCTX_TRANSPORT %r, using %s", transport, self.transport)

        if http_host := os.getenv("GITCTX_HTTP_HOST"):
            self.http_host = http_host

        val = _get_env_int("GITCTX_HTTP_PORT")
        if val is not None:
            self.http_port = val

        flag = _get_env_bool("GITCTX_LOG_PAYLOADS")
        if flag is not None:
            self.log_payloads = flag

        val = _get_env_int("GITCTX_SLOW_THRESHOLD_MS")
        if val is not None:
            self.slow_threshold_ms = val

        flag = _get_env_bool("GITCTX_INCLUDE_TRACEBACK")
        if flag is not None:
            self.include_traceback = flag

        logger.debug(
            "Config initialized: repo_path=%s, transport=%s, "
            "command_timeout=%d, max_output_size=%d",
            self.repo_path,
            self.transport,
            self.command_timeout,
            self.max_output_size,
        )
