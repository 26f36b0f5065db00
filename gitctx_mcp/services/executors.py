"""Local command executor for built git commands."""

import asyncio
import logging
import os
import signal
import time
from contextlib import suppress
from pathlib import Path

from gitctx_mcp.models import CommandResult

logger = logging.getLogger(__name__)

# Exit status used by coreutils `timeout`
TIMEOUT_RETURNCODE = 124


def _decode(data: bytes | None, max_size: int) -> tuple[str, bool]:
    """Decode process output, capping it at max_size characters."""
    if not data:
        return "", False
    text = data.decode("utf-8", errors="replace")
    if len(text) > max_size:
        return text[:max_size], True
    return text, False


async def run_command(
    command: str,
    working_dir: Path | str,
    timeout: int,
    max_output_size: int,
) -> CommandResult:
    """Execute a built command through the shell in working_dir.

    The command string must come from a builder in
    gitctx_mcp.services.commands; it is passed to the shell as-is.

    Args:
        command: Shell command to run
        working_dir: Repository directory
        timeout: Seconds before the process group is killed
        max_output_size: Maximum characters kept from stdout and stderr each

    Returns:
        CommandResult with output, error, and return code. A non-zero exit
        is reported, not raised.

    Raises:
        RuntimeError: If the shell cannot be started.
    """
    start = time.perf_counter()
    try:
        process = await asyncio.create_subprocess_shell(
            command,
            cwd=str(working_dir),
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            start_new_session=True,
        )
    except OSError as e:
        raise RuntimeError(f"Failed to start command in {working_dir}: {e}") from e

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        # Kill the whole pipeline, not just the shell
        with suppress(ProcessLookupError):
            os.killpg(process.pid, signal.SIGKILL)
        await process.wait()
        logger.warning("Command timed out after %ds: %s", timeout, command)
        return CommandResult(
            command=command,
            output="",
            error=f"Command timed out after {timeout}s",
            returncode=TIMEOUT_RETURNCODE,
            timed_out=True,
        )

    output, out_truncated = _decode(stdout, max_output_size)
    error, err_truncated = _decode(stderr, max_output_size)
    returncode = process.returncode if process.returncode is not None else 0

    duration_ms = (time.perf_counter() - start) * 1000
    logger.debug("Ran %s rc=%d in %.1fms", command, returncode, duration_ms)

    return CommandResult(
        command=command,
        output=output,
        error=error,
        returncode=returncode,
        truncated=out_truncated or err_truncated,
    )
