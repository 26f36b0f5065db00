"""git_context tool for compact repository context."""

import logging

from gitctx_mcp.models import CommandResult
from gitctx_mcp.services import (
    COMMANDS,
    build_command,
    describe_command,
    get_config,
    run_command,
)
from gitctx_mcp.utils.validation import ShellSafetyError

logger = logging.getLogger(__name__)


def format_catalog() -> str:
    """List every query the tool accepts."""
    lines = ["Available queries:"]
    lines.extend(f"  {describe_command(query)}" for query in COMMANDS)
    return "\n".join(lines)


def format_result(result: CommandResult) -> str:
    """Format a command result for display."""
    if result.timed_out:
        return f"Error: {result.error}\n$ {result.command}"

    parts = [result.output.rstrip("\n") or "(no output)"]
    if result.truncated:
        parts.append("[output truncated]")
    if result.returncode != 0:
        parts.append(f"[exit code: {result.returncode}]")
        if result.error:
            parts.append(f"[stderr]\n{result.error.rstrip()}")
    return "\n".join(parts)


async def git_context(
    query: str = "list",
    limit: int | str | None = None,
    ref: str | None = None,
    branch: str | None = None,
    path: str | None = None,
    line: int | str | None = None,
    extension: str | None = None,
    author: str | None = None,
    execute: bool = True,
) -> str:
    """Run a compact, injection-safe git query against the repository.

    Args:
        query: Query name, or 'list' to show all queries.
        limit: Maximum entries (1-1000) for recent_commits, branches, tags,
            contributors, find_source_files.
        ref: Git ref for file_changes and diff_stat (e.g. "HEAD~5", "v1.0.0").
        branch: Branch for commits_since_branch, merge_base,
            branch_changed_files.
        path: File path for line_age and file_exists.
        line: Line number for line_age.
        extension: File extension for find_source_files (e.g. "py").
        author: Author pattern for author_commit_count.
        execute: If False, return the command without running it.

    Examples:
        git_context("list") - Show available queries
        git_context("recent_commits", limit=5) - Last five commits
        git_context("file_changes", ref="HEAD~3") - Files changed in 3 commits
        git_context("line_age", path="src/app.py", line=42) - Blame timestamp
        git_context("merge_base", branch="develop", execute=False) - Command only

    Returns:
        Command output, the command itself, or an error message.
    """
    if query == "list":
        return format_catalog()

    try:
        command = build_command(
            query,
            limit=limit,
            ref=ref,
            branch=branch,
            path=path,
            line=line,
            extension=extension,
            author=author,
        )
    except ShellSafetyError as e:
        logger.warning("Rejected %s input: %s", query, e)
        return f"Error: {e}"

    if not execute:
        return command

    config = get_config()
    try:
        result = await run_command(
            command,
            working_dir=config.repo_path,
            timeout=config.command_timeout,
            max_output_size=config.max_output_size,
        )
    except RuntimeError as e:
        logger.error("Query %s failed: %s", query, e)
        return f"Error: {e}"

    return format_result(result)
