"""Git command builders.

Each builder validates or escapes its arguments before assembling a fixed
command template, and produces compact output suited to an assistant's
context window. Builders never interpolate raw input: limits go through
validate_limit, refs and branches through the allow-list validators, and
free text (paths, author names) through the shell escapers.
"""

import inspect
from collections.abc import Callable
from types import MappingProxyType
from typing import Any, Final

from gitctx_mcp.utils.shell import (
    escape_double_quoted,
    escape_single_quoted,
    sanitize_extension,
)
from gitctx_mcp.utils.validation import (
    InvalidArgumentError,
    validate_branch_name,
    validate_git_ref,
    validate_limit,
)

DEFAULT_LIMIT: Final[int] = 10
DEFAULT_FILE_LIMIT: Final[int] = 20
DEFAULT_REF: Final[str] = "HEAD~5"
DEFAULT_BRANCH: Final[str] = "main"
MAX_LINE_NUMBER: Final[int] = 10_000_000


def _require_text(value: Any, name: str) -> None:
    if not isinstance(value, str) or not value:
        raise InvalidArgumentError(f"{name} must be a non-empty string")


def recent_commits(limit: int | str = DEFAULT_LIMIT) -> str:
    """Recent commits as ``<hash> <subject>`` lines."""
    count = validate_limit(limit)
    return f'git log --oneline --no-decorate -{count} --format="%h %s"'


def compact_status() -> str:
    """Porcelain status of tracked files."""
    return "git status -uno --porcelain"


def file_changes(ref: str = DEFAULT_REF) -> str:
    """Files changed between a ref and HEAD, with status letters."""
    safe_ref = validate_git_ref(ref)
    return f"git diff {safe_ref}..HEAD --name-status"


def current_branch() -> str:
    """Name of the checked-out branch."""
    return "git branch --show-current"


def remote_info() -> str:
    """First configured remote."""
    return "git remote -v | head -2"


def has_stashes() -> str:
    """Number of stash entries."""
    return "git stash list --oneline | wc -l"


def worktree_list() -> str:
    """Worktrees in porcelain format."""
    return "git worktree list --porcelain"


def line_age(path: str, line: int | str) -> str:
    """Commit timestamp of the last change to one line of a file.

    Args:
        path: File path, escaped and placed after ``--``
        line: 1-based line number, at most 10,000,000

    Returns:
        Command printing a unix timestamp
    """
    _require_text(path, "File path")
    safe_path = escape_double_quoted(path)
    line_number = validate_limit(line, max_value=MAX_LINE_NUMBER, name="Line number")
    return (
        f"git blame -L {line_number},{line_number} --porcelain -- {safe_path}"
        " | grep '^committer-time' | cut -d' ' -f2"
    )


def find_source_files(
    extension: str = "ts",
    limit: int | str = DEFAULT_FILE_LIMIT,
) -> str:
    """Tracked files ending in the given extension."""
    safe_ext = sanitize_extension(extension)
    count = validate_limit(limit)
    return f"git ls-files | grep -E '\\.{safe_ext}$' | head -{count}"


def diff_stat(ref: str = DEFAULT_REF) -> str:
    """One-line change summary between a ref and HEAD."""
    safe_ref = validate_git_ref(ref)
    return f"git diff --stat {safe_ref}..HEAD | tail -1"


def contributors(limit: int | str = DEFAULT_LIMIT) -> str:
    """Top authors by commit count, merges excluded."""
    count = validate_limit(limit)
    return f"git shortlog -sn --no-merges | head -{count}"


def last_commit_message() -> str:
    """Subject of the last commit."""
    return "git log -1 --format=%s"


def last_commit_files() -> str:
    """Files touched by the last commit."""
    return "git diff-tree --no-commit-id --name-only -r HEAD"


def branches(limit: int | str = DEFAULT_LIMIT) -> str:
    """Local branch names."""
    count = validate_limit(limit)
    return f"git branch --format='%(refname:short)' | head -{count}"


def tags(limit: int | str = DEFAULT_LIMIT) -> str:
    """Tags, newest first."""
    count = validate_limit(limit)
    return f"git tag --sort=-creatordate | head -{count}"


def commits_since_branch(branch: str = DEFAULT_BRANCH) -> str:
    """Number of commits on HEAD that are not on a branch."""
    safe_branch = validate_branch_name(branch)
    return f"git rev-list --count {safe_branch}..HEAD"


def is_clean() -> str:
    """Count of modified or untracked entries; 0 means clean."""
    return "git status --porcelain | wc -l"


def merge_base(branch: str = DEFAULT_BRANCH) -> str:
    """Common ancestor of a branch and HEAD."""
    safe_branch = validate_branch_name(branch)
    return f"git merge-base {safe_branch} HEAD"


def branch_changed_files(branch: str = DEFAULT_BRANCH) -> str:
    """Files changed on HEAD since it diverged from a branch."""
    safe_branch = validate_branch_name(branch)
    return f"git diff {safe_branch}...HEAD --name-only"


def author_commit_count(author: str) -> str:
    """Number of commits by a matching author."""
    _require_text(author, "Author")
    safe_author = escape_double_quoted(author)
    return f"git log --author={safe_author} --oneline | wc -l"


def file_exists(path: str) -> str:
    """Prints ``exists`` or ``missing`` for a regular file."""
    _require_text(path, "File path")
    safe_path = escape_single_quoted(path)
    return f"test -f '{safe_path}' && echo 'exists' || echo 'missing'"


COMMANDS: Final[MappingProxyType[str, Callable[..., str]]] = MappingProxyType(
    {
        "recent_commits": recent_commits,
        "compact_status": compact_status,
        "file_changes": file_changes,
        "current_branch": current_branch,
        "remote_info": remote_info,
        "has_stashes": has_stashes,
        "worktree_list": worktree_list,
        "line_age": line_age,
        "find_source_files": find_source_files,
        "diff_stat": diff_stat,
        "contributors": contributors,
        "last_commit_message": last_commit_message,
        "last_commit_files": last_commit_files,
        "branches": branches,
        "tags": tags,
        "commits_since_branch": commits_since_branch,
        "is_clean": is_clean,
        "merge_base": merge_base,
        "branch_changed_files": branch_changed_files,
        "author_commit_count": author_commit_count,
        "file_exists": file_exists,
    }
)


def describe_command(query: str) -> str:
    """One-line description of a registered query, with its parameters."""
    builder = COMMANDS[query]
    params = ", ".join(inspect.signature(builder).parameters)
    summary = (inspect.getdoc(builder) or "").splitlines()[0]
    return f"{query}({params}): {summary}"


def build_command(query: str, **params: Any) -> str:
    """Build the shell command for a named query.

    Parameters left as None are dropped so builder defaults apply.

    Args:
        query: Key in COMMANDS (e.g. "recent_commits")
        **params: Builder arguments (limit, ref, branch, path, line, ...)

    Returns:
        Shell command string

    Raises:
        InvalidArgumentError: If the query is unknown or a parameter is not
            accepted by its builder
        ShellSafetyError: If an argument fails validation
    """
    builder = COMMANDS.get(query)
    if builder is None:
        available = ", ".join(sorted(COMMANDS))
        raise InvalidArgumentError(f"Unknown query '{query}'. Available: {available}")

    kwargs = {key: value for key, value in params.items() if value is not None}
    accepted = inspect.signature(builder).parameters
    unexpected = sorted(key for key in kwargs if key not in accepted)
    if unexpected:
        raise InvalidArgumentError(
            f"Query '{query}' does not accept: {', '.join(unexpected)}"
        )

    missing = sorted(
        name
        for name, param in accepted.items()
        if param.default is inspect.Parameter.empty and name not in kwargs
    )
    if missing:
        raise InvalidArgumentError(f"Query '{query}' requires: {', '.join(missing)}")

    return builder(**kwargs)
