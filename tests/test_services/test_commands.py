"""Tests for git command builders."""

import shlex

import pytest

from gitctx_mcp.services import commands
from gitctx_mcp.services.commands import COMMANDS, build_command, describe_command
from gitctx_mcp.utils.validation import (
    ExceedsMaximumError,
    InvalidArgumentError,
    InvalidCharacterError,
    InvalidLimitError,
    LeadingHyphenError,
    ShellSafetyError,
)


class TestRecentCommits:
    """Test recent_commits builder."""

    def test_default_limit(self) -> None:
        """Default command lists ten commits."""
        assert commands.recent_commits() == 'git log --oneline --no-decorate -10 --format="%h %s"'

    def test_custom_limit(self) -> None:
        """A numeric limit is spliced as the count flag."""
        assert commands.recent_commits(5) == 'git log --oneline --no-decorate -5 --format="%h %s"'

    def test_numeric_string_limit(self) -> None:
        """Numeric strings are accepted."""
        assert "-7 " in commands.recent_commits("7")

    @pytest.mark.parametrize("limit", [-1, 0, "abc", "5; rm -rf /", 2.5, None])
    def test_rejects_invalid_limit(self, limit: object) -> None:
        """Invalid limits raise before any command is assembled."""
        with pytest.raises(InvalidLimitError):
            commands.recent_commits(limit)

    def test_rejects_limit_over_max(self) -> None:
        """Limits are capped at 1000."""
        with pytest.raises(ExceedsMaximumError, match="cannot exceed 1000"):
            commands.recent_commits(1001)


class TestStaticCommands:
    """Test builders without arguments."""

    @pytest.mark.parametrize(
        ("builder", "expected"),
        [
            (commands.compact_status, "git status -uno --porcelain"),
            (commands.current_branch, "git branch --show-current"),
            (commands.remote_info, "git remote -v | head -2"),
            (commands.has_stashes, "git stash list --oneline | wc -l"),
            (commands.worktree_list, "git worktree list --porcelain"),
            (commands.contributors, "git shortlog -sn --no-merges | head -10"),
            (commands.last_commit_message, "git log -1 --format=%s"),
            (commands.last_commit_files, "git diff-tree --no-commit-id --name-only -r HEAD"),
            (commands.is_clean, "git status --porcelain | wc -l"),
        ],
    )
    def test_returns_fixed_command(self, builder, expected: str) -> None:
        """Static builders return consistent commands."""
        assert builder() == expected


class TestRefBuilders:
    """Test builders taking a git ref."""

    def test_file_changes_default(self) -> None:
        """Default ref is HEAD~5."""
        assert commands.file_changes() == "git diff HEAD~5..HEAD --name-status"

    def test_file_changes_custom_ref(self) -> None:
        """Custom refs are validated and spliced."""
        assert "HEAD~10..HEAD" in commands.file_changes("HEAD~10")
        assert "origin/main..HEAD" in commands.file_changes("origin/main")

    def test_diff_stat(self) -> None:
        """diff_stat summarizes to a single line."""
        assert commands.diff_stat("HEAD~3") == "git diff --stat HEAD~3..HEAD | tail -1"

    @pytest.mark.parametrize("builder", [commands.file_changes, commands.diff_stat])
    @pytest.mark.parametrize("ref", ["HEAD; rm", "HEAD; cat", "$(whoami)", "HEAD|cat"])
    def test_rejects_injection(self, builder, ref: str) -> None:
        """Refs with shell syntax are rejected."""
        with pytest.raises(InvalidCharacterError):
            builder(ref)

    def test_rejects_option_injection(self) -> None:
        """Refs that look like options are rejected."""
        with pytest.raises(LeadingHyphenError):
            commands.file_changes("--output")


class TestBranchBuilders:
    """Test builders taking a branch name."""

    def test_commits_since_branch(self) -> None:
        """Counts commits on HEAD beyond the branch."""
        assert commands.commits_since_branch() == "git rev-list --count main..HEAD"
        assert "develop..HEAD" in commands.commits_since_branch("develop")

    def test_merge_base(self) -> None:
        """Finds the merge base with HEAD."""
        assert commands.merge_base("develop") == "git merge-base develop HEAD"

    def test_branch_changed_files(self) -> None:
        """Uses the three-dot range."""
        assert commands.branch_changed_files("main") == "git diff main...HEAD --name-only"

    @pytest.mark.parametrize(
        "builder",
        [commands.commits_since_branch, commands.merge_base, commands.branch_changed_files],
    )
    @pytest.mark.parametrize("branch", ["main; rm", "$(whoami)", "main|cat", "--version", "HEAD~1"])
    def test_rejects_unsafe_branch(self, builder, branch: str) -> None:
        """Unsafe branch names never reach the command."""
        with pytest.raises(ShellSafetyError):
            builder(branch)


class TestLimitBuilders:
    """Test builders taking a result limit."""

    @pytest.mark.parametrize("builder", [commands.branches, commands.tags, commands.contributors])
    def test_limit_spliced_into_head(self, builder) -> None:
        """The limit becomes the head count."""
        assert builder(5).endswith("| head -5")

    def test_branches_format(self) -> None:
        """Branches are listed by short name."""
        assert commands.branches() == "git branch --format='%(refname:short)' | head -10"

    def test_tags_sorted_newest_first(self) -> None:
        """Tags sort by creation date, newest first."""
        assert commands.tags(3) == "git tag --sort=-creatordate | head -3"

    @pytest.mark.parametrize("builder", [commands.branches, commands.tags, commands.contributors])
    @pytest.mark.parametrize("limit", ["5; rm", -1, "10|cat"])
    def test_rejects_invalid_limit(self, builder, limit: object) -> None:
        """Invalid limits are rejected."""
        with pytest.raises(InvalidLimitError):
            builder(limit)


class TestLineAge:
    """Test line_age builder."""

    def test_escapes_path(self) -> None:
        """Paths are backslash-escaped."""
        cmd = commands.line_age("test file.js", 10)
        assert "test\\ file.js" in cmd
        assert cmd == (
            "git blame -L 10,10 --porcelain -- test\\ file.js"
            " | grep '^committer-time' | cut -d' ' -f2"
        )

    def test_path_stays_one_argument(self) -> None:
        """An injection payload in the path stays a single blame argument."""
        cmd = commands.line_age("a.js; rm -rf / #", 1)
        blame = cmd.split(" | ")[0]
        assert shlex.split(blame)[-1] == "a.js; rm -rf / #"

    def test_hyphen_path_after_separator(self) -> None:
        """Paths are placed after -- so they cannot act as options."""
        cmd = commands.line_age("-p", 1)
        assert "-- -p |" in cmd

    @pytest.mark.parametrize("line", [-1, 0, "abc"])
    def test_rejects_invalid_line(self, line: object) -> None:
        """Line numbers must be positive integers."""
        with pytest.raises(InvalidLimitError, match="positive integer"):
            commands.line_age("file.js", line)

    def test_line_upper_bound(self) -> None:
        """Line numbers are capped at ten million."""
        commands.line_age("file.js", 1_000_000)
        commands.line_age("file.js", 10_000_000)
        with pytest.raises(ExceedsMaximumError, match="cannot exceed"):
            commands.line_age("file.js", 10_000_001)
        with pytest.raises(ExceedsMaximumError, match="cannot exceed"):
            commands.line_age("file.js", 999_999_999)

    def test_rejects_line_breaks_in_path(self) -> None:
        """Paths with newlines are rejected."""
        with pytest.raises(InvalidCharacterError, match="invalid characters"):
            commands.line_age("file\ninjection", 1)

    @pytest.mark.parametrize("path", ["", None, 42])
    def test_rejects_missing_path(self, path: object) -> None:
        """A path is required."""
        with pytest.raises(InvalidArgumentError):
            commands.line_age(path, 1)


class TestFindSourceFiles:
    """Test find_source_files builder."""

    def test_default(self) -> None:
        """Defaults to TypeScript, twenty files."""
        assert commands.find_source_files() == "git ls-files | grep -E '\\.ts$' | head -20"

    def test_sanitizes_extension(self) -> None:
        """Leading dots are stripped from extensions."""
        assert "\\.js$" in commands.find_source_files(".js")

    def test_neutralizes_injection(self) -> None:
        """Injection payloads are reduced to letters."""
        assert "\\.tsrm$" in commands.find_source_files("ts; rm")

    def test_rejects_invalid_limit(self) -> None:
        """The limit is validated."""
        with pytest.raises(InvalidLimitError):
            commands.find_source_files("py", "20 && id")


class TestFreeTextBuilders:
    """Test builders taking free text."""

    def test_author_escaped(self) -> None:
        """Author names are escaped."""
        cmd = commands.author_commit_count("John Doe")
        assert "John\\ Doe" in cmd
        assert cmd == "git log --author=John\\ Doe --oneline | wc -l"

    def test_author_injection_stays_one_word(self) -> None:
        """Author payloads cannot break out of the --author argument."""
        cmd = commands.author_commit_count('x"; id; echo "')
        log = cmd.split(" | ")[0]
        assert shlex.split(log) == ["git", "log", '--author=x"; id; echo "', "--oneline"]

    def test_author_rejects_line_breaks(self) -> None:
        """Author strings with newlines are rejected."""
        with pytest.raises(InvalidCharacterError):
            commands.author_commit_count("test\n")

    def test_author_required(self) -> None:
        """An empty author is rejected."""
        with pytest.raises(InvalidArgumentError):
            commands.author_commit_count("")

    def test_file_exists_single_quote_escape(self) -> None:
        """File names are single-quote escaped."""
        cmd = commands.file_exists("it's a file")
        assert "it'\\''s" in cmd
        assert cmd == "test -f 'it'\\''s a file' && echo 'exists' || echo 'missing'"

    def test_file_exists_round_trip(self) -> None:
        """The escaped file name parses back to the original."""
        cmd = commands.file_exists("'; rm -rf / #")
        test_part = cmd.split(" && ")[0]
        assert shlex.split(test_part) == ["test", "-f", "'; rm -rf / #"]


class TestBuildCommand:
    """Test query registry dispatch."""

    def test_registry_covers_all_builders(self) -> None:
        """Every builder is registered under its own name."""
        assert len(COMMANDS) == 21
        for name, builder in COMMANDS.items():
            assert builder.__name__ == name

    def test_registry_is_read_only(self) -> None:
        """The registry cannot be modified at runtime."""
        with pytest.raises(TypeError):
            COMMANDS["evil"] = lambda: "rm -rf /"  # type: ignore[index]

    def test_dispatches_with_params(self) -> None:
        """Parameters are forwarded to the builder."""
        assert build_command("recent_commits", limit=3) == commands.recent_commits(3)

    def test_none_params_use_defaults(self) -> None:
        """None parameters are dropped so defaults apply."""
        assert build_command("file_changes", ref=None, limit=None) == commands.file_changes()

    def test_unknown_query(self) -> None:
        """Unknown queries are rejected with the available list."""
        with pytest.raises(InvalidArgumentError, match="Unknown query 'rm'"):
            build_command("rm")

    def test_unexpected_param(self) -> None:
        """Parameters the builder does not take are rejected."""
        with pytest.raises(InvalidArgumentError, match="does not accept: ref"):
            build_command("current_branch", ref="HEAD")

    def test_missing_required_param(self) -> None:
        """Required parameters must be supplied."""
        with pytest.raises(InvalidArgumentError, match="requires: line"):
            build_command("line_age", path="a.py")

    def test_validation_errors_propagate(self) -> None:
        """Builder validation failures reach the caller."""
        with pytest.raises(InvalidLimitError):
            build_command("recent_commits", limit="5; rm -rf /")

    def test_describe_command(self) -> None:
        """Descriptions include parameters and the docstring summary."""
        assert describe_command("line_age").startswith("line_age(path, line): ")
        assert describe_command("current_branch") == (
            "current_branch(): Name of the checked-out branch."
        )
