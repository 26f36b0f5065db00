"""Catalog resource listing the available git queries."""

from gitctx_mcp.services import COMMANDS, describe_command, get_config


async def list_commands_resource() -> str:
    """List available git queries and the repository they run against.

    Returns:
        Formatted query catalog with usage hints
    """
    config = get_config()

    lines = ["Git Context Queries", "=" * 40, ""]
    lines.append(f"Repository: {config.repo_path}")
    lines.append("")

    for query in COMMANDS:
        lines.append(f"  {describe_command(query)}")

    lines.append("")
    lines.append("Usage Examples:")
    lines.append("-" * 40)
    lines.append('  git_context("recent_commits", limit=5)')
    lines.append('  git_context("diff_stat", ref="HEAD~3")')
    lines.append('  git_context("author_commit_count", author="Jane Doe")')

    return "\n".join(lines)
