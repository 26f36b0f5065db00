"""Shared fixtures for gitctx MCP tests."""

from collections.abc import Iterator

import pytest

from gitctx_mcp.services import reset_state


@pytest.fixture(autouse=True)
def clean_state() -> Iterator[None]:
    """Drop the cached config so each test sees its own environment."""
    reset_state()
    yield
    reset_state()
