"""gitctx MCP - injection-safe git context commands for coding assistants."""

__version__ = "0.1.0"
