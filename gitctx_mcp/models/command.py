"""Command execution data models."""

from dataclasses import dataclass


@dataclass
class CommandResult:
    """Result of a local git command execution."""

    command: str
    output: str
    error: str
    returncode: int
    truncated: bool = False
    timed_out: bool = False

    @property
    def succeeded(self) -> bool:
        """Whether the command exited cleanly."""
        return self.returncode == 0 and not self.timed_out
