"""Base types for shell command execution."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class ExecutionStatus(Enum):
    """Status of command execution."""

    PENDING = auto()
    RUNNING = auto()
    SUCCESS = auto()
    ERROR = auto()


@dataclass
class ExecutionResult:
    """Result of running a shell command."""

    command: str
    status: ExecutionStatus = ExecutionStatus.PENDING
    output: str = ""
    error: str = ""
    exception: Exception | None = None

    @property
    def is_success(self) -> bool:
        return self.status == ExecutionStatus.SUCCESS

    def summary(self) -> str:
        """One-line status text for the command result."""
        if self.is_success:
            return "> " + " ".join(self.output.strip().splitlines())
        detail = self.error.strip() or self.output.strip() or "command failed"
        return f"Error: {detail.splitlines()[-1]}"
