"""Shell command execution."""

from __future__ import annotations

from tuido.execution.base import ExecutionResult, ExecutionStatus
from tuido.execution.shell import ShellExecutor, strip_ansi_escapes

__all__ = [
    "ExecutionResult",
    "ExecutionStatus",
    "ShellExecutor",
    "strip_ansi_escapes",
]
