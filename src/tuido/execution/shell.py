"""Run ``:!`` shell commands without blocking the editor."""

from __future__ import annotations

import asyncio
import codecs
import logging
import os
import re
from typing import TYPE_CHECKING

from tuido.execution.base import ExecutionResult, ExecutionStatus

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

# OSC strings (window titles, hyperlinks), CSI sequences (colours, cursor
# movement) and the remaining two-byte escapes.
_ESCAPE_RE = re.compile(
    r"\x1b\].*?(?:\x1b\\|\x07)"
    r"|\x1b\[[\x30-\x3f]*[\x20-\x2f]*[\x40-\x7e]"
    r"|\x1b[()#].|\x1b[=>]"
)

_TERMINATE_GRACE = 1.0
_CHUNK_SIZE = 64 * 1024


def strip_ansi_escapes(text: str) -> str:
    """Remove terminal escape sequences and carriage returns."""
    return _ESCAPE_RE.sub("", text).replace("\r", "")


async def _drain(
    stream: asyncio.StreamReader,
    sink: list[str],
    callback: Callable[[str], None] | None,
) -> None:
    # Fixed-size reads: a single line may be longer than the reader's limit.
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    pending = ""

    def emit(raw: str) -> None:
        line = strip_ansi_escapes(raw)
        sink.append(line)
        if callback and line:
            callback(line)

    while chunk := await stream.read(_CHUNK_SIZE):
        pending += decoder.decode(chunk)
        *complete, pending = pending.split("\n")
        for line in complete:
            emit(line + "\n")
    pending += decoder.decode(b"", final=True)
    if pending:
        emit(pending)


class ShellExecutor:
    """Runs one shell command at a time and collects its output.

    Commands run with the user's full permissions in ``working_directory``.
    """

    def __init__(self, working_directory: str | None = None) -> None:
        self.working_directory = working_directory or os.getcwd()

    async def execute(
        self,
        command: str,
        on_output: Callable[[str], None] | None = None,
        on_error: Callable[[str], None] | None = None,
    ) -> ExecutionResult:
        """Run ``command`` through the system shell.

        Args:
            command: Shell command line.
            on_output: Called with each stdout line as it arrives.
            on_error: Called with each stderr line as it arrives.

        Returns:
            The finished result. Launch failures are reported as ERROR
            results, cancellation is re-raised after the process is stopped.
        """
        result = ExecutionResult(command=command, status=ExecutionStatus.RUNNING)
        logger.info("Running shell command: %s", command)
        try:
            process = await asyncio.create_subprocess_shell(
                command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self.working_directory,
            )
        except OSError as e:
            logger.warning("Could not start %r: %s", command, e)
            result.status = ExecutionStatus.ERROR
            result.exception = e
            result.error = f"Failed to execute command: {e}"
            if on_error:
                on_error(result.error)
            return result

        out: list[str] = []
        err: list[str] = []
        try:
            await asyncio.gather(
                _drain(process.stdout, out, on_output),
                _drain(process.stderr, err, on_error),
            )
            returncode = await process.wait()
        except asyncio.CancelledError:
            await self._stop(process)
            raise
        except Exception as e:
            logger.warning("Reading output of %r failed: %s", command, e)
            await self._stop(process)
            result.status = ExecutionStatus.ERROR
            result.exception = e
            result.output = "".join(out)
            result.error = "".join(err) + f"Failed to read command output: {e}\n"
            if on_error:
                on_error(result.error)
            return result

        result.output = "".join(out)
        result.error = "".join(err)
        result.status = ExecutionStatus.SUCCESS if returncode == 0 else ExecutionStatus.ERROR
        logger.debug("Shell command %r exited with %s", command, returncode)
        return result

    async def _stop(self, process: asyncio.subprocess.Process) -> None:
        if process.returncode is not None:
            return
        try:
            process.terminate()
        except ProcessLookupError:
            return
        try:
            await asyncio.wait_for(process.wait(), timeout=_TERMINATE_GRACE)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
