"""Child process execution with streamed output.

``ProcessRunner.run`` spawns a child and forwards its standard output and
standard error line by line to two sinks while the calling thread waits.
Each stream gets its own forwarding thread: line order within a stream is
kept, interleaving across the two streams is not defined.

Usage:
    runner = ProcessRunner(out=sys.stdout, err=sys.stderr)
    match runner.run("git", "status"):
        case Ok(_):
            pass
        case Err(error):
            print(f"failed: {error}")
"""

from __future__ import annotations

import subprocess
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import IO, TYPE_CHECKING, TextIO

from duke.core.result import Err, Ok, Result

if TYPE_CHECKING:
    from duke.output.console import ConsoleProtocol

__all__ = ["NonZeroExit", "ProcessRunner", "forward_lines"]


@dataclass(frozen=True, slots=True)
class NonZeroExit:
    """A command finished with a non-zero exit code.

    Attributes:
        command: Name of the command (tool name or executable)
        code: Exit code; -1 when the process could not be started
        detail: Extra context such as the OS error message
    """

    command: str
    code: int
    detail: str = ""

    def __str__(self) -> str:
        message = f"{self.command} finished with error code: {self.code}"
        if self.detail:
            message += f" ({self.detail})"
        return message


def forward_lines(stream: IO[str], sink: TextIO) -> None:
    """Copy every line from stream to sink until EOF, flushing each line."""
    with stream:
        for line in stream:
            sink.write(line if line.endswith("\n") else line + "\n")
            sink.flush()


class ProcessRunner:
    """Runs external commands, forwarding their output as it arrives.

    No timeout is applied: waiting is unbounded. A ``KeyboardInterrupt``
    received while waiting does not abort the wait; the child (which got
    the same signal) is waited for and its exit code is still reported.
    """

    def __init__(
        self,
        out: TextIO,
        err: TextIO,
        console: ConsoleProtocol | None = None,
    ) -> None:
        """Initialize runner.

        Args:
            out: Sink for the child's standard output
            err: Sink for the child's standard error
            console: Optional console for echoing command lines
        """
        self._out = out
        self._err = err
        self._console = console

    def run(
        self,
        command: str,
        *args: str,
        env: Mapping[str, str] | None = None,
        cwd: Path | None = None,
    ) -> Result[None, NonZeroExit]:
        """Run command with args and block until it exits.

        Returns:
            Ok(None) on exit code 0, Err(NonZeroExit) otherwise
        """
        name = Path(command).name
        if self._console is not None:
            self._console.print(f"* {' '.join((command, *args))}")

        try:
            proc = subprocess.Popen(
                [command, *args],
                cwd=None if cwd is None else str(cwd),
                env=None if env is None else dict(env),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            return Err(NonZeroExit(command=command, code=-1, detail=str(e)))

        assert proc.stdout is not None and proc.stderr is not None
        pumps = [
            threading.Thread(
                target=forward_lines, args=(proc.stdout, self._out), name=f"{name}-out", daemon=True
            ),
            threading.Thread(
                target=forward_lines, args=(proc.stderr, self._err), name=f"{name}-err", daemon=True
            ),
        ]
        for pump in pumps:
            pump.start()

        code = self._wait(proc)
        for pump in pumps:
            pump.join()

        if code != 0:
            return Err(NonZeroExit(command=command, code=code))
        return Ok(None)

    def _wait(self, proc: subprocess.Popen[str]) -> int:
        while True:
            try:
                return proc.wait()
            except KeyboardInterrupt:
                if self._console is not None:
                    self._console.debug(f"interrupted while waiting for pid {proc.pid}")
