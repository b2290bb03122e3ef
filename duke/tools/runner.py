"""In-process tool invocation.

``ToolRunner.run`` looks up a provider by name and calls it on the current
thread with the runner's output sinks. No subprocess and no extra thread
is involved unless the provider itself starts one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

from duke.core.result import Err, Ok, Result
from duke.platform.process import NonZeroExit
from duke.tools.finder import ToolNotFound

if TYPE_CHECKING:
    from duke.output.console import ConsoleProtocol
    from duke.tools.finder import ToolFinder

__all__ = ["ToolRunner"]


class ToolRunner:
    """Runs named tool providers synchronously."""

    def __init__(
        self,
        finder: ToolFinder,
        out: TextIO,
        err: TextIO,
        console: ConsoleProtocol,
    ) -> None:
        self._finder = finder
        self._out = out
        self._err = err
        self._console = console

    @property
    def finder(self) -> ToolFinder:
        return self._finder

    def run(self, name: str, *args: str) -> Result[None, ToolNotFound | NonZeroExit]:
        """Run tool name with args.

        Returns:
            Ok(None) on exit code 0, Err(ToolNotFound) if no provider is
            named name, Err(NonZeroExit) on any other exit code
        """
        provider = self._finder.find(name)
        if provider is None:
            return Err(ToolNotFound(name))

        self._console.print(f"* {' '.join((name, *args))}")
        code = provider.run(self._out, self._err, list(args))
        if code != 0:
            return Err(NonZeroExit(command=name, code=code))
        return Ok(None)
