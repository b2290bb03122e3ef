"""Remote fetcher: one-shot copy of a remote resource to a local file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from duke.core.result import Err, Ok, Result
from duke.platform.files import create_directories

if TYPE_CHECKING:
    from duke.output.console import ConsoleProtocol
    from duke.tools.http import HttpClient

__all__ = ["Browser", "TransferFailure"]


@dataclass(frozen=True, slots=True)
class TransferFailure:
    """A remote copy failed.

    Attributes:
        source: URL that was requested
        target: Local file that was to be written
        message: Human-readable reason
    """

    source: str
    target: Path
    message: str

    def __str__(self) -> str:
        return f"transfer of {self.source} to {self.target} failed: {self.message}"


class Browser:
    """Copies remote resources to local files.

    There is no retry, no resumption and no checksum verification; a failed
    transfer removes the partial file it wrote and reports a ``TransferFailure``.
    """

    def __init__(self, http: HttpClient, console: ConsoleProtocol | None = None) -> None:
        self._http = http
        self._console = console

    def copy(self, source: str, target: Path) -> Result[Path, TransferFailure]:
        """Copy bytes from source into a new file at target.

        Returns:
            Ok(target), or Err(TransferFailure) on any I/O fault,
            including an already existing target
        """
        if target.exists():
            return Err(TransferFailure(source, target, "target already exists"))
        if self._console is not None:
            self._console.debug(f"copy {source} to {target}")

        try:
            create_directories(target.parent)
        except OSError as e:
            return Err(TransferFailure(source, target, str(e)))

        result = self._http.download(source, target)
        if isinstance(result, Err):
            if not result.error.target_exists:
                target.unlink(missing_ok=True)
            return Err(TransferFailure(source, target, str(result.error)))
        return Ok(target)
