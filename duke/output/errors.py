"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeAlias

from duke.core.errors import ErrorCode
from duke.core.settings import ConfigError
from duke.output.console import Style
from duke.platform.files import UnsafeDeletion
from duke.platform.process import NonZeroExit
from duke.services.install import UnknownInstaller
from duke.tools.browser import TransferFailure
from duke.tools.finder import ToolNotFound

if TYPE_CHECKING:
    from duke.output.console import ConsoleProtocol

__all__ = ["DukeError", "error_exit_code", "print_error"]

DukeError: TypeAlias = (
    ConfigError | NonZeroExit | ToolNotFound | TransferFailure | UnknownInstaller | UnsafeDeletion
)


def print_error(error: DukeError, console: ConsoleProtocol) -> None:
    """Print error to console with appropriate formatting."""
    match error:
        case TransferFailure(source=source, message=message):
            console.error(f"download failed: {source}")
            console.print(f"reason: {message}", Style.DIM)
        case ToolNotFound() | NonZeroExit() | UnsafeDeletion():
            console.error(str(error))
        case UnknownInstaller(key=key, available=available):
            console.error(f"Unknown installer: {key}")
            if available:
                console.print(f"Available: {', '.join(available)}", Style.DIM)
        case ConfigError(message=message, path=path):
            console.error(message)
            if path is not None:
                console.print(f"file: {path}", Style.DIM)


def error_exit_code(error: DukeError) -> int:
    """Get exit code for an error."""
    match error:
        case ConfigError() | UnknownInstaller():
            return int(ErrorCode.USER_ERROR)
        case ToolNotFound():
            return int(ErrorCode.ENV_ERROR)
        case NonZeroExit():
            return int(ErrorCode.BUILD_ERROR)
        case TransferFailure():
            return int(ErrorCode.NETWORK_ERROR)
    # UnsafeDeletion
    return int(ErrorCode.IO_ERROR)
