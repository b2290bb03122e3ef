"""Shared helpers for operation handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer

from duke.core.result import Err, Result
from duke.output.errors import DukeError, error_exit_code, print_error

if TYPE_CHECKING:
    from duke.cli.context import CLIContext

T = TypeVar("T")


def exit_on_error(result: Result[T, DukeError], ctx: CLIContext) -> None:
    """Print the error and exit with its code if result is Err, otherwise return."""
    if isinstance(result, Err):
        print_error(result.error, ctx.console)
        raise typer.Exit(code=error_exit_code(result.error))


def exit_with_code(code: int) -> NoReturn:
    raise typer.Exit(code=code)
