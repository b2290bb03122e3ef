"""find: list files below the current directory."""

from __future__ import annotations

from pathlib import Path

from duke.cli.commands._helpers import exit_with_code
from duke.cli.context import CLIContext
from duke.core.errors import ErrorCode
from duke.services.find import DEFAULT_PATTERN, find_files


def find(ctx: CLIContext, args: list[str]) -> None:
    """Print paths matching ``glob:<pattern>`` or ``regex:<pattern>``."""
    pattern = args[0] if args else DEFAULT_PATTERN
    try:
        paths = find_files(Path(), pattern)
    except ValueError as e:
        ctx.console.error(str(e))
        exit_with_code(int(ErrorCode.USER_ERROR))
    for path in paths:
        ctx.console.print(str(path))
