"""status and version: describe duke and the working directory."""

from __future__ import annotations

from duke.cli.context import CLIContext
from duke.services.status import StatusPrinter


def status(ctx: CLIContext) -> None:
    StatusPrinter(ctx.settings, ctx.console).print_status()


def version(ctx: CLIContext) -> None:
    StatusPrinter(ctx.settings, ctx.console).print_version()
