"""run: bootstrap the runner module and hand it the arguments."""

from __future__ import annotations

from duke.cli.commands._helpers import exit_on_error
from duke.cli.context import CLIContext
from duke.services.bootstrap import Bootstrap


def run(ctx: CLIContext, args: list[str]) -> None:
    bootstrap = Bootstrap.create(ctx.settings, ctx.console, ctx.http, ctx.out, ctx.err)
    exit_on_error(bootstrap.run(args), ctx)
