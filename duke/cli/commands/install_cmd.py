"""install: download an external tool into the working directory."""

from __future__ import annotations

from duke.cli.commands._helpers import exit_on_error, exit_with_code
from duke.cli.context import CLIContext
from duke.core.errors import ErrorCode
from duke.services.install import install_tool
from duke.tools.browser import Browser
from duke.tools.definitions import ALL_INSTALLERS
from duke.tools.folders import Folders
from duke.tools.workbench import Workbench


def install(ctx: CLIContext, args: list[str]) -> None:
    """``install <installer> [version]``; without arguments, list the installers."""
    if not args:
        ctx.console.print("Usage: duke install <installer> [<version>]")
        ctx.console.print("")
        ctx.console.print("Installers:")
        for installer in ALL_INSTALLERS:
            ctx.console.print(f"  {installer.name:<12} {installer.identity}")
        exit_with_code(int(ErrorCode.USER_ERROR))

    key, *rest = args
    workbench = Workbench(
        folders=Folders(ctx.settings.root),
        browser=Browser(ctx.http, ctx.console),
        console=ctx.console,
    )
    result = install_tool(
        workbench,
        key,
        rest[0] if rest else None,
        dry_run=ctx.settings.flags.dry_run,
    )
    exit_on_error(result, ctx)
