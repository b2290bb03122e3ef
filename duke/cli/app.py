from __future__ import annotations

import typer

from duke.cli.commands._helpers import exit_with_code
from duke.cli.commands.find_cmd import find
from duke.cli.commands.install_cmd import install
from duke.cli.commands.run_cmd import run
from duke.cli.commands.status import status, version
from duke.cli.context import CLIContext, build_context
from duke.core.errors import ErrorCode

USAGE = """\
Usage: duke [-D <name>=<value>]... <operation> [<arguments>]

Supported operations include:
  find      Find files matching a glob or regex pattern
  help      Show more helpful information
  install   Install an external tool into the working directory
  run       Run a sequence of tools with their arguments
  status    Show the working directory status
  version   Show version information
"""

HELP = """\
Usage: duke [-D <name>=<value>]... <operation> [<arguments>]

Operations:
  find [<pattern>]               Print files below the current directory;
                                 glob:<pattern> (default glob:**/*) or regex:<pattern>
  help, ?, -h, --help            Show this help
  install, ! <name> [<version>]  Install jarviz, jreleaser or pomchecker
  run, + [<arguments>]           Build or fetch the runner module, compile the
                                 project modules, then launch the runner
  status, ~                      Show the working directory status
  version, -v, --version         Show version information

Properties (-D name=value, duke.toml, or environment variable DUKE_<NAME>):
  verbose                        Print debug output (true/false)
  dry-run                        Echo steps instead of performing them (true/false)
  directory                      Working directory root (default .duke)
  build.version.number           Version number of the built runner module
  build.version.pre-release      Pre-release label of the built runner module
"""

app = typer.Typer(add_completion=False)


def _print_usage(ctx: CLIContext) -> None:
    ctx.console.print(USAGE.rstrip("\n"))
    if ctx.console.verbose:
        ctx.console.newline()
        status(ctx)


def _dispatch(ctx: CLIContext, operation: str, args: list[str]) -> None:
    match operation:
        case "find":
            find(ctx, args)
        case "help" | "?" | "-h" | "--help":
            ctx.console.print(HELP.rstrip("\n"))
        case "install" | "!":
            install(ctx, args)
        case "run" | "+":
            run(ctx, args)
        case "status" | "~":
            status(ctx)
        case "version" | "-v" | "--version":
            version(ctx)
        case _:
            typer.echo(f"Operation `{operation}` is not supported.", err=True)


@app.command(
    add_help_option=False,
    context_settings={
        "allow_extra_args": True,
        "allow_interspersed_args": False,
        "ignore_unknown_options": True,
    },
)
def duke(
    operation: str | None = typer.Argument(None, show_default=False),
    args: list[str] | None = typer.Argument(None, show_default=False),
    defines: list[str] | None = typer.Option(
        None,
        "-D",
        "--define",
        help="Set a property, e.g. -D verbose=true",
    ),
) -> None:
    """duke: build or fetch the runner module and launch it."""
    ctx = build_context(defines)
    ctx.console.debug(f"{ctx.settings.flags}, directory={ctx.settings.root}")
    if operation is None:
        _print_usage(ctx)
        return
    try:
        _dispatch(ctx, operation, list(args or []))
    except OSError as e:
        ctx.console.error(str(e))
        exit_with_code(int(ErrorCode.IO_ERROR))


def main() -> None:
    app()
