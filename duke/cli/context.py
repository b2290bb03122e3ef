from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

import typer

from duke.core.errors import ErrorCode
from duke.core.result import Err
from duke.core.settings import PROPERTIES_FILE, Settings, load_properties, parse_property
from duke.output.console import ConsoleProtocol, RichConsole
from duke.output.errors import print_error
from duke.tools.http import HttpClient, RealHttpClient


@dataclass(frozen=True, slots=True)
class CLIContext:
    settings: Settings
    console: ConsoleProtocol
    http: HttpClient
    out: TextIO
    err: TextIO


def _load_defines(defines: list[str], console: ConsoleProtocol) -> dict[str, str]:
    properties: dict[str, str] = {}
    path = Path(PROPERTIES_FILE)
    if path.is_file():
        result = load_properties(path)
        if isinstance(result, Err):
            print_error(result.error, console)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        properties.update(result.value)

    for define in defines:
        try:
            name, value = parse_property(define)
        except ValueError as e:
            console.error(f"invalid -D: {e}")
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        properties[name] = value
    return properties


def build_context(defines: list[str] | None = None) -> CLIContext:
    properties = _load_defines(defines or [], RichConsole(stderr=True))
    settings = Settings.from_system(project=Path(), properties=properties)
    return CLIContext(
        settings=settings,
        console=RichConsole(verbose=settings.flags.verbose),
        http=RealHttpClient(),
        out=sys.stdout,
        err=sys.stderr,
    )
