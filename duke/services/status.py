"""Status and version reporting."""

from __future__ import annotations

import platform
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from duke import __version__
from duke.services.modules import (
    RUNNER_MODULE,
    find_module,
    find_modules,
    module_compilation_units,
)

if TYPE_CHECKING:
    from duke.core.settings import Settings
    from duke.output.console import ConsoleProtocol

__all__ = ["StatusPrinter", "describe_version"]


def describe_version(bin_dir: Path) -> str:
    """duke's version, plus the installed runner's when there is one."""
    runner = find_module(bin_dir, RUNNER_MODULE)
    if runner is None:
        return __version__
    return f"{__version__} ({runner.to_name_and_version()})"


class StatusPrinter:
    """Prints what duke knows about itself, the runtime and the working directory."""

    def __init__(self, settings: Settings, console: ConsoleProtocol) -> None:
        self._settings = settings
        self._console = console

    @property
    def bin_dir(self) -> Path:
        return self._settings.root / "bin"

    def print_status(self) -> None:
        self._console.print(f"duke {describe_version(self.bin_dir)}")
        if self._console.verbose:
            self.print_code_source_location()
        self.print_runtime_information()
        self.print_operating_system_information()
        self.print_module_compilation_units()
        self.print_modules_in_bin()

    def print_version(self) -> None:
        self._console.print(describe_version(self.bin_dir))

    def print_code_source_location(self) -> None:
        location = Path(__file__).resolve().parents[1]
        self._console.print(f"Code source location: {location.as_uri()}")

    def print_runtime_information(self) -> None:
        implementation = platform.python_implementation()
        version = platform.python_version()
        home = Path(sys.prefix).resolve().as_uri()
        self._console.print(f"{implementation} {version} (executable: {sys.executable}, home: {home})")

    def print_operating_system_information(self) -> None:
        name = platform.system() or "unknown"
        version = platform.release() or "unknown"
        architecture = platform.machine() or "unknown"
        self._console.print(f"{name} (version: {version}, architecture: {architecture})")

    def print_module_compilation_units(self) -> None:
        units = module_compilation_units(self._settings.root)
        self._console.print(f"Module Compilation Units: {len(units)}")
        for uri in sorted(unit.resolve().as_uri() for unit in units):
            self._console.print(f"  {uri}")

    def print_modules_in_bin(self) -> None:
        modules = find_modules(self.bin_dir)
        location = self.bin_dir.resolve().as_uri()
        self._console.print(f"Modules in {location}: {len(modules)}")
        for module in modules:
            self._console.print(f"  {module.to_name_and_version()}")
