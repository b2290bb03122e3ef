"""Bootstrap pipeline: build or fetch the runner module, then launch it.

Stages run strictly in order and the first failure aborts the run:

1. Runner module. Local sources in ``src/run_duke/main/python`` are always
   rebuilt into ``bin/run_duke@<version>.pyz``; without sources a missing
   runner is downloaded from the project's releases; an installed runner
   without sources is used as is.
2. Project modules. Packages found below the working directory root are
   byte-compiled together into ``bin``.
3. Launch. The runner runs as ``python -m run_duke <args>`` with ``bin``
   and its archives on the module search path.

In dry-run mode every step that would touch the filesystem, the network,
or start a process is only echoed.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping, Sequence
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, TextIO, TypeAlias

from duke.core.result import Err, Ok, Result
from duke.core.version import compute_version
from duke.platform.files import delete_directories
from duke.platform.process import NonZeroExit, ProcessRunner
from duke.services.modules import RUNNER_MODULE, find_module, module_compilation_units
from duke.services.status import StatusPrinter
from duke.tools.browser import Browser, TransferFailure
from duke.tools.builtin import BUILTIN_TOOLS
from duke.tools.finder import ToolFinder, ToolNotFound
from duke.tools.folders import Folders
from duke.tools.runner import ToolRunner

if TYPE_CHECKING:
    from duke.core.settings import Settings
    from duke.output.console import ConsoleProtocol
    from duke.tools.http import HttpClient

__all__ = [
    "Bootstrap",
    "PipelineError",
    "RUNNER_DOWNLOAD",
    "RUNNER_MAIN",
    "module_environment",
]

RUNNER_DOWNLOAD = "https://github.com/sormuras/duke/releases/download"
RUNNER_MAIN = f"{RUNNER_MODULE}.main:main"

PipelineError: TypeAlias = TransferFailure | ToolNotFound | NonZeroExit


def module_environment(bin_dir: Path, environ: Mapping[str, str]) -> dict[str, str]:
    """Environment exposing bin_dir's archives and bin_dir itself to Python.

    Entries already on ``PYTHONPATH`` stay searchable after them.
    """
    directory = bin_dir.absolute()
    archives = sorted(directory.glob("*.pyz")) if directory.is_dir() else []
    entries = [str(p) for p in (*archives, directory)]
    inherited = environ.get("PYTHONPATH")
    if inherited:
        entries.append(inherited)
    env = dict(environ)
    env["PYTHONPATH"] = os.pathsep.join(entries)
    return env


class Bootstrap:
    """Orchestrates the three pipeline stages for one invocation."""

    def __init__(
        self,
        settings: Settings,
        console: ConsoleProtocol,
        *,
        browser: Browser,
        tools: ToolRunner,
        processes: ProcessRunner,
        python: str = sys.executable,
        now: datetime | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            settings: Resolved settings
            console: Progress and debug output
            browser: Fetcher for the runner artifact
            tools: In-process runner for the compile and package tools
            processes: Runner for the launched child process
            python: Interpreter used to launch the runner
            now: Fixed clock for version stamps (tests)
        """
        self._settings = settings
        self._console = console
        self._browser = browser
        self._tools = tools
        self._processes = processes
        self._python = python
        self._now = now
        self._folders = Folders(settings.root)

    @classmethod
    def create(
        cls,
        settings: Settings,
        console: ConsoleProtocol,
        http: HttpClient,
        out: TextIO,
        err: TextIO,
    ) -> Bootstrap:
        """Wire a pipeline with the built-in tools and real processes."""
        return cls(
            settings,
            console,
            browser=Browser(http, console),
            tools=ToolRunner(ToolFinder.of(*BUILTIN_TOOLS), out, err, console),
            processes=ProcessRunner(out, err, console),
        )

    @property
    def folders(self) -> Folders:
        return self._folders

    @property
    def runner_sources(self) -> Path:
        return self._settings.project / "src" / RUNNER_MODULE / "main" / "python"

    def run(self, args: Sequence[str]) -> Result[None, PipelineError]:
        """Run all stages, passing args to the launched runner."""
        result = self.ensure_runner()
        if isinstance(result, Err):
            return result
        result = self.compile_modules()
        if isinstance(result, Err):
            return result
        return self.launch(args)

    # -------------------------------------------------------------------------
    # Stage 1: runner module
    # -------------------------------------------------------------------------

    def ensure_runner(self) -> Result[None, PipelineError]:
        has_sources = self.runner_sources.is_dir()
        installed = find_module(self._folders.bin(), RUNNER_MODULE)
        if installed is not None and not has_sources:
            self._console.debug(f"using installed {installed.to_name_and_version()}")
            return Ok(None)
        if has_sources:
            return self._build_runner()
        return self._download_runner()

    def _build_runner(self) -> Result[None, PipelineError]:
        version = compute_version(self._settings, self._now)
        bin_dir = self._folders.bin()
        self._delete(bin_dir)
        self._delete(self._folders.out())

        classes = self._folders.resolve("out", "run", "classes")
        source_path = self._settings.project / "src" / "*" / "main" / "python"
        result = self._tool(
            "compile",
            f"--module={RUNNER_MODULE}",
            f"--module-source-path={source_path}",
            f"--module-version={version}",
            "-d",
            str(classes),
        )
        if isinstance(result, Err):
            return result

        archive = bin_dir / f"{RUNNER_MODULE}@{self._settings.version}.pyz"
        return self._tool(
            "package",
            "--create",
            f"--file={archive}",
            f"--main-class={RUNNER_MAIN}",
            "-C",
            str(classes),
            RUNNER_MODULE,
        )

    def _download_runner(self) -> Result[None, PipelineError]:
        version = self._settings.version
        filename = f"{RUNNER_MODULE}@{version}.pyz"
        source = f"{RUNNER_DOWNLOAD}/{version}/{filename}"
        target = self._folders.bin() / filename
        if self._settings.flags.dry_run:
            self._console.print(f"dry-run: download {source} to {target}")
            return Ok(None)
        result = self._browser.copy(source, target)
        if isinstance(result, Err):
            return result
        return Ok(None)

    # -------------------------------------------------------------------------
    # Stage 2: project modules
    # -------------------------------------------------------------------------

    def compile_modules(self) -> Result[None, PipelineError]:
        root = self._folders.root
        units = module_compilation_units(root)
        if not units:
            self._console.debug(f"no module compilation units in {root}")
            return Ok(None)

        modules = [unit.parent.name for unit in units]
        source_paths = os.pathsep.join([str(root), str(root / "sub")])
        bin_dir = self._folders.bin()
        return self._tool(
            "compile",
            f"--module={','.join(modules)}",
            f"--module-source-path={source_paths}",
            f"--module-path={bin_dir}",
            "-d",
            str(bin_dir),
        )

    # -------------------------------------------------------------------------
    # Stage 3: launch
    # -------------------------------------------------------------------------

    def launch(self, args: Sequence[str]) -> Result[None, PipelineError]:
        bin_dir = self._folders.bin()
        if self._console.verbose:
            StatusPrinter(self._settings, self._console).print_modules_in_bin()
        if self._settings.flags.dry_run:
            command = " ".join((self._python, "-m", RUNNER_MODULE, *args))
            self._console.print(f"dry-run: {command}")
            return Ok(None)
        env = module_environment(bin_dir, self._settings.environ)
        result = self._processes.run(self._python, "-m", RUNNER_MODULE, *args, env=env)
        if isinstance(result, Err):
            return result
        return Ok(None)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _delete(self, path: Path) -> None:
        if self._settings.flags.dry_run:
            self._console.print(f"dry-run: delete {path}")
            return
        result = delete_directories(path)
        match result:
            case Err(error):
                # refused: a filesystem root is treated as already clean
                self._console.debug(str(error))
            case Ok(True):
                self._console.debug(f"delete directory tree {path}")
            case Ok(_):
                pass

    def _tool(self, name: str, *args: str) -> Result[None, PipelineError]:
        if self._settings.flags.dry_run:
            self._console.print(f"dry-run: {' '.join((name, *args))}")
            return Ok(None)
        return self._tools.run(name, *args)
