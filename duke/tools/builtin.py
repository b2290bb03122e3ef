"""Built-in tool providers used to assemble modules.

- ``compile``: byte-compiles module packages into a destination directory,
  writing sourceless ``.pyc`` files next to each other (legacy layout) so the
  destination is importable without the sources.
- ``package``: writes an executable zip application from a directory tree,
  optionally with a ``__main__.py`` calling an entry point.

Both take command-line style arguments, like their command-line
counterparts, and report problems on the error sink with an exit code.
"""

from __future__ import annotations

import argparse
import os
import py_compile
import shutil
import stat
import zipfile
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn, TextIO

from duke.core.version import ModuleVersion

__all__ = ["CompileTool", "PackageTool", "BUILTIN_TOOLS", "VERSION_FILE"]

# File inside a compiled module holding its version
VERSION_FILE = "VERSION"

_SHEBANG = b"#!/usr/bin/env python3\n"

_MAIN_TEMPLATE = """\
# -*- coding: utf-8 -*-
import {module}
{module}.{function}()
"""


class _UsageError(Exception):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting the interpreter."""

    def error(self, message: str) -> NoReturn:
        raise _UsageError(f"{self.prog}: {message}")


class CompileTool:
    """Byte-compiles module packages.

    Arguments:
        --module=a,b                  modules to compile
        --module-source-path=P[:Q]    where module packages live; an entry with
                                      ``*`` is a pattern (``*`` = module name),
                                      otherwise the package is ``<entry>/<module>``
        --module-path=P[:Q]           already compiled modules; accepted for
                                      symmetry, byte compilation does not link
        --module-version=V            stamped into ``<module>/VERSION``
        -d DIR                        destination directory
    """

    name = "compile"

    def _parser(self) -> _ArgumentParser:
        parser = _ArgumentParser(prog=self.name, add_help=False)
        parser.add_argument("--module", required=True)
        parser.add_argument("--module-source-path", required=True)
        parser.add_argument("--module-path", default="")
        parser.add_argument("--module-version")
        parser.add_argument("-d", dest="destination", required=True)
        return parser

    def run(self, out: TextIO, err: TextIO, args: Sequence[str]) -> int:
        try:
            options = self._parser().parse_args(list(args))
            version = (
                ModuleVersion.parse(options.module_version) if options.module_version else None
            )
        except (_UsageError, ValueError) as e:
            err.write(f"{e}\n")
            return 2

        entries = [e for e in options.module_source_path.split(os.pathsep) if e]
        destination = Path(options.destination)
        modules = [m.strip() for m in options.module.split(",") if m.strip()]

        for module in modules:
            package = self._locate(module, entries)
            if package is None:
                err.write(f"{self.name}: module not found: {module}\n")
                return 2
            try:
                count = self._compile_package(module, package, destination / module)
            except py_compile.PyCompileError as e:
                err.write(f"{e.msg}\n")
                return 1
            except OSError as e:
                err.write(f"{self.name}: {e}\n")
                return 1
            if version is not None:
                (destination / module / VERSION_FILE).write_text(f"{version}\n", encoding="utf-8")
            out.write(f"compiled {count} file(s) of module {module}\n")
        return 0

    @staticmethod
    def _locate(module: str, entries: Sequence[str]) -> Path | None:
        for entry in entries:
            candidate = Path(entry.replace("*", module)) if "*" in entry else Path(entry, module)
            if candidate.is_dir():
                return candidate
        return None

    @staticmethod
    def _compile_package(module: str, package: Path, target: Path) -> int:
        count = 0
        for source in sorted(package.rglob("*")):
            rel = source.relative_to(package)
            if "__pycache__" in rel.parts or not source.is_file():
                continue
            dest = target / rel
            dest.parent.mkdir(parents=True, exist_ok=True)
            if source.suffix == ".py":
                py_compile.compile(
                    str(source),
                    cfile=str(dest.with_suffix(".pyc")),
                    dfile=str(Path(module, rel)),
                    doraise=True,
                )
                count += 1
            else:
                shutil.copyfile(source, dest)
        return count


class PackageTool:
    """Creates executable zip applications.

    Arguments:
        --create                      required, the only supported mode
        --file=F                      archive to write
        --main-class=pkg.mod:func     entry point for ``__main__.py``
        -C DIR PATH                   add PATH (relative to DIR); repeatable
    """

    name = "package"

    def _parser(self) -> _ArgumentParser:
        parser = _ArgumentParser(prog=self.name, add_help=False)
        parser.add_argument("--create", action="store_true", required=True)
        parser.add_argument("--file", required=True)
        parser.add_argument("--main-class")
        parser.add_argument("-C", dest="contents", nargs=2, action="append", default=[])
        return parser

    def run(self, out: TextIO, err: TextIO, args: Sequence[str]) -> int:
        try:
            options = self._parser().parse_args(list(args))
            main = self._main_source(options.main_class) if options.main_class else None
        except _UsageError as e:
            err.write(f"{e}\n")
            return 2

        archive = Path(options.file)
        try:
            archive.parent.mkdir(parents=True, exist_ok=True)
            with open(archive, "wb") as fd:
                fd.write(_SHEBANG)
                with zipfile.ZipFile(fd, "w", compression=zipfile.ZIP_DEFLATED) as zf:
                    for directory, path in options.contents:
                        self._add(zf, Path(directory), Path(path))
                    if main is not None:
                        zf.writestr("__main__.py", main)
            mode = archive.stat().st_mode
            archive.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        except OSError as e:
            err.write(f"{self.name}: {e}\n")
            return 1

        out.write(f"created {archive}\n")
        return 0

    def _main_source(self, entry: str) -> str:
        module, sep, function = entry.partition(":")
        if not sep or not module or not function:
            raise _UsageError(f"{self.name}: main class must be module:function, got {entry!r}")
        return _MAIN_TEMPLATE.format(module=module, function=function)

    @staticmethod
    def _add(zf: zipfile.ZipFile, base: Path, path: Path) -> None:
        start = base / path
        if start.is_file():
            zf.write(start, start.relative_to(base).as_posix())
            return
        if not start.is_dir():
            raise FileNotFoundError(f"no such file or directory: {start}")
        for file in sorted(start.rglob("*")):
            if file.is_file():
                zf.write(file, file.relative_to(base).as_posix())


# Tools available to the build pipeline without any installation
BUILTIN_TOOLS = (CompileTool(), PackageTool())
