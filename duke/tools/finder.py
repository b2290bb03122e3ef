"""Tool providers and lookup views over them.

A tool provider is anything with a ``name`` and a ``run(out, err, args)``
method returning an exit code. A ``ToolFinder`` looks providers up by name.
``ToolFinder.of_toolbox`` scans an installation folder and exposes each
executable archive in it (``*.jar``, ``*.pyz``) as a provider that launches
the archive as a child process.
"""

from __future__ import annotations

import re
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, TextIO, runtime_checkable

from duke.core.result import Err
from duke.platform.process import ProcessRunner

__all__ = [
    "ARCHIVE_SUFFIXES",
    "ExecutableArchive",
    "ToolFinder",
    "ToolNotFound",
    "ToolProvider",
    "tool_name_of",
]

ARCHIVE_SUFFIXES = (".jar", ".pyz")

# Leading identifier of an archive file name: "jarviz-tool-provider-1.0.jar" -> "jarviz"
_TOOL_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*")


@dataclass(frozen=True, slots=True)
class ToolNotFound:
    """No provider with the requested name."""

    name: str

    def __str__(self) -> str:
        return f"Tool? {self.name}"


@runtime_checkable
class ToolProvider(Protocol):
    """Something runnable by name, reporting an exit code."""

    @property
    def name(self) -> str: ...

    def run(self, out: TextIO, err: TextIO, args: Sequence[str]) -> int:
        """Run the tool synchronously.

        Args:
            out: Sink for normal output
            err: Sink for error output
            args: Tool arguments

        Returns:
            Exit code, 0 on success
        """
        ...


def tool_name_of(archive: Path) -> str:
    """Derive a tool name from an archive file name."""
    m = _TOOL_NAME_RE.match(archive.name)
    return m.group(0) if m else archive.stem


@dataclass(frozen=True, slots=True)
class ExecutableArchive:
    """An installed archive, launched in a child process.

    Java archives run with ``java -jar``, Python zip applications with the
    current interpreter.
    """

    name: str
    path: Path

    def command(self) -> list[str]:
        if self.path.suffix == ".jar":
            return ["java", "-jar", str(self.path)]
        return [sys.executable, str(self.path)]

    def run(self, out: TextIO, err: TextIO, args: Sequence[str]) -> int:
        executable, *prefix = self.command()
        result = ProcessRunner(out=out, err=err).run(executable, *prefix, *args)
        if isinstance(result, Err):
            if result.error.detail:
                err.write(f"{result.error.detail}\n")
            return result.error.code
        return 0


class ToolFinder:
    """Lookup-by-name view over an ordered collection of providers.

    The first provider with a matching name wins.
    """

    def __init__(self, providers: Iterable[ToolProvider] = ()) -> None:
        self._providers = tuple(providers)

    @classmethod
    def of(cls, *providers: ToolProvider) -> ToolFinder:
        return cls(providers)

    @classmethod
    def of_toolbox(cls, folder: Path) -> ToolFinder:
        """Scan folder (not recursively) for executable archives."""
        if not folder.is_dir():
            return cls()
        archives = sorted(
            p for p in folder.iterdir() if p.is_file() and p.suffix in ARCHIVE_SUFFIXES
        )
        return cls(ExecutableArchive(tool_name_of(p), p) for p in archives)

    def find_all(self) -> tuple[ToolProvider, ...]:
        return self._providers

    def find(self, name: str) -> ToolProvider | None:
        for provider in self._providers:
            if provider.name == name:
                return provider
        return None

    def names(self) -> list[str]:
        return [provider.name for provider in self._providers]

    def __len__(self) -> int:
        return len(self._providers)
