"""Module discovery.

Two views on modules:
- compilation units: project packages below the working directory root,
  ``<root>/<module>/__init__.py`` or ``<root>/sub/<module>/__init__.py``
- installed modules: what ``bin`` holds, either zip applications named
  ``<module>@<version>.pyz`` or compiled package directories
"""

from __future__ import annotations

import fnmatch
import os
import zipfile
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from duke.tools.builtin import VERSION_FILE

__all__ = [
    "MODULE_DESCRIPTOR",
    "ModuleRef",
    "RUNNER_MODULE",
    "find_module",
    "find_modules",
    "find_paths",
    "module_compilation_units",
]

MODULE_DESCRIPTOR = "__init__.py"

# The project's own executable module, built from sources or downloaded
RUNNER_MODULE = "run_duke"

_UNIT_PATTERNS = (f"*/{MODULE_DESCRIPTOR}", f"sub/*/{MODULE_DESCRIPTOR}")


@dataclass(frozen=True, slots=True)
class ModuleRef:
    """An installed module.

    Attributes:
        name: Module (package) name
        version: Version if known
        location: Archive file or package directory
    """

    name: str
    version: str | None
    location: Path

    def to_name_and_version(self) -> str:
        return f"{self.name}@{self.version}" if self.version else self.name


def find_paths(start: Path, max_depth: int, matcher: Callable[[Path], bool]) -> list[Path]:
    """Walk start up to max_depth levels and return matching paths, sorted.

    matcher receives each path relative to start; returned paths are
    start-prefixed.
    """
    if not start.exists():
        return []
    found: list[Path] = []
    base_depth = len(start.parts)
    for dirpath, dirnames, filenames in os.walk(start):
        current = Path(dirpath)
        depth = len(current.parts) - base_depth
        if depth >= max_depth:
            dirnames.clear()
            continue
        names = (*dirnames, *filenames)
        if depth + 1 >= max_depth:
            dirnames.clear()
        for name in names:
            path = current / name
            if matcher(path.relative_to(start)):
                found.append(path)
    return sorted(found)


def _is_unit(path: Path) -> bool:
    rel = path.as_posix()
    return any(
        fnmatch.fnmatchcase(rel, pattern) and len(path.parts) == pattern.count("/") + 1
        for pattern in _UNIT_PATTERNS
    )


def module_compilation_units(root: Path) -> list[Path]:
    """Module descriptors below root, sorted by path; empty if root is absent."""
    return find_paths(root, 3, _is_unit)


def _archive_version(archive: Path, module: str) -> str | None:
    try:
        with zipfile.ZipFile(archive) as zf:
            return zf.read(f"{module}/{VERSION_FILE}").decode("utf-8").strip() or None
    except (KeyError, OSError, zipfile.BadZipFile, UnicodeDecodeError):
        return None


def _directory_version(directory: Path) -> str | None:
    try:
        return (directory / VERSION_FILE).read_text(encoding="utf-8").strip() or None
    except (OSError, UnicodeDecodeError):
        return None


def find_modules(directory: Path) -> list[ModuleRef]:
    """All modules installed in directory, sorted by name."""
    if not directory.is_dir():
        return []
    modules: list[ModuleRef] = []
    for entry in sorted(directory.iterdir()):
        if entry.is_file() and entry.suffix == ".pyz":
            name, _, file_version = entry.stem.partition("@")
            version = _archive_version(entry, name) or file_version or None
            modules.append(ModuleRef(name, version, entry))
        elif entry.is_dir() and any(
            (entry / init).is_file() for init in ("__init__.pyc", "__init__.py")
        ):
            modules.append(ModuleRef(entry.name, _directory_version(entry), entry))
    return sorted(modules, key=lambda m: (m.name, str(m.location)))


def find_module(directory: Path, name: str) -> ModuleRef | None:
    """The first installed module called name, or None."""
    for module in find_modules(directory):
        if module.name == name:
            return module
    return None
