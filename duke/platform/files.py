"""Filesystem helpers for the regenerable parts of the folder layout."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from duke.core.result import Err, Ok, Result

__all__ = ["UnsafeDeletion", "create_directories", "delete_directories", "is_filesystem_root"]


@dataclass(frozen=True, slots=True)
class UnsafeDeletion:
    """Refusal to delete a filesystem root."""

    path: Path

    def __str__(self) -> str:
        return f"deletion of root directory?! {self.path}"


def create_directories(path: Path) -> Path:
    """Create path and all missing parents, returning path."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def is_filesystem_root(path: Path) -> bool:
    """True if the normalized absolute path is a root (``/``, ``C:\\``)."""
    start = Path(os.path.normpath(path.absolute()))
    return start == Path(start.anchor)


def delete_directories(path: Path) -> Result[bool, UnsafeDeletion]:
    """Delete a directory tree, deepest entries first.

    A missing path is a no-op. A filesystem root is never touched.

    Returns:
        Ok(True) if something was deleted, Ok(False) if path did not exist,
        Err(UnsafeDeletion) if path is a filesystem root
    """
    start = Path(os.path.normpath(path.absolute()))
    if is_filesystem_root(start):
        return Err(UnsafeDeletion(path))
    if not start.exists() and not start.is_symlink():
        return Ok(False)
    if start.is_file() or start.is_symlink():
        start.unlink()
        return Ok(True)

    for dirpath, dirnames, filenames in os.walk(start, topdown=False):
        current = Path(dirpath)
        for name in filenames:
            (current / name).unlink(missing_ok=True)
        for name in dirnames:
            child = current / name
            if child.is_symlink():
                child.unlink()
            else:
                child.rmdir()
    start.rmdir()
    return Ok(True)
