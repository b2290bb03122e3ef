"""Platform abstraction layer: filesystem and process helpers."""

from .files import (
    UnsafeDeletion,
    create_directories,
    delete_directories,
    is_filesystem_root,
)
from .process import (
    NonZeroExit,
    ProcessRunner,
    forward_lines,
)

__all__ = [
    # files
    "UnsafeDeletion",
    "create_directories",
    "delete_directories",
    "is_filesystem_root",
    # process
    "NonZeroExit",
    "ProcessRunner",
    "forward_lines",
]
