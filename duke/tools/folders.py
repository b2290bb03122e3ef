"""Artifact store: the working directory layout.

    <root>/bin/                          installed and built modules
    <root>/out/                          transient compiler output
    <root>/tool/<namespace>/<name>@<v>/  tool installations

``bin`` and ``out`` are regenerable. One invocation at a time may write to
a given root; nothing here locks.
"""

from __future__ import annotations

from pathlib import Path

from duke.platform.files import create_directories

__all__ = ["Folders"]


class Folders:
    """Maps identities and fixed locations to paths below a root directory."""

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, first: str, *more: str) -> Path:
        """Path below the root; nothing is created."""
        return self._root.joinpath(first, *more)

    def bin(self) -> Path:
        return self.resolve("bin")

    def out(self) -> Path:
        return self.resolve("out")

    def tool(self, namespace: str, name: str) -> Path:
        """Installation directory for a tool, created on demand.

        Args:
            namespace: Tool namespace (e.g. "org.kordamp")
            name: Discriminator, usually ``<name>@<version>``

        Returns:
            ``<root>/tool/<namespace>/<name>``; the same for equal arguments
        """
        return create_directories(self.resolve("tool", namespace, name))

    def __repr__(self) -> str:
        return f"Folders({self._root!r})"
