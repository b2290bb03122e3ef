"""Tool installer definitions.

Installers are registered statically, in order, in ``ALL_INSTALLERS``.

Usage:
    from duke.tools.definitions import get_installer

    installer = get_installer("jarviz")
    if installer:
        print(installer.download_url("0.3.0"))
"""

from __future__ import annotations

from duke.tools.definitions.jarviz import JarvizInstaller
from duke.tools.definitions.jreleaser import JReleaserInstaller
from duke.tools.definitions.pomchecker import PomcheckerInstaller
from duke.tools.installer import ToolInstaller

__all__ = [
    # Installer classes
    "JarvizInstaller",
    "JReleaserInstaller",
    "PomcheckerInstaller",
    # Registry
    "ALL_INSTALLERS",
    "get_installer",
]


ALL_INSTALLERS: tuple[ToolInstaller, ...] = (
    JarvizInstaller(),
    JReleaserInstaller(),
    PomcheckerInstaller(),
)

# Lookup by "name" and by "namespace/name"
_INSTALLERS_BY_KEY: dict[str, ToolInstaller] = {
    **{installer.name: installer for installer in ALL_INSTALLERS},
    **{installer.identity: installer for installer in ALL_INSTALLERS},
}


def get_installer(key: str) -> ToolInstaller | None:
    """Get an installer by name (e.g. "jarviz") or identity ("org.kordamp/jarviz")."""
    return _INSTALLERS_BY_KEY.get(key)
