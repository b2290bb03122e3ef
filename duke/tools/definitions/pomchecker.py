"""Pomchecker tool installer.

Pomchecker validates POM files against Maven Central rules.

GitHub: https://github.com/kordamp/pomchecker
"""

from __future__ import annotations

from duke.core.settings import EARLY_ACCESS
from duke.tools.installer import ToolInstaller

__all__ = ["PomcheckerInstaller"]


class PomcheckerInstaller(ToolInstaller):
    """Pomchecker - snapshots live in the early-access release.

    Unlike the other installers the asset is named ``toolprovider`` (one
    word), and any version containing "SNAPSHOT" maps to the
    "early-access" tag.
    """

    namespace = "org.kordamp"
    name = "pomchecker"
    repo = "kordamp/pomchecker"

    def tag(self, version: str) -> str:
        return EARLY_ACCESS if "SNAPSHOT" in version else f"v{version}"

    def asset_name(self, version: str) -> str:
        return f"pomchecker-toolprovider-{version}.jar"
