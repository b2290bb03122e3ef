"""Jarviz tool installer.

Jarviz inspects JAR files (manifests, packages, bytecode versions).

GitHub: https://github.com/kordamp/jarviz
"""

from __future__ import annotations

from duke.tools.installer import ToolInstaller

__all__ = ["JarvizInstaller"]


class JarvizInstaller(ToolInstaller):
    namespace = "org.kordamp"
    name = "jarviz"
    repo = "kordamp/jarviz"

    def asset_name(self, version: str) -> str:
        return f"jarviz-tool-provider-{version}.jar"
