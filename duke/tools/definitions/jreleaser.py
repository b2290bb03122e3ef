"""JReleaser tool installer.

JReleaser automates releases of Java and non-Java projects. Its tool
provider jar is published with every release, and a rolling
"early-access" release tracks the main branch.

GitHub: https://github.com/jreleaser/jreleaser
"""

from __future__ import annotations

from duke.tools.installer import ToolInstaller

__all__ = ["JReleaserInstaller"]


class JReleaserInstaller(ToolInstaller):
    """JReleaser - default tag rule, ``jreleaser-tool-provider-<version>.jar``."""

    namespace = "org.jreleaser"
    name = "jreleaser"
    repo = "jreleaser/jreleaser"

    def asset_name(self, version: str) -> str:
        return f"jreleaser-tool-provider-{version}.jar"
