"""Base class for tool installers fetching GitHub release assets.

Each installer knows one external tool: its namespace and name, the GitHub
repository it is released from, and how a requested version maps to a
release tag and an asset file name. Installing downloads the asset to

    <root>/tool/<namespace>/<name>@<version>/<asset>

and returns a ``ToolFinder`` over that folder.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from duke.core.result import Err, Ok, Result
from duke.core.settings import EARLY_ACCESS
from duke.tools.finder import ToolFinder

if TYPE_CHECKING:
    from duke.tools.browser import TransferFailure
    from duke.tools.workbench import Workbench

__all__ = ["ToolInstaller"]


class ToolInstaller(ABC):
    """Installs one external tool from its GitHub releases.

    Subclasses must define:
    - namespace: Tool namespace (e.g., "org.kordamp")
    - name: Tool name (e.g., "jarviz")
    - repo: GitHub repository (e.g., "kordamp/jarviz")
    - asset_name(): Asset filename for a version

    The default tag rule keeps the "early-access" rolling release as is and
    prefixes any other version with "v".

    Example:
        class JarvizInstaller(ToolInstaller):
            namespace = "org.kordamp"
            name = "jarviz"
            repo = "kordamp/jarviz"

            def asset_name(self, version: str) -> str:
                return f"jarviz-tool-provider-{version}.jar"
    """

    namespace: str
    name: str
    repo: str

    @property
    def identity(self) -> str:
        """``namespace/name``, unique across installers."""
        return f"{self.namespace}/{self.name}"

    def releases(self) -> str:
        """Base URL of the release downloads."""
        return f"https://github.com/{self.repo}/releases/download"

    def tag(self, version: str) -> str:
        """Release tag for version."""
        return version if version == EARLY_ACCESS else f"v{version}"

    @abstractmethod
    def asset_name(self, version: str) -> str:
        """Asset filename for version (the version is embedded as is)."""
        ...

    def download_url(self, version: str) -> str:
        return f"{self.releases()}/{self.tag(version)}/{self.asset_name(version)}"

    def install(self, workbench: Workbench, version: str) -> Result[ToolFinder, TransferFailure]:
        """Download the asset for version and expose the installation.

        An already downloaded asset is reused. A failed download is reported
        as is: no other tag is tried and nothing is retried.

        Returns:
            Ok with a ToolFinder over the installation folder, or
            Err with the TransferFailure
        """
        folder = workbench.folders.tool(self.namespace, f"{self.name}@{version}")
        target = folder / self.asset_name(version)
        if target.exists():
            workbench.console.debug(f"{self.identity}@{version} already installed in {folder}")
        else:
            result = workbench.browser.copy(self.download_url(version), target)
            if isinstance(result, Err):
                return result
        return Ok(ToolFinder.of_toolbox(folder))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.namespace!r}, {self.name!r})"
