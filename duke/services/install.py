"""Install external tools through the registered installers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from duke.core.result import Err, Ok, Result
from duke.core.settings import EARLY_ACCESS
from duke.tools.definitions import ALL_INSTALLERS, get_installer
from duke.tools.finder import ToolFinder

if TYPE_CHECKING:
    from duke.tools.browser import TransferFailure
    from duke.tools.workbench import Workbench

__all__ = ["UnknownInstaller", "install_tool"]


@dataclass(frozen=True, slots=True)
class UnknownInstaller:
    """No installer is registered under the requested key."""

    key: str
    available: tuple[str, ...] = ()

    def __str__(self) -> str:
        return f"Unknown installer: {self.key}"


def install_tool(
    workbench: Workbench,
    key: str,
    version: str | None = None,
    *,
    dry_run: bool = False,
) -> Result[ToolFinder, UnknownInstaller | TransferFailure]:
    """Install the tool registered under key and list what it provides."""
    installer = get_installer(key)
    if installer is None:
        return Err(UnknownInstaller(key, tuple(i.identity for i in ALL_INSTALLERS)))

    version = version or EARLY_ACCESS
    if dry_run:
        workbench.console.print(f"dry-run: install {installer.identity}@{version}")
        workbench.console.print(f"dry-run: download {installer.download_url(version)}")
        return Ok(ToolFinder())

    result = installer.install(workbench, version)
    if isinstance(result, Err):
        return result
    finder = result.value
    workbench.console.success(f"{installer.identity}@{version}")
    for name in finder.names():
        workbench.console.print(f"  {name}")
    return Ok(finder)
