"""Workbench: what installer plugins get to work with."""

from __future__ import annotations

from dataclasses import dataclass

from duke.output.console import ConsoleProtocol
from duke.tools.browser import Browser
from duke.tools.folders import Folders

__all__ = ["Workbench"]


@dataclass(frozen=True, slots=True)
class Workbench:
    """Artifact store and remote fetcher bundled for tool installers.

    Attributes:
        folders: Where installations go
        browser: How remote artifacts are copied
        console: Where progress is reported
    """

    folders: Folders
    browser: Browser
    console: ConsoleProtocol
