"""Tools infrastructure for duke.

This package provides:
- Artifact store for the working directory layout (folders.py)
- HTTP client and remote fetcher (http.py, browser.py)
- Tool providers, lookup and in-process invocation (finder.py, runner.py)
- Built-in compile and package tools (builtin.py)
- Tool installers and their definitions (installer.py, definitions/)
"""

from duke.tools.browser import Browser, TransferFailure
from duke.tools.builtin import BUILTIN_TOOLS, CompileTool, PackageTool
from duke.tools.finder import ExecutableArchive, ToolFinder, ToolNotFound, ToolProvider
from duke.tools.folders import Folders
from duke.tools.http import HttpClient, HttpError, MockHttpClient, RealHttpClient
from duke.tools.installer import ToolInstaller
from duke.tools.runner import ToolRunner
from duke.tools.workbench import Workbench

__all__ = [
    # Store and fetcher
    "Folders",
    "Browser",
    "TransferFailure",
    # HTTP
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
    # Providers
    "ExecutableArchive",
    "ToolFinder",
    "ToolNotFound",
    "ToolProvider",
    "ToolRunner",
    # Built-ins
    "BUILTIN_TOOLS",
    "CompileTool",
    "PackageTool",
    # Installers
    "ToolInstaller",
    "Workbench",
]
