"""Services: the operations behind the command line."""

from duke.services.bootstrap import Bootstrap, PipelineError, module_environment
from duke.services.find import find_files, path_matcher
from duke.services.install import UnknownInstaller, install_tool
from duke.services.modules import (
    ModuleRef,
    find_module,
    find_modules,
    module_compilation_units,
)
from duke.services.status import StatusPrinter, describe_version

__all__ = [
    "Bootstrap",
    "ModuleRef",
    "PipelineError",
    "StatusPrinter",
    "UnknownInstaller",
    "describe_version",
    "find_files",
    "find_module",
    "find_modules",
    "install_tool",
    "module_compilation_units",
    "module_environment",
    "path_matcher",
]
