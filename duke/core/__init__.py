"""Core domain types: results, settings, versions, exit codes."""

from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok
from .settings import ConfigError, Flags, Settings, load_properties
from .version import ModuleVersion, compute_version

__all__ = [
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
    # settings
    "ConfigError",
    "Flags",
    "Settings",
    "load_properties",
    # version
    "ModuleVersion",
    "compute_version",
]
