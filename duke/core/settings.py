"""Typed settings resolved from properties and environment variables.

Settings are built exactly once at program entry and handed to every
component that needs them. A setting is looked up as a *property* first
(``-D name=value`` on the command line, or a key in ``duke.toml``) and then
as an environment variable ``DUKE_<NAME>``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result

__all__ = [
    "ConfigError",
    "DEFAULT_DIRECTORY",
    "EARLY_ACCESS",
    "ENV_PREFIX",
    "Flags",
    "PROPERTIES_FILE",
    "Settings",
    "env_key",
    "load_properties",
    "parse_bool",
    "parse_property",
]

ENV_PREFIX = "DUKE_"
DEFAULT_DIRECTORY = ".duke"
PROPERTIES_FILE = "duke.toml"

# Version used for artifact file names when nothing else is configured
EARLY_ACCESS = "early-access"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when properties cannot be loaded or parsed."""

    message: str
    path: Path | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class Flags:
    """Boolean switches."""

    verbose: bool = False
    dry_run: bool = False


def _empty() -> dict[str, str]:
    return {}


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved settings for one invocation.

    Attributes:
        flags: Boolean switches (verbose, dry-run)
        project: Project directory; runner sources live below ``src/``
        root: Working directory holding ``bin``, ``out`` and ``tool``
        properties: Property values, keyed by setting name
        environ: Environment variables
    """

    flags: Flags = field(default_factory=Flags)
    project: Path = field(default_factory=Path)
    root: Path = field(default_factory=lambda: Path(DEFAULT_DIRECTORY))
    properties: Mapping[str, str] = field(default_factory=_empty)
    environ: Mapping[str, str] = field(default_factory=_empty)

    def get_environment(self, name: str, default: str) -> str:
        """Look up ``DUKE_<NAME>`` in the environment."""
        return self.environ.get(env_key(name), default)

    def get_property(self, name: str, default: str) -> str:
        """Look up a property, falling back to the environment."""
        value = self.properties.get(name)
        if value is not None:
            return value
        return self.get_environment(name, default)

    @property
    def version(self) -> str:
        """Version used for runner artifact file names."""
        return self.get_environment("VERSION", EARLY_ACCESS)

    @classmethod
    def from_system(
        cls,
        *,
        project: Path | None = None,
        properties: Mapping[str, str] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> Settings:
        """Resolve settings from properties and the process environment."""
        project = project if project is not None else Path()
        props: Mapping[str, str] = dict(properties) if properties else {}
        env: Mapping[str, str] = dict(os.environ if environ is None else environ)

        def lookup(name: str, default: str) -> str:
            value = props.get(name)
            if value is not None:
                return value
            return env.get(env_key(name), default)

        flags = Flags(
            verbose=parse_bool(lookup("verbose", "false")),
            dry_run=parse_bool(lookup("dry-run", "false")),
        )
        directory = Path(lookup("directory", DEFAULT_DIRECTORY))
        root = directory if directory.is_absolute() else project / directory
        return cls(flags=flags, project=project, root=root, properties=props, environ=env)


def env_key(name: str) -> str:
    """Environment variable name for a setting, e.g. ``dry-run`` -> ``DUKE_DRY_RUN``."""
    return ENV_PREFIX + name.upper().replace("-", "_").replace(".", "_")


def parse_bool(text: str) -> bool:
    """Only ``true`` (any case) is true."""
    return text.strip().lower() == "true"


def parse_property(text: str) -> tuple[str, str]:
    """Split a ``name=value`` definition.

    Raises:
        ValueError: If there is no ``=`` or the name is empty.
    """
    name, sep, value = text.partition("=")
    name = name.strip()
    if not sep or not name:
        raise ValueError(f"Expected name=value, got: {text!r}")
    return name, value.strip()


def _flatten(table: Mapping[str, object], prefix: str, out: dict[str, str]) -> None:
    for key, value in table.items():
        name = f"{prefix}{key}"
        match value:
            case bool():
                out[name] = "true" if value else "false"
            case str() | int() | float():
                out[name] = str(value)
            case dict():
                _flatten(value, f"{name}.", out)  # pyright: ignore[reportUnknownArgumentType]
            case _:
                # arrays and dates have no property representation
                continue


def load_properties(path: Path) -> Result[dict[str, str], ConfigError]:
    """Load properties from a TOML file.

    Nested tables become dotted names, so ``[build.version] number = "1"``
    yields the property ``build.version.number``.

    Returns:
        Ok(properties) on success, Err(ConfigError) on failure
    """
    import tomllib

    try:
        data = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Properties file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading properties: {e}", path=path))

    out: dict[str, str] = {}
    _flatten(data, "", out)
    return Ok(out)
