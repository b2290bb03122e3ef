"""Module versions for locally built runner archives.

A module version has three parts: ``number[-pre_release]+build``. The build
part is the short commit SHA when running in CI, otherwise the current UTC
instant truncated to seconds.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .settings import Settings

__all__ = ["ModuleVersion", "build_metadata", "compute_version"]

_VERSION_RE = re.compile(r"^(\d[^-+]*)(?:-([^+]*))?(?:\+(.+))?$")


@dataclass(frozen=True, slots=True)
class ModuleVersion:
    """Version stamped into a locally built module.

    Attributes:
        number: Release number, must start with a digit (e.g. "0", "1.2")
        pre_release: Pre-release label, empty for none (e.g. "ea")
        build: Build metadata (short SHA or ISO instant)
    """

    number: str
    pre_release: str = ""
    build: str = ""

    def __post_init__(self) -> None:
        if not self.number or not self.number[0].isdigit():
            raise ValueError(f"Version number must start with a digit: {self.number!r}")

    def __str__(self) -> str:
        text = self.number
        if self.pre_release:
            text += f"-{self.pre_release}"
        if self.build:
            text += f"+{self.build}"
        return text

    @classmethod
    def parse(cls, text: str) -> ModuleVersion:
        """Parse ``number[-pre_release][+build]``.

        Raises:
            ValueError: If the text is not a valid version.
        """
        m = _VERSION_RE.match(text.strip())
        if m is None:
            raise ValueError(f"Invalid module version: {text!r}")
        return cls(m.group(1), m.group(2) or "", m.group(3) or "")


def build_metadata(environ: Mapping[str, str], now: datetime | None = None) -> str:
    """Short ``GITHUB_SHA`` if set, else an ISO-8601 instant truncated to seconds."""
    sha = environ.get("GITHUB_SHA")
    if sha:
        return sha[:7]
    instant = (now or datetime.now(UTC)).astimezone(UTC).replace(microsecond=0)
    return instant.strftime("%Y-%m-%dT%H:%M:%SZ")


def compute_version(settings: Settings, now: datetime | None = None) -> ModuleVersion:
    """Compute the version for a runner built from local sources."""
    number = settings.get_property("build.version.number", "0")
    early = settings.get_property("build.version.pre-release", "ea")
    return ModuleVersion(
        number=number.strip(),
        pre_release=early.strip(),
        build=build_metadata(settings.environ, now),
    )
