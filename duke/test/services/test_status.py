"""Tests for services/status.py - status and version reporting."""

import zipfile
from pathlib import Path

from duke import __version__
from duke.core.settings import Settings
from duke.output.console import MockConsole
from duke.services.status import StatusPrinter, describe_version


def _settings(tmp_path: Path) -> Settings:
    return Settings(project=tmp_path, root=tmp_path / ".duke")


def _install_runner(bin_dir: Path, version: str) -> None:
    bin_dir.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(bin_dir / "run_duke@early-access.pyz", "w") as zf:
        zf.writestr("run_duke/__init__.pyc", b"")
        zf.writestr("run_duke/VERSION", f"{version}\n")


class TestDescribeVersion:
    def test_without_runner(self, tmp_path: Path) -> None:
        assert describe_version(tmp_path / "bin") == __version__

    def test_with_runner(self, tmp_path: Path) -> None:
        _install_runner(tmp_path / "bin", "0-ea+abc1234")

        assert describe_version(tmp_path / "bin") == f"{__version__} (run_duke@0-ea+abc1234)"


class TestStatusPrinter:
    def test_print_version(self, tmp_path: Path) -> None:
        console = MockConsole()

        StatusPrinter(_settings(tmp_path), console).print_version()

        assert console.messages == [__version__]

    def test_print_status_empty_working_directory(self, tmp_path: Path) -> None:
        console = MockConsole(verbose=False)

        StatusPrinter(_settings(tmp_path), console).print_status()

        messages = console.messages
        assert messages[0] == f"duke {__version__}"
        assert not console.find("Code source location")
        assert "Module Compilation Units: 0" in messages
        assert messages[-1].startswith("Modules in file://")
        assert messages[-1].endswith(": 0")

    def test_verbose_shows_code_location(self, tmp_path: Path) -> None:
        console = MockConsole(verbose=True)

        StatusPrinter(_settings(tmp_path), console).print_status()

        assert console.find("Code source location: file://")

    def test_lists_units_and_modules(self, tmp_path: Path) -> None:
        settings = _settings(tmp_path)
        (settings.root / "greet").mkdir(parents=True)
        (settings.root / "greet" / "__init__.py").write_text("", encoding="utf-8")
        _install_runner(settings.root / "bin", "1.0")
        console = MockConsole(verbose=False)

        StatusPrinter(settings, console).print_status()

        unit = (settings.root / "greet" / "__init__.py").resolve().as_uri()
        messages = console.messages
        assert messages[0] == f"duke {__version__} (run_duke@1.0)"
        index = messages.index("Module Compilation Units: 1")
        assert messages[index + 1] == f"  {unit}"
        assert messages[-2].endswith(": 1")
        assert messages[-1] == "  run_duke@1.0"
