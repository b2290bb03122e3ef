"""Tests for the duke command line."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

import duke.cli.context as context_module
from duke import __version__
from duke.cli.app import app
from duke.tools.http import MockHttpClient

runner = CliRunner()


@pytest.fixture(autouse=True)
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for key in list(os.environ):
        if key.startswith("DUKE_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestUsage:
    def test_no_operation_prints_usage(self) -> None:
        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert "Usage: duke" in result.output
        assert "Supported operations include:" in result.output
        assert "Module Compilation Units" not in result.output

    def test_verbose_usage_includes_status(self) -> None:
        result = runner.invoke(app, ["-D", "verbose=true"])

        assert result.exit_code == 0
        assert "Module Compilation Units: 0" in result.output

    @pytest.mark.parametrize("operation", ["help", "?", "-h", "--help"])
    def test_help(self, operation: str) -> None:
        result = runner.invoke(app, [operation])

        assert result.exit_code == 0
        assert "Operations:" in result.output

    def test_unsupported_operation(self) -> None:
        result = runner.invoke(app, ["bogus"])

        assert result.exit_code == 0
        assert "Operation `bogus` is not supported." in result.output


class TestVersionAndStatus:
    @pytest.mark.parametrize("operation", ["version", "-v", "--version"])
    def test_version(self, operation: str) -> None:
        result = runner.invoke(app, [operation])

        assert result.exit_code == 0
        assert result.output.strip() == __version__

    @pytest.mark.parametrize("operation", ["status", "~"])
    def test_status(self, operation: str) -> None:
        result = runner.invoke(app, [operation])

        assert result.exit_code == 0
        assert result.output.startswith(f"duke {__version__}")
        assert "Modules in file://" in result.output


class TestFind:
    def test_default_pattern(self, workdir: Path) -> None:
        (workdir / "src" / "pkg").mkdir(parents=True)
        (workdir / "src" / "pkg" / "a.py").write_text("", encoding="utf-8")

        result = runner.invoke(app, ["find"])

        assert result.exit_code == 0
        assert result.output.splitlines() == [
            str(Path("src") / "pkg"),
            str(Path("src") / "pkg" / "a.py"),
        ]

    def test_invalid_pattern(self) -> None:
        result = runner.invoke(app, ["find", "regex:["])

        assert result.exit_code == 1
        assert "Invalid pattern" in result.output


class TestProperties:
    def test_invalid_define(self) -> None:
        result = runner.invoke(app, ["-D", "verbose", "version"])

        assert result.exit_code == 1

    def test_invalid_properties_file(self, workdir: Path) -> None:
        (workdir / "duke.toml").write_text("verbose = \n", encoding="utf-8")

        result = runner.invoke(app, ["version"])

        assert result.exit_code == 1

    def test_properties_file_is_read(self, workdir: Path) -> None:
        (workdir / "duke.toml").write_text("verbose = true\n", encoding="utf-8")

        result = runner.invoke(app, [])

        assert "Module Compilation Units: 0" in result.output

    def test_define_wins_over_properties_file(self, workdir: Path) -> None:
        (workdir / "duke.toml").write_text("verbose = true\n", encoding="utf-8")

        result = runner.invoke(app, ["-D", "verbose=false"])

        assert "Module Compilation Units" not in result.output


class TestRun:
    def test_dry_run(self, workdir: Path) -> None:
        result = runner.invoke(app, ["-D", "dry-run=true", "run", "echo", "-v"])

        assert result.exit_code == 0
        assert "dry-run: download https://github.com/sormuras/duke/releases/download/early-access/" in result.output
        assert "-m run_duke echo -v" in result.output
        assert not (workdir / ".duke").exists()

    def test_download_failure_exit_code(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(context_module, "RealHttpClient", MockHttpClient)

        result = runner.invoke(app, ["+"])

        assert result.exit_code == 4
        assert "download failed" in result.output


class TestInstall:
    def test_without_arguments_lists_installers(self) -> None:
        result = runner.invoke(app, ["install"])

        assert result.exit_code == 1
        assert "org.kordamp/pomchecker" in result.output

    def test_unknown_installer(self) -> None:
        result = runner.invoke(app, ["!", "maven"])

        assert result.exit_code == 1
        assert "Unknown installer: maven" in result.output

    def test_dry_run(self, workdir: Path) -> None:
        result = runner.invoke(app, ["-D", "dry-run=true", "install", "jarviz", "0.3.0"])

        assert result.exit_code == 0
        assert (
            "dry-run: download https://github.com/kordamp/jarviz/releases/download/"
            "v0.3.0/jarviz-tool-provider-0.3.0.jar"
        ) in result.output
        assert not (workdir / ".duke").exists()
