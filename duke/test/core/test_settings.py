"""Tests for duke.core.settings module."""

from pathlib import Path

import pytest

from duke.core.result import Err, Ok
from duke.core.settings import (
    DEFAULT_DIRECTORY,
    EARLY_ACCESS,
    Settings,
    env_key,
    load_properties,
    parse_bool,
    parse_property,
)


class TestEnvKey:
    def test_upper_cases_and_replaces_separators(self) -> None:
        assert env_key("verbose") == "DUKE_VERBOSE"
        assert env_key("dry-run") == "DUKE_DRY_RUN"
        assert env_key("build.version.number") == "DUKE_BUILD_VERSION_NUMBER"


class TestParseBool:
    @pytest.mark.parametrize("text", ["true", "TRUE", "True", " true "])
    def test_true(self, text: str) -> None:
        assert parse_bool(text) is True

    @pytest.mark.parametrize("text", ["false", "yes", "1", "on", ""])
    def test_anything_else_is_false(self, text: str) -> None:
        assert parse_bool(text) is False


class TestParseProperty:
    def test_name_and_value(self) -> None:
        assert parse_property("verbose=true") == ("verbose", "true")

    def test_value_may_contain_equals(self) -> None:
        assert parse_property("a=b=c") == ("a", "b=c")

    def test_empty_value(self) -> None:
        assert parse_property("directory=") == ("directory", "")

    @pytest.mark.parametrize("text", ["verbose", "=true"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(ValueError, match="Expected name=value"):
            parse_property(text)


class TestSettingsFromSystem:
    """Tests for Settings.from_system()."""

    def test_defaults(self, tmp_path: Path) -> None:
        settings = Settings.from_system(project=tmp_path, environ={})

        assert settings.flags.verbose is False
        assert settings.flags.dry_run is False
        assert settings.root == tmp_path / DEFAULT_DIRECTORY
        assert settings.version == EARLY_ACCESS

    def test_environment_variables(self, tmp_path: Path) -> None:
        environ = {"DUKE_VERBOSE": "TRUE", "DUKE_DRY_RUN": "true", "DUKE_DIRECTORY": "work"}

        settings = Settings.from_system(project=tmp_path, environ=environ)

        assert settings.flags.verbose is True
        assert settings.flags.dry_run is True
        assert settings.root == tmp_path / "work"

    def test_property_wins_over_environment(self, tmp_path: Path) -> None:
        settings = Settings.from_system(
            project=tmp_path,
            properties={"verbose": "false"},
            environ={"DUKE_VERBOSE": "true"},
        )
        assert settings.flags.verbose is False

    def test_absolute_directory_is_kept(self, tmp_path: Path) -> None:
        elsewhere = tmp_path / "elsewhere"
        settings = Settings.from_system(
            project=tmp_path / "project",
            properties={"directory": str(elsewhere)},
            environ={},
        )
        assert settings.root == elsewhere

    def test_version_from_environment(self) -> None:
        settings = Settings.from_system(environ={"DUKE_VERSION": "2023.1"})
        assert settings.version == "2023.1"

    def test_get_property_falls_back_to_environment(self) -> None:
        settings = Settings(properties={"a": "1"}, environ={"DUKE_B": "2"})
        assert settings.get_property("a", "x") == "1"
        assert settings.get_property("b", "x") == "2"
        assert settings.get_property("c", "x") == "x"

    def test_is_frozen(self) -> None:
        settings = Settings()
        with pytest.raises(AttributeError):
            settings.root = Path("x")  # type: ignore[misc]


class TestLoadProperties:
    """Tests for load_properties()."""

    def test_flattens_tables(self, tmp_path: Path) -> None:
        path = tmp_path / "duke.toml"
        path.write_text(
            'verbose = true\n'
            'directory = "work"\n'
            '[build.version]\n'
            'number = "1.2"\n'
            'pre-release = "rc"\n',
            encoding="utf-8",
        )

        result = load_properties(path)

        assert isinstance(result, Ok)
        assert result.value == {
            "verbose": "true",
            "directory": "work",
            "build.version.number": "1.2",
            "build.version.pre-release": "rc",
        }

    def test_numbers_become_text(self, tmp_path: Path) -> None:
        path = tmp_path / "duke.toml"
        path.write_text("[build.version]\nnumber = 3\n", encoding="utf-8")

        result = load_properties(path)

        assert isinstance(result, Ok)
        assert result.value == {"build.version.number": "3"}

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_properties(tmp_path / "missing.toml")

        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "duke.toml"
        path.write_text("verbose = \n", encoding="utf-8")

        result = load_properties(path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message
        assert result.error.path == path
