"""Tests for JarvizInstaller."""

from duke.tools.definitions.jarviz import JarvizInstaller


class TestJarvizInstaller:
    def test_identity(self) -> None:
        installer = JarvizInstaller()
        assert installer.identity == "org.kordamp/jarviz"
        assert installer.repo == "kordamp/jarviz"

    def test_release_version(self) -> None:
        assert JarvizInstaller().download_url("1.2.3") == (
            "https://github.com/kordamp/jarviz/releases/download/"
            "v1.2.3/jarviz-tool-provider-1.2.3.jar"
        )

    def test_early_access(self) -> None:
        assert JarvizInstaller().download_url("early-access") == (
            "https://github.com/kordamp/jarviz/releases/download/"
            "early-access/jarviz-tool-provider-early-access.jar"
        )
