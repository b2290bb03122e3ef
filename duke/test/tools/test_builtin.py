"""Tests for tools/builtin.py - compile and package tools."""

import io
import os
import subprocess
import sys
import zipfile
from pathlib import Path

import pytest

from duke.tools.builtin import BUILTIN_TOOLS, VERSION_FILE, CompileTool, PackageTool


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def sources(tmp_path: Path) -> Path:
    root = tmp_path / "src"
    _write(root / "hello" / "main" / "python" / "__init__.py", "")
    _write(
        root / "hello" / "main" / "python" / "main.py",
        "import sys\n\n\ndef main():\n    print('hello', *sys.argv[1:])\n",
    )
    _write(root / "hello" / "main" / "python" / "data.txt", "data")
    return root


def _compile(*args: str) -> tuple[int, str, str]:
    out, err = io.StringIO(), io.StringIO()
    code = CompileTool().run(out, err, list(args))
    return code, out.getvalue(), err.getvalue()


class TestCompileTool:
    def test_compiles_pattern_source_path(self, sources: Path, tmp_path: Path) -> None:
        classes = tmp_path / "classes"

        code, out, err = _compile(
            "--module=hello",
            f"--module-source-path={sources / '*' / 'main' / 'python'}",
            "--module-version=1-ea+abc",
            "-d",
            str(classes),
        )

        assert (code, err) == (0, "")
        assert out == "compiled 2 file(s) of module hello\n"
        assert (classes / "hello" / "__init__.pyc").is_file()
        assert (classes / "hello" / "main.pyc").is_file()
        assert not (classes / "hello" / "main.py").exists()
        assert (classes / "hello" / "data.txt").read_text(encoding="utf-8") == "data"
        assert (classes / "hello" / VERSION_FILE).read_text(encoding="utf-8") == "1-ea+abc\n"

    def test_compiles_plain_source_path_entries(self, tmp_path: Path) -> None:
        _write(tmp_path / "root" / "a" / "__init__.py", "")
        _write(tmp_path / "root" / "sub" / "b" / "__init__.py", "")
        _write(tmp_path / "root" / "sub" / "b" / "__pycache__" / "x.pyc", "stale")
        source_path = os.pathsep.join([str(tmp_path / "root"), str(tmp_path / "root" / "sub")])

        code, out, _ = _compile("--module=a,b", f"--module-source-path={source_path}", "-d", str(tmp_path / "bin"))

        assert code == 0
        assert out.splitlines() == [
            "compiled 1 file(s) of module a",
            "compiled 1 file(s) of module b",
        ]
        assert (tmp_path / "bin" / "b" / "__init__.pyc").is_file()
        assert not (tmp_path / "bin" / "b" / "__pycache__").exists()
        assert not (tmp_path / "bin" / "a" / VERSION_FILE).exists()

    def test_module_not_found(self, tmp_path: Path) -> None:
        code, _, err = _compile("--module=nope", f"--module-source-path={tmp_path}", "-d", str(tmp_path / "out"))

        assert code == 2
        assert "module not found: nope" in err

    def test_syntax_error(self, tmp_path: Path) -> None:
        _write(tmp_path / "bad" / "__init__.py", "def broken(:\n")

        code, _, err = _compile("--module=bad", f"--module-source-path={tmp_path}", "-d", str(tmp_path / "out"))

        assert code == 1
        assert "SyntaxError" in err

    def test_usage_error(self) -> None:
        code, _, err = _compile("--module=x")

        assert code == 2
        assert err.startswith("compile:")

    def test_invalid_version(self, sources: Path, tmp_path: Path) -> None:
        code, _, err = _compile(
            "--module=hello",
            f"--module-source-path={sources / '*' / 'main' / 'python'}",
            "--module-version=ea",
            "-d",
            str(tmp_path / "classes"),
        )

        assert code == 2
        assert "Invalid module version" in err


class TestPackageTool:
    def _classes(self, sources: Path, tmp_path: Path) -> Path:
        classes = tmp_path / "classes"
        code, _, _ = _compile(
            "--module=hello",
            f"--module-source-path={sources / '*' / 'main' / 'python'}",
            "--module-version=0-ea+x",
            "-d",
            str(classes),
        )
        assert code == 0
        return classes

    def test_creates_executable_archive(self, sources: Path, tmp_path: Path) -> None:
        classes = self._classes(sources, tmp_path)
        archive = tmp_path / "bin" / "hello@early-access.pyz"
        out, err = io.StringIO(), io.StringIO()

        code = PackageTool().run(
            out,
            err,
            ["--create", f"--file={archive}", "--main-class=hello.main:main", "-C", str(classes), "hello"],
        )

        assert (code, err.getvalue()) == (0, "")
        assert out.getvalue() == f"created {archive}\n"
        assert archive.read_bytes().startswith(b"#!")
        assert os.access(archive, os.X_OK)
        with zipfile.ZipFile(archive) as zf:
            assert sorted(zf.namelist()) == [
                "__main__.py",
                "hello/VERSION",
                "hello/__init__.pyc",
                "hello/data.txt",
                "hello/main.pyc",
            ]

        completed = subprocess.run(
            [sys.executable, str(archive), "world"],
            capture_output=True,
            text=True,
            check=False,
        )
        assert completed.returncode == 0
        assert completed.stdout == "hello world\n"

    def test_missing_content(self, tmp_path: Path) -> None:
        err = io.StringIO()

        code = PackageTool().run(
            io.StringIO(), err, ["--create", f"--file={tmp_path / 'x.pyz'}", "-C", str(tmp_path), "missing"]
        )

        assert code == 1
        assert "no such file or directory" in err.getvalue()

    def test_bad_main_class(self, tmp_path: Path) -> None:
        err = io.StringIO()

        code = PackageTool().run(io.StringIO(), err, ["--create", f"--file={tmp_path / 'x.pyz'}", "--main-class=hello"])

        assert code == 2
        assert "module:function" in err.getvalue()
        assert not (tmp_path / "x.pyz").exists()

    def test_create_is_required(self, tmp_path: Path) -> None:
        code = PackageTool().run(io.StringIO(), io.StringIO(), [f"--file={tmp_path / 'x.pyz'}"])

        assert code == 2


def test_builtin_tool_names() -> None:
    assert [tool.name for tool in BUILTIN_TOOLS] == ["compile", "package"]
