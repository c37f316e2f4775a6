from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

import pytest

from pkg2html.builder.manual import build_manual, convert_manual, find_manual_root
from pkg2html.errors import ManualConversionError, ManualRootError, ManualToolNotFoundError


class _Proc:
    def __init__(self, returncode: int, stderr: str = "") -> None:
        self.returncode = returncode
        self.stdout = ""
        self.stderr = stderr


def test_convert_manual_builds_command(monkeypatch: Any, tmp_path: Path) -> None:
    called: dict[str, Any] = {}

    def fake_run(cmd: list[str], capture_output: bool, text: bool, check: bool) -> Any:
        called["cmd"] = cmd
        return _Proc(0)

    monkeypatch.setattr(subprocess, "run", fake_run)
    out = tmp_path / "package_doc"
    convert_manual("makeinfo", tmp_path / "doc" / "manual.texi", out, "--no-split -I 'my dir'")

    assert called["cmd"] == [
        "makeinfo",
        "--html",
        "-o",
        str(out),
        str(tmp_path / "doc" / "manual.texi"),
        "--no-split",
        "-I",
        "my dir",
    ]
    assert out.is_dir()


def test_exit_127_means_tool_not_found(monkeypatch: Any, tmp_path: Path) -> None:
    monkeypatch.setattr(subprocess, "run", lambda *a, **k: _Proc(127))
    with pytest.raises(ManualToolNotFoundError) as info:
        convert_manual("texi2any", tmp_path / "m.texi", tmp_path / "out")
    assert str(info.value) == "Program `texi2any' not found"


def test_missing_executable_means_tool_not_found(monkeypatch: Any, tmp_path: Path) -> None:
    def fake_run(*args: Any, **kwargs: Any) -> Any:
        raise FileNotFoundError("makeinfo")

    monkeypatch.setattr(subprocess, "run", fake_run)
    with pytest.raises(ManualToolNotFoundError):
        convert_manual("makeinfo", tmp_path / "m.texi", tmp_path / "out")


def test_unexecutable_program_is_a_conversion_error(monkeypatch: Any, tmp_path: Path) -> None:
    def fake_run(*args: Any, **kwargs: Any) -> Any:
        raise PermissionError(13, "Permission denied", "makeinfo")

    monkeypatch.setattr(subprocess, "run", fake_run)
    with pytest.raises(ManualConversionError) as info:
        convert_manual("makeinfo", tmp_path / "m.texi", tmp_path / "out")
    assert not isinstance(info.value, ManualToolNotFoundError)
    assert info.value.returncode == -1
    assert "Permission denied" in str(info.value)
    assert isinstance(info.value.__cause__, PermissionError)


def test_nonzero_exit_is_fatal(monkeypatch: Any, tmp_path: Path) -> None:
    monkeypatch.setattr(subprocess, "run", lambda *a, **k: _Proc(2, "m.texi:3: bad node"))
    with pytest.raises(ManualConversionError) as info:
        convert_manual("makeinfo", tmp_path / "m.texi", tmp_path / "out")
    assert info.value.returncode == 2
    assert "returned failure code 2" in str(info.value)
    assert "bad node" in str(info.value)


class TestManualRoot:
    def test_index_html_wins(self, tmp_path: Path) -> None:
        for name in ("index.html", "manual.html", "other.html"):
            (tmp_path / name).write_text("")
        assert find_manual_root(tmp_path, Path("manual.texi")) == "index.html"

    def test_same_name_as_source(self, tmp_path: Path) -> None:
        for name in ("manual.html", "other.html"):
            (tmp_path / name).write_text("")
        assert find_manual_root(tmp_path, Path("doc/manual.texi")) == "manual.html"

    def test_single_html_file(self, tmp_path: Path) -> None:
        (tmp_path / "whatever.html").write_text("")
        assert find_manual_root(tmp_path, Path("manual.texi")) == "whatever.html"

    def test_ambiguous_root_is_fatal(self, tmp_path: Path) -> None:
        for name in ("a.html", "b.html"):
            (tmp_path / name).write_text("")
        with pytest.raises(ManualRootError, match="Unable to determine the root of the HTML manual."):
            find_manual_root(tmp_path, Path("manual.texi"))


def test_build_manual_mirrors_assets(monkeypatch: Any, tmp_path: Path) -> None:
    doc_root = tmp_path / "doc"
    (doc_root / "pics").mkdir(parents=True)
    (doc_root / "pics" / "plot.png").write_bytes(b"png")
    (doc_root / "manual.css").write_text("body {}")
    out = tmp_path / "site" / "package_doc"

    def fake_run(cmd: list[str], **kwargs: Any) -> Any:
        out_dir = Path(cmd[3])
        (out_dir / "index.html").write_text(
            '<link rel="stylesheet" type="text/css" href="manual.css">\n'
            '<img src="pics/plot.png" alt="plot">\n'
        )
        (out_dir / "Intro.html").write_text('<img src="../escape.png">\n')
        return _Proc(0)

    monkeypatch.setattr(subprocess, "run", fake_run)
    result = build_manual("makeinfo", doc_root, "manual.texi", out)

    assert result.index == "index.html"
    assert (out / "pics" / "plot.png").read_bytes() == b"png"
    assert (out / "manual.css").is_file()
    assert sorted(p.relative_to(out).as_posix() for p in result.assets) == [
        "manual.css",
        "pics/plot.png",
    ]
