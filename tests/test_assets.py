from __future__ import annotations

import logging
import shutil
from pathlib import Path

import pytest

from pkg2html.builder.assets import (
    AssetKind,
    extract_references,
    is_external,
    local_path,
    mirror_assets,
)


@pytest.fixture
def manual(tmp_path: Path) -> tuple[Path, Path]:
    source = tmp_path / "doc"
    output = tmp_path / "out"
    (source / "img").mkdir(parents=True)
    output.mkdir()
    (source / "img" / "x.png").write_bytes(b"\x89PNG")
    (source / "style.css").write_text("body {}")
    return source, output


def _page(output: Path, body: str) -> Path:
    page = output / "index.html"
    page.write_text(f"<html><head></head><body>\n{body}\n</body></html>\n")
    return page


def test_extract_references_by_kind() -> None:
    html = (
        '<img alt="a" src="img/a.png"> <object type="image/svg+xml" data="fig.svg"></object>\n'
        '<link rel="stylesheet" type="text/css" href="manual.css">\n'
        '<a href="other.html">link</a>\n'
    )
    assert extract_references(html, AssetKind.IMAGE) == ["img/a.png", "fig.svg"]
    assert extract_references(html, AssetKind.STYLESHEET) == ["fig.svg", "manual.css"]


def test_local_path_rules() -> None:
    assert is_external("http://example.com/x.png")
    assert is_external("//cdn.example.com/x.png")
    assert not is_external("img/x.png")
    assert local_path("img/x.png").as_posix() == "img/x.png"
    assert local_path("../img/x.png") is None
    assert local_path("img/../../x.png") is None
    assert local_path("/etc/passwd") is None
    assert local_path("img/%2E%2E/x.png") is None


def test_relative_reference_is_copied(manual: tuple[Path, Path], tmp_path: Path) -> None:
    source, output = manual
    page = tmp_path / "page.html"
    page.write_text('<p><img src="img/x.png" alt="x"></p>\n')

    copied = mirror_assets(page, AssetKind.IMAGE, source, output)

    assert copied == [output / "img" / "x.png"]
    assert (output / "img" / "x.png").read_bytes() == b"\x89PNG"


def test_parent_traversal_is_rejected_with_warning(
    manual: tuple[Path, Path], tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    source, output = manual
    (tmp_path / "img").mkdir()
    (tmp_path / "img" / "x.png").write_bytes(b"secret")
    page = _page(output, '<img src="../img/x.png">')

    with caplog.at_level(logging.WARNING):
        copied = mirror_assets(page, AssetKind.IMAGE, source, output)

    assert copied == []
    assert "not copying image ../img/x.png" in caplog.text
    assert not (output / "img").exists()


def test_external_reference_is_skipped_silently(
    manual: tuple[Path, Path], caplog: pytest.LogCaptureFixture
) -> None:
    source, output = manual
    page = _page(output, '<img src="http://example.com/x.png">')

    with caplog.at_level(logging.WARNING):
        copied = mirror_assets(page, AssetKind.IMAGE, source, output)

    assert copied == []
    assert caplog.records == []


def test_missing_source_warns_and_continues(
    manual: tuple[Path, Path], caplog: pytest.LogCaptureFixture
) -> None:
    source, output = manual
    page = _page(output, '<img src="img/missing.png">\n<img src="img/x.png">')

    with caplog.at_level(logging.WARNING):
        copied = mirror_assets(page, AssetKind.IMAGE, source, output)

    assert "image file img/missing.png not present, not copied" in caplog.text
    assert copied == [output / "img" / "x.png"]


def test_glob_reference_expands(manual: tuple[Path, Path]) -> None:
    source, output = manual
    (source / "img" / "y.png").write_bytes(b"y")
    page = _page(output, '<img src="img/*.png">')

    copied = mirror_assets(page, AssetKind.IMAGE, source, output)

    assert sorted(p.name for p in copied) == ["x.png", "y.png"]


def test_stylesheet_is_copied(manual: tuple[Path, Path]) -> None:
    source, output = manual
    page = _page(output, '<link rel="stylesheet" type="text/css" href="style.css">')

    copied = mirror_assets(page, AssetKind.STYLESHEET, source, output)

    assert copied == [output / "style.css"]


def test_copy_failure_is_a_warning(
    manual: tuple[Path, Path], monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    source, output = manual
    page = _page(output, '<img src="img/x.png">')

    def boom(src: Path, dst: Path) -> None:
        raise PermissionError("denied")

    monkeypatch.setattr(shutil, "copyfile", boom)
    with caplog.at_level(logging.WARNING):
        copied = mirror_assets(page, AssetKind.IMAGE, source, output)

    assert copied == []
    assert "could not copy image file img/x.png: denied" in caplog.text
