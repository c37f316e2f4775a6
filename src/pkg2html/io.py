"""Output file helpers.

Failures to create output directories or open output files are fatal and
surface as SiteWriteError naming the path.
"""

from __future__ import annotations

import os
from pathlib import Path
from tempfile import NamedTemporaryFile

from pkg2html.errors import MetadataReadError, SiteWriteError


def ensure_dir(path: Path) -> Path:
    """Create ``path`` and its parents; an existing directory is left alone."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SiteWriteError(path, "directory", exc) from exc
    return path


def ensure_tree(base: Path, segments: tuple[str, ...] | list[str]) -> Path:
    """Create every intermediate directory of ``base/seg1/seg2/...``."""
    current = base
    for segment in segments:
        current = ensure_dir(current / segment)
    return current


def write_text(path: Path, data: str, *, what: str = "file") -> None:
    try:
        with path.open("w", encoding="utf-8") as fh:
            fh.write(data)
    except OSError as exc:
        raise SiteWriteError(path, what, exc) from exc


def atomic_write_text(path: Path, data: str, *, encoding: str = "utf-8") -> None:
    """Atomically write text to a file by writing to a temp file then replacing.

    Ensures parent directories exist and minimizes risk of partial writes.
    """
    ensure_dir(path.parent)
    try:
        with NamedTemporaryFile("w", encoding=encoding, dir=str(path.parent), delete=False) as tmp:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
            tmp_path = Path(tmp.name)
        os.replace(tmp_path, path)
    except OSError as exc:
        raise SiteWriteError(path, "file", exc) from exc


def read_text(path: Path, *, what: str) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise MetadataReadError(path, what, exc) from exc


__all__ = ["atomic_write_text", "ensure_dir", "ensure_tree", "read_text", "write_text"]
