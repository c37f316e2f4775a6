"""Mirror images and stylesheets referenced by the converted manual.

The manual is converted into its output directory by an external tool;
only files its pages actually reference are copied over from the manual
source directory. External URLs are skipped silently. References that climb
out of the source directory are refused with a warning.
"""

from __future__ import annotations

import glob
import logging
import re
import shutil
from enum import Enum
from pathlib import Path, PurePosixPath
from urllib.parse import unquote, urlsplit

from pkg2html.io import ensure_dir, read_text

logger = logging.getLogger(__name__)


class AssetKind(Enum):
    IMAGE = "image"
    STYLESHEET = "stylesheet"


_PATTERNS = {
    AssetKind.IMAGE: re.compile(
        r"<(?:img[^>]+?src|object[^>]+?data)\s*=\s*([\"'])(?P<url>[^\"']+)\1[^>]*>",
        re.IGNORECASE,
    ),
    AssetKind.STYLESHEET: re.compile(
        r"<(?:link[^>]+?rel\s*=\s*[\"']stylesheet[\"'][^>]+?href|object[^>]+?data)"
        r"\s*=\s*([\"'])(?P<url>[^\"']+)\1[^>]*>",
        re.IGNORECASE,
    ),
}


def extract_references(html: str, kind: AssetKind) -> list[str]:
    """Reference URLs of ``kind`` in ``html``, in document order."""
    pattern = _PATTERNS[kind]
    refs: list[str] = []
    for line in html.splitlines():
        refs.extend(m.group("url") for m in pattern.finditer(line))
    return refs


def is_external(url: str) -> bool:
    return "//" in url or bool(urlsplit(url).scheme)


def local_path(url: str) -> PurePosixPath | None:
    """Relative path named by ``url``; None if it escapes its root."""
    path = unquote(urlsplit(url).path)
    if not path or path.startswith("/") or "\\" in path:
        return None
    rel = PurePosixPath(path)
    if ".." in rel.parts:
        return None
    return rel


def _sources(source_root: Path, rel: PurePosixPath) -> list[Path]:
    if glob.has_magic(str(rel)):
        return sorted(p for p in source_root.glob(str(rel)) if p.is_file())
    candidate = source_root / rel
    return [candidate] if candidate.is_file() else []


def mirror_assets(
    html_file: Path,
    kind: AssetKind,
    source_root: Path,
    output_root: Path,
) -> list[Path]:
    """Copy every local ``kind`` asset referenced by ``html_file``.

    Returns the destination paths actually written. Missing sources, refused
    references and copy failures are logged and skipped.
    """
    html = read_text(html_file, what="manual page")
    copied: list[Path] = []
    for url in extract_references(html, kind):
        if is_external(url):
            continue
        rel = local_path(url)
        if rel is None:
            logger.warning(
                "not copying %s %s because path contains '..' or is absolute", kind.value, url
            )
            continue

        if rel.parent != PurePosixPath(".") and not glob.has_magic(str(rel.parent)):
            ensure_dir(output_root / rel.parent)

        sources = _sources(source_root, rel)
        if not sources:
            logger.warning("%s file %s not present, not copied", kind.value, url)
            continue

        for src in sources:
            dest = output_root / src.relative_to(source_root)
            ensure_dir(dest.parent)
            try:
                shutil.copyfile(src, dest)
            except OSError as exc:
                logger.warning("could not copy %s file %s: %s", kind.value, url, exc)
                continue
            copied.append(dest)
    return copied


__all__ = [
    "AssetKind",
    "extract_references",
    "is_external",
    "local_path",
    "mirror_assets",
]
