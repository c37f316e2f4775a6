from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from pkg2html.builder.assets import AssetKind, mirror_assets
from pkg2html.errors import ManualConversionError, ManualRootError, ManualToolNotFoundError
from pkg2html.io import ensure_dir

logger = logging.getLogger(__name__)

MANUAL_SUBDIR = "package_doc"
TOOL_NOT_FOUND = 127


@dataclass
class ManualResult:
    out_dir: Path
    index: str  # entry page, relative to out_dir
    assets: list[Path] = field(default_factory=list)


def convert_manual(
    program: str,
    source: Path,
    out_dir: Path,
    extra_options: str = "",
) -> None:
    """Run the texinfo converter: ``<program> --html -o <out_dir> <source> [extra]``.

    Raises:
        ManualToolNotFoundError: the program is missing (or exits with 127)
        ManualConversionError: any other non-zero exit status, or the
            program could not be started
    """
    ensure_dir(out_dir)
    cmd = [program, "--html", "-o", str(out_dir), str(source), *shlex.split(extra_options)]
    logger.info("Converting manual: %s", shlex.join(cmd))
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
    except FileNotFoundError as exc:
        raise ManualToolNotFoundError(program) from exc
    except OSError as exc:
        raise ManualConversionError(program, -1, str(exc)) from exc
    if proc.returncode == TOOL_NOT_FOUND:
        raise ManualToolNotFoundError(program)
    if proc.returncode != 0:
        raise ManualConversionError(program, proc.returncode, (proc.stderr or proc.stdout).strip() or None)


def find_manual_root(out_dir: Path, source: Path) -> str:
    """Pick the entry page of a converted manual.

    ``index.html`` wins, then ``<source stem>.html``, then the only HTML file.
    """
    for candidate in ("index.html", f"{source.stem}.html"):
        if (out_dir / candidate).is_file():
            return candidate
    pages = sorted(out_dir.glob("*.html"))
    if len(pages) == 1:
        return pages[0].name
    raise ManualRootError(out_dir)


def build_manual(
    program: str,
    doc_root: Path,
    doc_file: str,
    out_dir: Path,
    extra_options: str = "",
) -> ManualResult:
    """Convert ``doc_root/doc_file`` into ``out_dir`` and mirror its assets."""
    source = doc_root / Path(doc_file).name
    convert_manual(program, source, out_dir, extra_options)
    index = find_manual_root(out_dir, source)

    result = ManualResult(out_dir=out_dir, index=index)
    for page in sorted(out_dir.glob("*.html")):
        for kind in (AssetKind.IMAGE, AssetKind.STYLESHEET):
            result.assets.extend(mirror_assets(page, kind, doc_root, out_dir))
    return result


__all__ = [
    "MANUAL_SUBDIR",
    "ManualResult",
    "build_manual",
    "convert_manual",
    "find_manual_root",
]
