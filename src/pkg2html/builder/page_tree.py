"""Render one help page per function and collect links and summaries.

Categories and functions are visited in descriptor order. A function whose
help source cannot be found is marked not implemented and skipped; a
function without documentation gets a placeholder summary. Both only warn.
Anything else raised by the collaborators aborts the run.
"""

from __future__ import annotations

import logging
from contextlib import suppress
from pathlib import Path

from pkg2html.builder.alpha_index import AlphaIndex
from pkg2html.io import ensure_dir, ensure_tree
from pkg2html.model.descriptor import PackageDescriptor
from pkg2html.model.records import NOT_DOCUMENTED, FunctionRecord, PageTree
from pkg2html.names import resolve_name
from pkg2html.types import (
    NotDocumented,
    NotFound,
    PageRenderer,
    ProgressCallback,
    RenderOptions,
    Summary,
    SummaryExtractor,
)

logger = logging.getLogger(__name__)

SUMMARY_MAX_LENGTH = 200


def safe_emit(on_progress: ProgressCallback, event: str, payload: dict[str, int | str]) -> None:
    if on_progress is None:
        return
    with suppress(Exception):
        on_progress(event, payload)


def _first_sentence(extractor: SummaryExtractor, name: str) -> str:
    result = extractor.first_sentence(name, SUMMARY_MAX_LENGTH)
    if isinstance(result, NotDocumented):
        logger.warning("%s is undocumented", name)
        return NOT_DOCUMENTED
    if isinstance(result, Summary):
        return " ".join(result.text.splitlines())
    raise TypeError(f"Summary extractor returned {type(result).__name__} for '{name}'")


def build_page_tree(
    descriptor: PackageDescriptor,
    package_dir: Path,
    function_dir: str,
    renderer: PageRenderer,
    extractor: SummaryExtractor,
    on_progress: ProgressCallback = None,
) -> tuple[PageTree, AlphaIndex]:
    """Render every function page below ``package_dir/function_dir``.

    Returns the page tree (link and sentence maps) and the alphabetical index
    of implemented functions.
    """
    fundir = ensure_dir(package_dir / function_dir)
    tree = PageTree(function_dir=function_dir)
    alpha = AlphaIndex()
    num_categories = len(descriptor.categories)

    for k, category in enumerate(descriptor.categories):
        logger.info("Category %2d/%2d %s", k + 1, num_categories, category.category)
        safe_emit(
            on_progress,
            "category:start",
            {"category": category.category, "functions": len(category.functions)},
        )
        records: list[FunctionRecord] = []
        for j, name in enumerate(category.functions):
            path = resolve_name(name)
            ensure_tree(fundir, path.directories)
            outname = fundir / Path(path.subpath)

            result = renderer.render(outname, RenderOptions(pkgroot=path.root_prefix, name=name))
            if isinstance(result, NotFound):
                logger.warning("marking '%s' as not implemented (%s)", name, result.reason)
                records.append(
                    FunctionRecord(name=name, path=path, implemented=False, link="", first_sentence="")
                )
                safe_emit(on_progress, "function:missing", {"name": name})
                continue

            record = FunctionRecord(
                name=name,
                path=path,
                implemented=True,
                link=f"{function_dir}/{path.subpath}",
                first_sentence=_first_sentence(extractor, name),
            )
            records.append(record)
            alpha.add(path, (k, j))
            safe_emit(on_progress, "function:rendered", {"name": name})
        tree.records.append(records)

    return tree, alpha


__all__ = ["SUMMARY_MAX_LENGTH", "build_page_tree", "safe_emit"]
