"""Site assembly: sequence every section of one package's documentation.

Output layout below ``<outdir>/<package>/``::

    index.html  <overview>.html  NEWS.html  COPYING.html
    <function_dir>/[ns/...][@Class/]name.html
    alpha/<letter>/[ns/...][@Class/]name
    package_doc/...
    description.json
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pkg2html.builder.alpha_index import AlphaIndex, write_alpha_tree
from pkg2html.builder.manifest import SitePaths, build_manifest, write_manifest
from pkg2html.builder.manual import MANUAL_SUBDIR, build_manual
from pkg2html.builder.page_tree import build_page_tree, safe_emit
from pkg2html.errors import SiteWriteError
from pkg2html.io import ensure_dir
from pkg2html.model.descriptor import PackageDescriptor
from pkg2html.model.options import HtmlOptions
from pkg2html.model.records import PageTree
from pkg2html.render.help_text import HelpTextRenderer, HelpTextSummaries
from pkg2html.render.pages import (
    write_index_page,
    write_overview,
    write_package_list_item,
    write_text_page,
)
from pkg2html.render.templating import create_environment
from pkg2html.types import PageRenderer, ProgressCallback, SummaryExtractor

logger = logging.getLogger(__name__)

ALPHA_DIR = "alpha"
NEWS_FILENAME = "NEWS.html"
COPYING_FILENAME = "COPYING.html"
INDEX_FILENAME = "index.html"


@dataclass
class SiteResult:
    package_dir: Path
    paths: SitePaths
    tree: PageTree
    alpha: AlphaIndex
    manifest: dict[str, Any]


def log_site_configuration(package: str, options: HtmlOptions) -> None:
    logger.info("Site configuration for '%s':", package)
    for key, value in options.to_dict().items():
        logger.info("  %s: %s", key, value)


def log_section_decision(section: str, generated: bool, reason: str | None = None) -> None:
    if reason:
        logger.info("%s: %s (%s)", section, "generated" if generated else "skipped", reason)
    else:
        logger.info("%s: %s", section, "generated" if generated else "skipped")


def copy_website_files(source: Path, outdir: Path) -> None:
    try:
        shutil.copytree(source, outdir, dirs_exist_ok=True)
    except (OSError, shutil.Error) as exc:
        raise SiteWriteError(outdir, "website files", exc) from exc


def generate_package_html(
    descriptor: PackageDescriptor,
    outdir: Path,
    options: HtmlOptions | None = None,
    *,
    renderer: PageRenderer | None = None,
    extractor: SummaryExtractor | None = None,
    on_progress: ProgressCallback = None,
) -> SiteResult:
    """Generate the HTML documentation of ``descriptor`` below ``outdir``.

    Renderer and extractor default to the descriptor's own help texts.
    Raises a Pkg2HtmlError subclass on any fatal condition; output written
    so far stays on disk.
    """
    options = options or HtmlOptions()
    templates = create_environment()
    renderer = renderer or HelpTextRenderer(descriptor.help, options, templates)
    extractor = extractor or HelpTextSummaries(descriptor.help)
    log_site_configuration(descriptor.name, options)

    ensure_dir(outdir)
    package_dir = ensure_dir(outdir / descriptor.name)
    paths = SitePaths(function_help_dir=options.function_dir)

    # Function pages
    tree, alpha = build_page_tree(
        descriptor, package_dir, options.function_dir, renderer, extractor, on_progress
    )
    logger.info(
        "Rendered %d of %d function pages",
        tree.implemented_count,
        sum(len(recs) for recs in tree.records),
    )

    if options.include_overview:
        write_overview(package_dir / options.overview_file, descriptor, tree, options, templates)
        paths.overview_file = options.overview_file
    log_section_decision("Overview", options.include_overview)

    if options.include_alpha:
        count = write_alpha_tree(alpha, package_dir / ALPHA_DIR, tree.sentences)
        paths.alphabetical_database_dir = ALPHA_DIR
        safe_emit(on_progress, "alpha:written", {"files": count})
    log_section_decision("Alphabetical index", options.include_alpha)

    if options.include_package_list_item:
        write_package_list_item(package_dir / options.pkg_list_item_filename, descriptor, options)
        paths.short_description_file = options.pkg_list_item_filename
    log_section_decision("Package list item", options.include_package_list_item)

    if options.include_package_news:
        write_text_page(
            package_dir / NEWS_FILENAME,
            descriptor.packinfo_dir / "NEWS",
            "news",
            f"NEWS for '{descriptor.name}' Package",
            descriptor,
            options,
            templates,
        )
        paths.news_file = NEWS_FILENAME
    log_section_decision("NEWS", options.include_package_news)

    if options.package_doc:
        manual = build_manual(
            options.makeinfo,
            descriptor.doc_dir,
            options.package_doc,
            package_dir / MANUAL_SUBDIR,
            options.package_doc_options,
        )
        paths.package_doc_dir = MANUAL_SUBDIR
        paths.package_doc_index = manual.index
        safe_emit(on_progress, "manual:converted", {"index": manual.index})
        safe_emit(on_progress, "assets:mirrored", {"assets": len(manual.assets)})
    log_section_decision("Package documentation", bool(options.package_doc), options.package_doc or None)

    if options.include_package_page:
        manual_link = f"{paths.package_doc_dir}/{paths.package_doc_index}" if paths.package_doc_dir else ""
        write_index_page(
            package_dir / INDEX_FILENAME,
            descriptor,
            options,
            templates,
            manual_link=manual_link,
            news_link=paths.news_file,
        )
        paths.index_file = INDEX_FILENAME
    log_section_decision("Index page", options.include_package_page)

    if options.include_package_license:
        write_text_page(
            package_dir / COPYING_FILENAME,
            descriptor.packinfo_dir / "COPYING",
            "copying",
            f"License for '{descriptor.name}' Package",
            descriptor,
            options,
            templates,
        )
        paths.copying_file = COPYING_FILENAME
    log_section_decision("License", options.include_package_license)

    if options.website_files:
        copy_website_files(Path(options.website_files), outdir)
    log_section_decision("Website files", bool(options.website_files), options.website_files or None)

    manifest = build_manifest(descriptor, options, paths)
    write_manifest(package_dir, manifest)
    safe_emit(on_progress, "site:finalized", {"package": descriptor.name})

    return SiteResult(package_dir=package_dir, paths=paths, tree=tree, alpha=alpha, manifest=manifest)


__all__ = [
    "SiteResult",
    "copy_website_files",
    "generate_package_html",
    "log_section_decision",
    "log_site_configuration",
]
