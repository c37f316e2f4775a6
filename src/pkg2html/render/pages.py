"""Package-level pages: overview, index, NEWS, COPYING and the list snippet."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from pkg2html.io import read_text, write_text
from pkg2html.model.descriptor import PackageDescriptor
from pkg2html.model.options import HtmlOptions
from pkg2html.model.records import PageTree
from pkg2html.names import category_anchor
from pkg2html.render.templating import Templates, render_template_string

logger = logging.getLogger(__name__)

ICON_KEYS = ("download", "repository", "doc", "manual", "news")


@dataclass(frozen=True)
class PageFrame:
    header: str
    title: str
    footer: str


def page_frame(options: HtmlOptions, page: str, name: str, pkgroot: str = "") -> PageFrame:
    """Render the ``<page>_title``, ``<page>_header`` and ``<page>_footer`` templates."""
    params = {"name": name, "pkgroot": pkgroot}
    title = render_template_string(getattr(options, f"{page}_title"), params)
    params["title"] = title
    return PageFrame(
        header=render_template_string(getattr(options, f"{page}_header"), params),
        title=title,
        footer=render_template_string(getattr(options, f"{page}_footer"), params),
    )


def write_overview(
    path: Path,
    descriptor: PackageDescriptor,
    tree: PageTree,
    options: HtmlOptions,
    templates: Templates,
) -> None:
    frame = page_frame(options, "overview", descriptor.name)
    categories = [
        {
            "label": category.category,
            "anchor": category_anchor(category.category),
            "functions": tree.records[k],
        }
        for k, category in enumerate(descriptor.categories)
    ]
    html = templates.render(
        "overview.html",
        {
            "header": frame.header,
            "footer": frame.footer,
            "name": descriptor.name,
            "description": descriptor.description,
            "categories": categories,
        },
    )
    write_text(path, html, what="overview file")


def write_text_page(
    path: Path,
    source: Path,
    page: str,
    heading: str,
    descriptor: PackageDescriptor,
    options: HtmlOptions,
    templates: Templates,
) -> None:
    """Wrap a plain text package file (NEWS, COPYING) into an HTML page."""
    content = read_text(source, what=source.name)
    frame = page_frame(options, page, descriptor.name)
    html = templates.render(
        "textfile.html",
        {
            "header": frame.header,
            "footer": frame.footer,
            "heading": heading,
            "name": descriptor.name,
            "content": content,
        },
    )
    write_text(path, html, what=f"{source.name} file")


def read_icon_attributions(website_files: str) -> dict[str, str]:
    """Icon title attributions from ``<website_files>/icons/<key>.attrib``."""
    attrib = dict.fromkeys(ICON_KEYS, "")
    if not website_files:
        return attrib
    icons = Path(website_files) / "icons"
    for key in ICON_KEYS:
        attrib_file = icons / f"{key}.attrib"
        if attrib_file.is_file():
            attrib[key] = attrib_file.read_text(encoding="utf-8").replace("\n", "")
    return attrib


def homepage_links(url: str) -> list[str]:
    return [part.strip() for part in url.split(",") if part.strip()]


def write_index_page(
    path: Path,
    descriptor: PackageDescriptor,
    options: HtmlOptions,
    templates: Templates,
    *,
    manual_link: str = "",
    news_link: str = "",
) -> None:
    frame = page_frame(options, "index", descriptor.name)
    link_params = {"name": descriptor.name}
    html = templates.render(
        "index.html",
        {
            "header": frame.header,
            "footer": frame.footer,
            "name": descriptor.name,
            "version": descriptor.version,
            "date": descriptor.date,
            "author": descriptor.author,
            "maintainer": descriptor.maintainer,
            "license": descriptor.license,
            "description": descriptor.description,
            "attrib": read_icon_attributions(options.website_files),
            "download_link": render_template_string(options.download_link, link_params),
            "repository_link": render_template_string(options.repository_link, link_params),
            "older_versions_download": render_template_string(
                options.older_versions_download, link_params
            ),
            "overview_file": options.overview_file,
            "manual_link": manual_link,
            "news_link": news_link,
            "homepages": homepage_links(descriptor.url),
            "depends": descriptor.depends,
            "system_requirements": descriptor.system_requirements,
            "build_requires": descriptor.build_requires,
        },
    )
    write_text(path, html, what="index file")


def write_package_list_item(path: Path, descriptor: PackageDescriptor, options: HtmlOptions) -> None:
    text = render_template_string(options.package_list_item, {"name": descriptor.name})
    write_text(path, text, what="package list item")


__all__ = [
    "PageFrame",
    "homepage_links",
    "page_frame",
    "read_icon_attributions",
    "write_index_page",
    "write_overview",
    "write_package_list_item",
    "write_text_page",
]
