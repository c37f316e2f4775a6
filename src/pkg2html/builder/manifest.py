"""``description.json``: what a generation run produced and where."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import date
from pathlib import Path
from typing import Any

from pkg2html import __version__
from pkg2html.io import atomic_write_text
from pkg2html.model.descriptor import PackageDescriptor
from pkg2html.model.options import HtmlOptions
from pkg2html.render.help_text import first_sentence

MANIFEST_FILENAME = "description.json"
GENERATOR = "pkg2html"


@dataclass
class SitePaths:
    """Paths (relative to the package directory) of generated sections; "" if absent."""

    function_help_dir: str = ""
    overview_file: str = ""
    alphabetical_database_dir: str = ""
    short_description_file: str = ""
    news_file: str = ""
    package_doc_dir: str = ""
    package_doc_index: str = ""
    index_file: str = ""
    copying_file: str = ""


def build_manifest(
    descriptor: PackageDescriptor,
    options: HtmlOptions,
    paths: SitePaths,
    *,
    generated: date | None = None,
) -> dict[str, Any]:
    shortdescription = descriptor.title or first_sentence(descriptor.description, 200)
    package: dict[str, Any] = {
        "name": descriptor.name,
        "version": descriptor.version,
        "description": descriptor.description,
        "shortdescription": shortdescription,
        "date": descriptor.date,
        "title": descriptor.title,
        "author": descriptor.author,
        "maintainer": descriptor.maintainer,
        "buildrequires": descriptor.build_requires,
        "systemrequirements": descriptor.system_requirements,
        "license": descriptor.license,
        "url": descriptor.url,
        "depends": [
            {"package": dep.package, "constraint": dep.constraint} for dep in descriptor.depends
        ],
    }
    return {
        "generator": GENERATOR,
        "generator_version": __version__,
        "date_generated": (generated or date.today()).isoformat(),
        "package": package,
        "html": {
            "config": {
                "has_overview": bool(paths.overview_file),
                "has_alphabetical_data": bool(paths.alphabetical_database_dir),
                "has_short_description": bool(paths.short_description_file),
                "has_news": bool(paths.news_file),
                "has_package_doc": bool(paths.package_doc_dir),
                "has_index": bool(paths.index_file),
                "has_license": bool(paths.copying_file),
                "has_website_files": bool(options.website_files),
                "has_demos": options.include_demos,
            },
            "paths": asdict(paths),
        },
    }


def write_manifest(package_dir: Path, manifest: dict[str, Any]) -> Path:
    path = package_dir / MANIFEST_FILENAME
    atomic_write_text(path, json.dumps(manifest, ensure_ascii=False, indent=2) + "\n")
    return path


__all__ = ["GENERATOR", "MANIFEST_FILENAME", "SitePaths", "build_manifest", "write_manifest"]
