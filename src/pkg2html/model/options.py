"""Configuration for one generation run.

HtmlOptions is built once, before anything is written, and handed by
reference to every builder. It is frozen; nothing downstream may change it.

Text templates use jinja2 syntax and receive ``name``, ``pkgroot`` and
``title`` (the rendered ``*_title`` template of the same page).
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from pkg2html.errors import OptionsError

_DEFAULT_HEADER = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{{ title }}</title>
  <link rel="stylesheet" type="text/css" href="{{ pkgroot }}../pkg2html.css">
</head>
<body>
<div id="doccontent">"""

_DEFAULT_FOOTER = """</div>
</body>
</html>"""


@dataclass(frozen=True)
class HtmlOptions:
    """Recognised configuration keys and their defaults."""

    function_dir: str = "function"
    overview_filename: str = "overview.html"
    pkg_list_item_filename: str = "short_package_description"

    include_overview: bool = True
    include_alpha: bool = True
    include_package_list_item: bool = False
    include_package_news: bool = True
    include_package_page: bool = True
    include_package_license: bool = True
    # Recorded in the manifest only
    include_demos: bool = False

    # texinfo source file name inside <root>/doc; empty disables the manual
    package_doc: str = ""
    package_doc_options: str = ""
    makeinfo_program: str = "makeinfo"

    website_files: str = ""

    download_link: str = ""
    repository_link: str = ""
    older_versions_download: str = ""

    package_list_item: str = (
        '<div class="package"><b>{{ name }}</b> '
        '<a href="{{ name }}/index.html">Details</a></div>\n'
    )

    overview_header: str = _DEFAULT_HEADER
    overview_title: str = "List of Functions in '{{ name }}'"
    overview_footer: str = _DEFAULT_FOOTER
    news_header: str = _DEFAULT_HEADER
    news_title: str = "NEWS for '{{ name }}'"
    news_footer: str = _DEFAULT_FOOTER
    index_header: str = _DEFAULT_HEADER
    index_title: str = "The '{{ name }}' package"
    index_footer: str = _DEFAULT_FOOTER
    copying_header: str = _DEFAULT_HEADER
    copying_title: str = "License for '{{ name }}'"
    copying_footer: str = _DEFAULT_FOOTER
    function_header: str = _DEFAULT_HEADER
    function_title: str = "Function Reference: {{ name }}"
    function_footer: str = _DEFAULT_FOOTER

    @property
    def overview_file(self) -> str:
        return self.overview_filename.replace(" ", "_")

    @property
    def makeinfo(self) -> str:
        if self.makeinfo_program == "makeinfo":
            return os.environ.get("MAKEINFO", "makeinfo")
        return self.makeinfo_program

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None = None) -> HtmlOptions:
        """Build options from a plain mapping.

        Raises:
            OptionsError: on an unknown key or a value of the wrong type
        """
        if mapping is None:
            return cls()
        known = {f.name: f for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in mapping.items():
            known_field = known.get(key)
            if known_field is None:
                raise OptionsError(key, "unrecognized option")
            expected = bool if known_field.type in ("bool", bool) else str
            # bool is an int subclass; require exact types
            if type(value) is not expected:
                raise OptionsError(
                    key, f"expected {expected.__name__}, got {type(value).__name__}"
                )
            values[key] = value
        options = cls(**values)
        if not options.function_dir or "/" in options.function_dir or options.function_dir == "..":
            raise OptionsError("function_dir", "must be a single directory name")
        if not options.overview_file:
            raise OptionsError("overview_filename", "must not be empty")
        return options

    @classmethod
    def from_json_file(cls, path: Path) -> HtmlOptions:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise OptionsError(str(path), f"cannot load options file ({exc})") from exc
        if not isinstance(data, dict):
            raise OptionsError(str(path), "options file must contain a JSON object")
        return cls.from_mapping(data)

    def to_dict(self) -> dict[str, Any]:
        """Section switches and paths, for logging."""
        return {
            "function_dir": self.function_dir,
            "overview_filename": self.overview_file,
            "include_overview": self.include_overview,
            "include_alpha": self.include_alpha,
            "include_package_list_item": self.include_package_list_item,
            "include_package_news": self.include_package_news,
            "include_package_page": self.include_package_page,
            "include_package_license": self.include_package_license,
            "include_demos": self.include_demos,
            "package_doc": self.package_doc,
            "website_files": self.website_files,
        }


__all__ = ["HtmlOptions"]
