"""Default function page renderer and summary extractor.

Both serve plain-text help from a mapping of qualified name to help text,
normally the ``help`` section of the package descriptor. Hosts with their
own help system plug in other PageRenderer / SummaryExtractor objects.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path

from pkg2html.io import write_text
from pkg2html.model.options import HtmlOptions
from pkg2html.render.pages import page_frame
from pkg2html.render.templating import Templates
from pkg2html.types import (
    NotDocumented,
    NotFound,
    Rendered,
    RenderOptions,
    RenderResult,
    Summary,
    SummaryResult,
)

_SENTENCE_END_RE = re.compile(r"[.!?](?=\s|$)")
_WS_RE = re.compile(r"\s+")


def first_sentence(text: str, max_length: int) -> str:
    """First sentence of ``text`` with whitespace collapsed, at most ``max_length`` chars."""
    flat = _WS_RE.sub(" ", text).strip()
    m = _SENTENCE_END_RE.search(flat)
    sentence = flat[: m.end()] if m else flat
    if len(sentence) > max_length:
        sentence = sentence[: max(max_length - 3, 0)].rstrip() + "..."
    return sentence


class HelpTextRenderer:
    def __init__(self, help_texts: Mapping[str, str], options: HtmlOptions, templates: Templates) -> None:
        self.help_texts = help_texts
        self.options = options
        self.templates = templates

    def render(self, output_path: Path, options: RenderOptions) -> RenderResult:
        text = self.help_texts.get(options.name)
        if text is None:
            return NotFound(options.name, "help text not found")
        pkgroot = f"{options.pkgroot}/" if options.pkgroot else ""
        frame = page_frame(self.options, "function", options.name, pkgroot)
        html = self.templates.render(
            "function.html",
            {
                "header": frame.header,
                "footer": frame.footer,
                "name": options.name,
                "help": text,
                "pkgroot": pkgroot,
            },
        )
        write_text(output_path, html, what="function page")
        return Rendered(output_path)


class HelpTextSummaries:
    def __init__(self, help_texts: Mapping[str, str]) -> None:
        self.help_texts = help_texts

    def first_sentence(self, name: str, max_length: int) -> SummaryResult:
        text = self.help_texts.get(name, "")
        if not text.strip():
            return NotDocumented(name)
        return Summary(first_sentence(text, max_length))


__all__ = ["HelpTextRenderer", "HelpTextSummaries", "first_sentence"]
