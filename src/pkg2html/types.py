from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True)
class RenderOptions:
    """Per-page options handed to the function page renderer.

    - pkgroot: relative prefix from the page back to the function directory root
    - name: qualified function name
    """

    pkgroot: str
    name: str


@dataclass(frozen=True)
class Rendered:
    path: Path


@dataclass(frozen=True)
class NotFound:
    name: str
    reason: str = "not found"


RenderResult = Rendered | NotFound


@dataclass(frozen=True)
class Summary:
    text: str


@dataclass(frozen=True)
class NotDocumented:
    name: str


SummaryResult = Summary | NotDocumented


class PageRenderer(Protocol):
    """Writes the help page of one function.

    Returns NotFound when the function has no help source; any other failure
    is raised and aborts the run.
    """

    def render(self, output_path: Path, options: RenderOptions) -> RenderResult:  # pragma: no cover - typing
        ...


class SummaryExtractor(Protocol):
    """Extracts the first sentence of a function's help text."""

    def first_sentence(self, name: str, max_length: int) -> SummaryResult:  # pragma: no cover - typing
        ...


ProgressCallback = Callable[[str, dict[str, int | str]], None] | None


__all__ = [
    "NotDocumented",
    "NotFound",
    "PageRenderer",
    "ProgressCallback",
    "RenderOptions",
    "RenderResult",
    "Rendered",
    "Summary",
    "SummaryExtractor",
    "SummaryResult",
]
