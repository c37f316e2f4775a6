"""Qualified function names and the page paths derived from them.

A qualified name is ``ns1.ns2.@Class/method``: zero or more dotted namespace
segments, an optional class segment that keeps its ``@`` marker, and exactly
one leaf name. Each function page lives at ``ns1/ns2/@Class/method.html``
below the function directory.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from pkg2html.errors import InvalidNameError

CLASS_MARKER = "@"
PAGE_EXTENSION = ".html"

_NON_ALPHA_RE = re.compile(r"[^a-zA-Z]")


@dataclass(frozen=True)
class ResolvedPath:
    """Page location of one qualified name.

    - namespaces: dotted namespace segments, outermost first
    - class_segment: class directory name including its marker, or None
    - leaf: function or method name
    """

    name: str
    namespaces: tuple[str, ...]
    class_segment: str | None
    leaf: str

    @property
    def directories(self) -> tuple[str, ...]:
        if self.class_segment is None:
            return self.namespaces
        return (*self.namespaces, self.class_segment)

    @property
    def segments(self) -> tuple[str, ...]:
        return (*self.directories, self.leaf)

    @property
    def root_depth(self) -> int:
        """Number of ``..`` hops from the page back to the function-directory root."""
        return 1 + len(self.namespaces) + (1 if self.class_segment is not None else 0)

    @property
    def root_prefix(self) -> str:
        return "/".join([".."] * self.root_depth)

    @property
    def subpath(self) -> str:
        """Page path relative to the function directory, ``/`` separated."""
        return "/".join((*self.directories, f"{self.leaf}{PAGE_EXTENSION}"))

    @property
    def initial(self) -> str:
        return first_letter(self.leaf)


def resolve_name(name: str) -> ResolvedPath:
    """Parse a qualified function name into its page location.

    Raises:
        InvalidNameError: if the leaf or any segment is empty, a class
            segment is not followed by ``/<method>``, or a segment holds a
            path separator.
    """
    if not name or not name.strip():
        raise InvalidNameError(name, "empty name")

    *namespaces, tail = name.split(".")
    if any(not segment for segment in namespaces):
        raise InvalidNameError(name, "empty namespace segment")

    class_segment: str | None = None
    leaf = tail
    if tail.startswith(CLASS_MARKER):
        class_segment, sep, leaf = tail.partition("/")
        if not sep:
            raise InvalidNameError(name, "class segment without a method name")
        if class_segment == CLASS_MARKER:
            raise InvalidNameError(name, "empty class name")

    if not leaf:
        raise InvalidNameError(name, "empty leaf name")
    for segment in (*namespaces, class_segment or "", leaf):
        if "/" in segment or "\\" in segment:
            raise InvalidNameError(name, f"path separator in segment '{segment}'")
        if segment in (".", ".."):
            raise InvalidNameError(name, f"relative segment '{segment}'")

    return ResolvedPath(
        name=name,
        namespaces=tuple(namespaces),
        class_segment=class_segment,
        leaf=leaf,
    )


def first_letter(leaf: str) -> str:
    """Lower-cased first alphabetic character of ``leaf``; ``_`` if it has none."""
    for char in leaf:
        if char.isalpha():
            return char.lower()
    return "_"


def category_anchor(category: str) -> str:
    """Anchor for a category heading: every non-letter becomes ``_``."""
    return _NON_ALPHA_RE.sub("_", category)


__all__ = [
    "CLASS_MARKER",
    "PAGE_EXTENSION",
    "ResolvedPath",
    "category_anchor",
    "first_letter",
    "resolve_name",
]
