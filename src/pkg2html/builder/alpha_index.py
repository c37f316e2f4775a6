"""Alphabetical cross-reference index.

The index is a nested mapping keyed first by initial letter, then by the
namespace and class segments of each documented function, ending in the
function's leaf name. Leaves hold the (category, function) identifiers of
the functions at that path. The emitter mirrors the tree on disk: one
directory per internal node and one flat listing file per leaf, holding one
line (the function's first help sentence) per identifier.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from pathlib import Path

from pkg2html.errors import AlphaIndexCollisionError
from pkg2html.io import ensure_dir, write_text
from pkg2html.model.records import FunctionId
from pkg2html.names import ResolvedPath

logger = logging.getLogger(__name__)


class AlphaLeaf:
    """Identifiers of every function listed at one index path, first seen first."""

    __slots__ = ("ids",)

    def __init__(self, fid: FunctionId) -> None:
        self.ids: list[FunctionId] = [fid]

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"AlphaLeaf({self.ids!r})"


AlphaNode = dict[str, "AlphaNode | AlphaLeaf"]


class AlphaIndex:
    def __init__(self) -> None:
        self.root: AlphaNode = {}

    def add(self, path: ResolvedPath, fid: FunctionId) -> None:
        """Insert ``fid`` under ``(initial, *segments)``.

        A second function on an identical key is appended to the same leaf
        and logged. A key that must be both a leaf and a subtree raises.
        """
        key = (path.initial, *path.segments)
        node = self.root
        for depth, segment in enumerate(key[:-1]):
            child = node.setdefault(segment, {})
            if isinstance(child, AlphaLeaf):
                raise AlphaIndexCollisionError(key[: depth + 1])
            node = child

        existing = node.get(key[-1])
        if existing is None:
            node[key[-1]] = AlphaLeaf(fid)
        elif isinstance(existing, AlphaLeaf):
            logger.warning(
                "alphabetical index entry '%s' listed more than once; appending %s",
                "/".join(key),
                path.name,
            )
            existing.ids.append(fid)
        else:
            raise AlphaIndexCollisionError(key)

    def leaves(self) -> Iterator[tuple[tuple[str, ...], AlphaLeaf]]:
        yield from _walk(self.root, ())

    def __len__(self) -> int:
        return sum(1 for _ in self.leaves())

    def __bool__(self) -> bool:
        return bool(self.root)


def _walk(node: AlphaNode, prefix: tuple[str, ...]) -> Iterator[tuple[tuple[str, ...], AlphaLeaf]]:
    for name, child in node.items():
        if isinstance(child, AlphaLeaf):
            yield (*prefix, name), child
        else:
            yield from _walk(child, (*prefix, name))


def write_alpha_tree(
    index: AlphaIndex,
    out_dir: Path,
    sentences: Mapping[FunctionId, str],
) -> int:
    """Materialize ``index`` below ``out_dir``; returns the number of files written."""
    ensure_dir(out_dir)
    return _write_node(index.root, out_dir, sentences)


def _write_node(node: AlphaNode, path: Path, sentences: Mapping[FunctionId, str]) -> int:
    written = 0
    for name, child in node.items():
        target = path / name
        if isinstance(child, AlphaLeaf):
            lines = "".join(f"{sentences[fid]}\n" for fid in child.ids)
            write_text(target, lines, what="alphabet database file")
            written += 1
        else:
            ensure_dir(target)
            written += _write_node(child, target, sentences)
    return written


__all__ = ["AlphaIndex", "AlphaLeaf", "write_alpha_tree"]
