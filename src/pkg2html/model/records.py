"""Per-function results of the page tree pass."""

from __future__ import annotations

from dataclasses import dataclass, field

from pkg2html.names import ResolvedPath

NOT_DOCUMENTED = "Not documented"

# (category index, function index) into the descriptor's categories
FunctionId = tuple[int, int]


@dataclass(frozen=True, slots=True)
class FunctionRecord:
    name: str
    path: ResolvedPath
    implemented: bool
    link: str  # relative to the package directory, "" if not implemented
    first_sentence: str  # summary, NOT_DOCUMENTED, or "" if not implemented


@dataclass(slots=True)
class PageTree:
    """Records in descriptor order, one list per category."""

    function_dir: str
    records: list[list[FunctionRecord]] = field(default_factory=list)

    def record(self, fid: FunctionId) -> FunctionRecord:
        k, j = fid
        return self.records[k][j]

    @property
    def links(self) -> dict[FunctionId, str]:
        return {
            (k, j): rec.link
            for k, recs in enumerate(self.records)
            for j, rec in enumerate(recs)
        }

    @property
    def sentences(self) -> dict[FunctionId, str]:
        return {
            (k, j): rec.first_sentence
            for k, recs in enumerate(self.records)
            for j, rec in enumerate(recs)
        }

    @property
    def implemented_count(self) -> int:
        return sum(rec.implemented for recs in self.records for rec in recs)


__all__ = ["NOT_DOCUMENTED", "FunctionId", "FunctionRecord", "PageTree"]
