from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RawStatement:
    source: str
    text: str
    start: int
    end: int
    line_no: int


@dataclass(frozen=True)
class QueryOccurrence:
    source: str
    line_no: int
    query: str
    normalized: str


@dataclass(frozen=True)
class DuplicateGroup:
    normalized: str
    occurrences: tuple[QueryOccurrence, ...]

    @property
    def count(self) -> int:
        return len(self.occurrences)

    @property
    def sources(self) -> list[str]:
        return sorted({occ.source for occ in self.occurrences})
