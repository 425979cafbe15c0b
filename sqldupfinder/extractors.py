from __future__ import annotations

from typing import Iterator, List

from .models import QueryOccurrence, RawStatement
from .normalize import canonicalize
from .patterns import ACCEPTED_VERBS, SQL_STATEMENT_RX
from .text_utils import line_number_at


def looks_like_statement(candidate: str) -> bool:
    if not candidate:
        return False
    if candidate.endswith(";"):
        return True
    upper = candidate.upper()
    return any(verb in upper for verb in ACCEPTED_VERBS)


def extract_statements(text: str, source: str = "") -> Iterator[RawStatement]:
    for m in SQL_STATEMENT_RX.finditer(text):
        cleaned = m.group(0).strip()
        if not looks_like_statement(cleaned):
            continue
        start = m.start()
        yield RawStatement(
            source=source,
            text=cleaned,
            start=start,
            end=start + len(cleaned),
            line_no=line_number_at(text, start),
        )


def find_sql_queries(text: str) -> List[str]:
    return [stmt.text for stmt in extract_statements(text)]


def extract_occurrences(text: str, source: str) -> List[QueryOccurrence]:
    return [
        QueryOccurrence(
            source=stmt.source,
            line_no=stmt.line_no,
            query=stmt.text,
            normalized=canonicalize(stmt.text),
        )
        for stmt in extract_statements(text, source)
    ]
