from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Sequence

from .console import RichLogger
from .models import DuplicateGroup, QueryOccurrence
from .text_utils import trim_snippet

NO_DUPLICATES_MESSAGE = "No duplicate queries found"


def aggregate(occurrences: Iterable[QueryOccurrence]) -> Dict[str, List[QueryOccurrence]]:
    grouped: Dict[str, List[QueryOccurrence]] = {}
    for occ in occurrences:
        grouped.setdefault(occ.normalized, []).append(occ)
    return {key: occs for key, occs in grouped.items() if len(occs) > 1}


def ranked_groups(groups: Mapping[str, Sequence[QueryOccurrence]]) -> List[DuplicateGroup]:
    ranked = [DuplicateGroup(normalized=key, occurrences=tuple(occs)) for key, occs in groups.items()]
    ranked.sort(key=lambda g: (-g.count, g.normalized))
    return ranked


def present(groups: Mapping[str, Sequence[QueryOccurrence]]) -> str:
    if not groups:
        return NO_DUPLICATES_MESSAGE
    lines = [f"Found {len(groups)} duplicate queries"]
    for group in ranked_groups(groups):
        lines.append(f"Count: {group.count} -- Normalized Query:\t {group.normalized}")
    return "\n".join(lines)


def summarize(occurrences: Sequence[QueryOccurrence], groups: Mapping[str, Sequence[QueryOccurrence]]) -> Dict[str, int]:
    return {
        "statements_total": len(occurrences),
        "statements_unique": len({occ.normalized for occ in occurrences}),
        "duplicate_groups": len(groups),
        "duplicate_statements": sum(len(occs) for occs in groups.values()),
    }


class ResultWriter:
    def __init__(self, logger: RichLogger):
        self.logger = logger

    def write_json(
        self,
        path: Path,
        groups: Mapping[str, Sequence[QueryOccurrence]],
        summary: Dict[str, int],
        run_metadata: Dict[str, object],
    ) -> None:
        payload = {
            "summary": summary,
            "groups": [
                {
                    "normalized": group.normalized,
                    "count": group.count,
                    "sources": group.sources,
                    "occurrences": [
                        {
                            "source": occ.source,
                            "line_no": occ.line_no,
                            "snippet": trim_snippet(occ.query),
                        }
                        for occ in sorted(group.occurrences, key=lambda o: (o.source, o.line_no))
                    ],
                }
                for group in ranked_groups(groups)
            ],
            "run": run_metadata,
        }
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
        tmp_path.replace(path)
        self.logger.done(f"JSON report written to: {path}")
