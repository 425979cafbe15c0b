from __future__ import annotations

import re

SNIPPET_WS_RX = re.compile(r"\s+")


def trim_snippet(text: str, max_len: int = 240) -> str:
    value = SNIPPET_WS_RX.sub(" ", text).strip()
    if len(value) <= max_len:
        return value
    return value[: max_len - 3] + "..."


def line_number_at(text: str, offset: int) -> int:
    return text.count("\n", 0, offset) + 1
