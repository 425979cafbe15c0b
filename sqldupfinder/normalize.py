from __future__ import annotations

from .patterns import CANONICAL_RULES, WHITESPACE_RUN_RX


def canonicalize(raw: str) -> str:
    normalized = WHITESPACE_RUN_RX.sub(" ", raw)
    normalized = normalized.strip()
    normalized = normalized.lower()
    # Literal substitution runs on collapsed text; paren spacing comes last.
    for rx, replacement in CANONICAL_RULES:
        normalized = rx.sub(replacement, normalized)
    return normalized


def normalize_extensions(raw: str) -> list[str]:
    extensions = []
    seen = set()
    for part in raw.split(","):
        value = part.strip().lower()
        if not value:
            continue
        if not value.startswith("."):
            value = "." + value
        if value in seen:
            continue
        seen.add(value)
        extensions.append(value)
    return extensions


def normalize_dir_names(raw: str) -> list[str]:
    names = []
    seen = set()
    for part in raw.split(","):
        value = part.strip().strip("/\\")
        if not value or value in seen:
            continue
        seen.add(value)
        names.append(value)
    return names
