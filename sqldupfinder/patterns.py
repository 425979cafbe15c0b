from __future__ import annotations

import re

# Whitespace as the statement text sees it: no vertical tab, no unicode spaces.
WS = r"[\t\n\f\r ]"

ANY_CHARS = r"[\s\S]+?"
STATEMENT_END = r"(?:;|\Z)"

STATEMENT_ANCHORS = (
    rf"SELECT{WS}+{ANY_CHARS}(?:FROM{ANY_CHARS})?",
    rf"INSERT{WS}+INTO{ANY_CHARS}",
    rf"UPDATE{WS}+\w+{WS}+SET{ANY_CHARS}",
    rf"DELETE{WS}+FROM{ANY_CHARS}",
    rf"CREATE{WS}+(?:TABLE|DATABASE|INDEX){ANY_CHARS}",
    rf"ALTER{WS}+TABLE{ANY_CHARS}",
    rf"DROP{WS}+(?:TABLE|DATABASE){ANY_CHARS}",
    rf"TRUNCATE{WS}+TABLE{ANY_CHARS}",
)

SQL_STATEMENT_RX = re.compile(rf"(?:{'|'.join(STATEMENT_ANCHORS)}){STATEMENT_END}", re.IGNORECASE | re.ASCII)

ACCEPTED_VERBS = ("SELECT", "INSERT", "UPDATE")

WHITESPACE_RUN_RX = re.compile(rf"{WS}+")

CANONICAL_RULES = (
    (re.compile(rf"{WS}*={WS}*"), " = "),
    (re.compile(rf"{WS}*,{WS}*"), ", "),
    (re.compile(rf"{WS}+"), " "),
    (re.compile(r"[0-9]+"), "N"),
    (re.compile(r"'[^']*'"), "S"),
    (re.compile(r'"[^"]*"'), "S"),
    (re.compile(rf"{WS}*\({WS}*"), " ( "),
    (re.compile(rf"{WS}*\){WS}*"), " ) "),
)
