"""
Deterministic natural-language to SQL mapping used when no model answers.

Rules are checked in a fixed order on the lowercased command and the first
one that applies wins:

    "show all" / "select all" / "get all"  -> SELECT * FROM "<table>"
    "count"                                -> SELECT COUNT(*) FROM "<table>"
    "where"                                -> WHERE "<col>" = '<value>' when a
                                              ``where <col> = <value>`` phrase
                                              is found, else WHERE 1=1
    anything else                          -> SELECT * FROM "<table>"

``WHERE 1=1`` is valid SQL that filters nothing. It marks a predicate the
rules could not read, so the query returns every row.
"""

import re
from typing import Any, Iterable, Optional

_SELECT_ALL_PHRASES = ("show all", "select all", "get all")
_WHERE_EQUALS_RE = re.compile(r"""where\s+(\w+)\s*=\s*['"]?([^'"]+)['"]?""", re.IGNORECASE)


def quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def fallback_sql(text: str, table_name: str, schema: Optional[Iterable[Any]] = None) -> str:
    """Translate ``text`` with the fixed rule table. Never fails."""
    lower = (text or "").lower()
    table = quote_identifier(table_name)

    if any(phrase in lower for phrase in _SELECT_ALL_PHRASES):
        return f"SELECT * FROM {table}"

    if "count" in lower:
        return f"SELECT COUNT(*) FROM {table}"

    if "where" in lower:
        match = _WHERE_EQUALS_RE.search(lower)
        if match:
            column, value = match.groups()
            return f"SELECT * FROM {table} WHERE {quote_identifier(column)} = '{value}'"
        return f"SELECT * FROM {table} WHERE 1=1"

    return f"SELECT * FROM {table}"
