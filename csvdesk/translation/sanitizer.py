"""Recover a bare SQL statement from a model reply.

Models are told not to use markdown, but small local models often wrap the
statement in a fenced code block anyway. ``sanitize`` peels the fences off
in a fixed order. Later stages only see what earlier stages left behind,
so the order below is part of the contract:

1. leading fence opener (`````sql`` or bare, optional newline)
2. trailing fence closer
3. stray backticks at either end
4. if a fence is still present: the interior of the first fenced block,
   otherwise the text with every backtick removed
5. if nothing is left: the original reply, trimmed

The result never starts or ends with a backtick.
"""

import re

_OPEN_SQL_FENCE = re.compile(r"^```\s*sql\s*\n?", re.IGNORECASE)
_OPEN_FENCE = re.compile(r"^```\s*\n?")
_CLOSE_FENCE = re.compile(r"\n?```\s*$")
_EDGE_BACKTICKS = re.compile(r"^`+|`+$")
_FENCED_BLOCK = re.compile(r"```(?:sql)?\s*\n?(.*?)\n?```", re.IGNORECASE | re.DOTALL)

# Characters removed from both ends of the final result
_EDGE_CHARS = "` \t\r\n\f\v"


def _strip_fences(text: str) -> str:
    cleaned = _OPEN_SQL_FENCE.sub("", text, count=1)
    cleaned = _OPEN_FENCE.sub("", cleaned, count=1)
    cleaned = _CLOSE_FENCE.sub("", cleaned, count=1)
    cleaned = _EDGE_BACKTICKS.sub("", cleaned).strip()

    if "```" in cleaned or cleaned.startswith("`"):
        match = _FENCED_BLOCK.search(cleaned)
        if match and match.group(1):
            cleaned = match.group(1).strip()
        else:
            cleaned = cleaned.replace("`", "").strip()
    return cleaned


def sanitize(raw: str) -> str:
    """Return the SQL statement contained in ``raw``. Never raises."""
    if not isinstance(raw, str):
        raw = "" if raw is None else str(raw)
    original = raw.strip()

    cleaned = _strip_fences(original)
    if not cleaned:
        cleaned = original
    return cleaned.strip(_EDGE_CHARS)
