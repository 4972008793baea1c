"""Command-to-SQL cache kept in a plain text file.

The file lists candidate commands one per line. Once a command has been
translated and executed successfully, its SQL is inserted on the line
directly below it, wrapped in square brackets::

    # people table
    show all rows
    [SELECT * FROM "people"]
    count rows

Lines starting with ``#`` are comments. Matching is on the trimmed line and
the first matching line wins; later duplicates are never addressed. SQL is
only ever attached to a command already in the file, and an existing SQL
line is never replaced.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from csvdesk._logging import get_component_logger
from csvdesk.errors import CacheNotFoundError

_LINE_BREAKS = re.compile(r"\s*[\r\n]+\s*")


def _is_sql_line(stripped: str) -> bool:
    return stripped.startswith("[") and stripped.endswith("]")


def _is_command_line(stripped: str) -> bool:
    return bool(stripped) and not stripped.startswith("#") and not stripped.startswith("[")


@dataclass
class _ParsedFile:
    lines: List[str]
    index: Dict[str, int]

    def sql_after(self, line_no: int) -> Optional[str]:
        if line_no + 1 >= len(self.lines):
            return None
        following = self.lines[line_no + 1].strip()
        if _is_sql_line(following):
            return following[1:-1]
        return None


def _parse(text: str) -> _ParsedFile:
    lines = text.split("\n")
    index: Dict[str, int] = {}
    for i, line in enumerate(lines):
        stripped = line.strip()
        if _is_command_line(stripped):
            index.setdefault(stripped, i)
    return _ParsedFile(lines=lines, index=index)


class CommandCache:
    """File-backed command -> SQL store.

    The file is re-read on every call, so edits made by hand between
    commands are picked up. Read-modify-write is not locked; callers run
    one command at a time.
    """

    def __init__(self, path: Path, logger: Optional[Any] = None):
        self.path = Path(path)
        self._logger = get_component_logger("CommandCache", logger)

    def _load(self) -> Optional[_ParsedFile]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        return _parse(text)

    def _load_for_read(self) -> Optional[_ParsedFile]:
        """Like _load, but an unreadable file reads as no cache."""
        try:
            return self._load()
        except (OSError, UnicodeDecodeError) as e:
            self._logger.warning("cache_read_failed", path=str(self.path), error=str(e))
            return None

    def commands(self) -> List[str]:
        parsed = self._load_for_read()
        if parsed is None:
            return []
        return sorted(parsed.index, key=parsed.index.__getitem__)

    def contains(self, command: str) -> bool:
        parsed = self._load_for_read()
        return parsed is not None and command.strip() in parsed.index

    def lookup(self, command: str) -> Optional[str]:
        """Return the SQL stored for ``command``, or None."""
        parsed = self._load_for_read()
        if parsed is None:
            return None
        line_no = parsed.index.get(command.strip())
        if line_no is None:
            return None
        sql = parsed.sql_after(line_no)
        if sql is not None:
            self._logger.debug("cache_hit", command=command, line=line_no + 1)
        return sql

    def store(self, command: str, sql: str) -> bool:
        """Attach ``sql`` below the first line matching ``command``.

        Returns True when a SQL line was inserted and False when the command
        already had one (the existing SQL is kept).

        Raises:
            CacheNotFoundError: the file or the command line does not exist.
        """
        key = command.strip()
        parsed = self._load()
        if parsed is None or key not in parsed.index:
            raise CacheNotFoundError(key, str(self.path))

        line_no = parsed.index[key]
        existing = parsed.sql_after(line_no)
        if existing is not None:
            self._logger.info("cache_store_skipped", command=key, existing_sql=existing)
            return False

        single_line_sql = _LINE_BREAKS.sub(" ", sql.strip())
        parsed.lines.insert(line_no + 1, f"[{single_line_sql}]")
        self.path.write_text("\n".join(parsed.lines), encoding="utf-8")
        self._logger.info("cache_stored", command=key, line=line_no + 2)
        return True
