"""History of commands run against the database.

Block format, one per command::

    [2024-05-01 12:00:00]
    NL: show all rows
    SQL: SELECT * FROM "people"
    RESULT: 3 rows
    ---

Lines without a marker continue the last field that was set, so a long
SQL statement may wrap across lines.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional

from csvdesk._logging import get_component_logger

_TIMESTAMP_LINE = re.compile(r"^\[(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})\]")


@dataclass
class HistoryEntry:
    timestamp: str
    natural_language: str = ""
    sql: str = ""
    error: Optional[str] = None
    result: Optional[str] = None
    line_number: Optional[int] = None

    @classmethod
    def now(cls, **fields: Any) -> "HistoryEntry":
        stamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        return cls(timestamp=stamp, **fields)


def format_entry(entry: HistoryEntry) -> str:
    out = f"[{entry.timestamp}]\n"
    if entry.natural_language:
        out += f"NL: {entry.natural_language}\n"
    if entry.sql:
        out += f"SQL: {entry.sql}\n"
    if entry.error:
        out += f"ERROR: {entry.error}\n"
    if entry.result:
        out += f"RESULT: {entry.result}\n"
    out += "---\n"
    return out


def parse_entries(content: str) -> List[HistoryEntry]:
    if not content or not content.strip():
        return []

    entries: List[HistoryEntry] = []
    current: Optional[HistoryEntry] = None

    for i, raw_line in enumerate(content.split("\n")):
        line = raw_line.strip()
        stamp = _TIMESTAMP_LINE.match(line)
        if stamp:
            if current:
                entries.append(current)
            current = HistoryEntry(timestamp=stamp.group(1), line_number=i + 1)
            continue
        if current is None:
            continue

        if line.startswith("NL:"):
            current.natural_language = line[3:].strip()
        elif line.startswith("SQL:"):
            current.sql = line[4:].strip()
        elif line.startswith("ERROR:"):
            current.error = line[6:].strip()
        elif line.startswith("RESULT:"):
            current.result = line[7:].strip()
        elif line and not line.startswith("---"):
            # Continuation of the last field that was set
            if current.result:
                current.result += " " + line
            elif current.error:
                current.error += " " + line
            elif current.sql:
                current.sql += " " + line
            elif not current.natural_language:
                current.natural_language = line

    if current:
        entries.append(current)
    return entries


class CommandHistoryLog:
    def __init__(self, path: Path, logger: Optional[Any] = None):
        self.path = Path(path)
        self._logger = get_component_logger("CommandHistoryLog", logger)

    def load(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return ""

    def entries(self) -> List[HistoryEntry]:
        return parse_entries(self.load())

    def append(self, entry: HistoryEntry) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(format_entry(entry))
        except OSError as e:
            self._logger.error("history_write_failed", path=str(self.path), error=str(e))
            return False
        return True

    def clear(self) -> None:
        if self.path.exists():
            self.path.write_text("", encoding="utf-8")
