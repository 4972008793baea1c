"""Append-only audit file of every model translation attempt.

Each attempt is one block::

    [2024-05-01 12:00:00]
    PROMPT:
    { ...request payload... }
    RESPONSE:
    { ...raw reply... }
    ---

Failed attempts carry ``ERROR: <message>`` in place of the response. The
pipeline only ever appends; the file is truncated at application startup.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, List, Optional

from csvdesk._logging import get_component_logger
from csvdesk.config.constants import FALLBACK_NOTICE

SEPARATOR = "---"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
_TIMESTAMP_LINE = re.compile(r"^\[(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})\]$")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TranslationAttempt:
    timestamp: str
    prompt: str
    response: Optional[str] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def is_fallback_notice(self) -> bool:
        return bool(self.error and self.error.startswith(FALLBACK_NOTICE))


class TranslationAttemptLog:
    def __init__(
        self,
        path: Path,
        clock: Callable[[], datetime] = _utc_now,
        logger: Optional[Any] = None,
    ):
        self.path = Path(path)
        self._clock = clock
        self._logger = get_component_logger("TranslationAttemptLog", logger)

    def format_attempt(self, prompt: str, response: Optional[str] = None, error: Optional[str] = None) -> str:
        lines = [f"[{self._clock().strftime(TIMESTAMP_FORMAT)}]", "PROMPT:", prompt]
        if error is not None:
            lines.append(f"ERROR: {error}")
        else:
            lines.extend(["RESPONSE:", response or ""])
        lines.append(SEPARATOR)
        return "\n".join(lines) + "\n"

    def append(self, prompt: str, response: Optional[str] = None, error: Optional[str] = None) -> bool:
        """Append one attempt block. Returns False if the file could not be written."""
        block = self.format_attempt(prompt, response=response, error=error)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(block)
        except OSError as e:
            self._logger.error("attempt_log_write_failed", path=str(self.path), error=str(e))
            return False
        return True

    def append_fallback_notice(self, prompt: str, reason: str) -> bool:
        return self.append(prompt, error=f"{FALLBACK_NOTICE}: {reason}")

    def read(self) -> str:
        if not self.path.exists():
            return ""
        return self.path.read_text(encoding="utf-8")

    def clear(self) -> None:
        if self.path.exists():
            self.path.write_text("", encoding="utf-8")

    def entries(self) -> List[TranslationAttempt]:
        return parse_attempts(self.read())


def parse_attempts(content: str) -> List[TranslationAttempt]:
    """Parse attempt blocks back into records. Unrecognised text is skipped."""
    attempts: List[TranslationAttempt] = []
    timestamp: Optional[str] = None
    section: Optional[str] = None
    prompt: List[str] = []
    response: List[str] = []
    error: Optional[str] = None

    for line in content.splitlines():
        stamp = _TIMESTAMP_LINE.match(line)
        if stamp and section is None:
            timestamp, section = stamp.group(1), "header"
            prompt, response, error = [], [], None
            continue
        if section is None:
            continue

        if line == SEPARATOR:
            attempts.append(
                TranslationAttempt(
                    timestamp=timestamp or "",
                    prompt="\n".join(prompt),
                    response="\n".join(response) if error is None else None,
                    error=error,
                )
            )
            section = None
        elif line == "PROMPT:" and section == "header":
            section = "prompt"
        elif line == "RESPONSE:" and section == "prompt":
            section = "response"
        elif line.startswith("ERROR: ") and section == "prompt":
            error = line[len("ERROR: "):]
            section = "error"
        elif section == "prompt":
            prompt.append(line)
        elif section == "response":
            response.append(line)
        elif section == "error":
            error = f"{error}\n{line}"

    return attempts
