from pathlib import Path
from typing import Any, Optional

from csvdesk._logging import get_component_logger
from csvdesk.audit.attempt_log import TranslationAttempt, TranslationAttemptLog, parse_attempts
from csvdesk.audit.history import CommandHistoryLog, HistoryEntry, format_entry, parse_entries


def clear_logs_on_startup(attempt_log: Path, history_log: Path, logger: Optional[Any] = None) -> None:
    """Truncate both log files if they exist. Failures are logged, not raised."""
    log = get_component_logger("startup", logger)
    for path in (Path(attempt_log), Path(history_log)):
        if not path.exists():
            log.debug("log_clear_skipped", path=str(path))
            continue
        try:
            path.write_text("", encoding="utf-8")
            log.info("log_cleared", path=str(path))
        except OSError as e:
            log.error("log_clear_failed", path=str(path), error=str(e))


__all__ = [
    "CommandHistoryLog",
    "HistoryEntry",
    "TranslationAttempt",
    "TranslationAttemptLog",
    "clear_logs_on_startup",
    "format_entry",
    "parse_attempts",
    "parse_entries",
]
