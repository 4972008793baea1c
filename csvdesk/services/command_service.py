"""CommandService: run a natural-language command end to end.

translate -> execute -> remember SQL -> record history

The translator never fails on model problems, so the errors that reach the
caller are schema errors and SQL execution errors. Execution errors are
written to the command history before being re-raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from csvdesk._logging import get_component_logger
from csvdesk.audit.history import CommandHistoryLog, HistoryEntry
from csvdesk.cache.command_cache import CommandCache
from csvdesk.database.types import ExecutionResult, RelationalStore
from csvdesk.errors import SQLExecutionError
from csvdesk.translation.orchestrator import SqlTranslator, TranslationOutcome


@dataclass
class CommandRunResult:
    command: str
    outcome: TranslationOutcome
    result: ExecutionResult
    cached: bool = False

    @property
    def sql(self) -> str:
        return self.outcome.sql


class CommandService:
    def __init__(
        self,
        translator: SqlTranslator,
        store: RelationalStore,
        cache: Optional[CommandCache] = None,
        history: Optional[CommandHistoryLog] = None,
        logger: Optional[Any] = None,
    ):
        self.translator = translator
        self.store = store
        self.cache = cache
        self.history = history
        self._logger = get_component_logger("CommandService", logger)

    async def run(self, command: str, table_name: str) -> CommandRunResult:
        text = command.strip()
        schema = await self.store.get_schema(table_name)
        outcome = await self.translator.translate(text, table_name, schema)

        try:
            result = await self.store.execute_sql(outcome.sql)
        except SQLExecutionError as e:
            self._logger.error("command_execution_failed", command=text, sql=outcome.sql, error=str(e))
            self._record(HistoryEntry.now(natural_language=text, sql=outcome.sql, error=str(e)))
            raise

        cached = self._remember(text, outcome)
        self._record(
            HistoryEntry.now(natural_language=text, sql=outcome.sql, result=result.summary())
        )
        self._logger.info(
            "command_executed",
            command=text,
            source=outcome.source.value,
            result=result.summary(),
        )
        return CommandRunResult(command=text, outcome=outcome, result=result, cached=cached)

    def _remember(self, text: str, outcome: TranslationOutcome) -> bool:
        """Attach freshly translated SQL to a command listed in the cache file."""
        if self.cache is None or outcome.from_cache:
            return False
        if not self.cache.contains(text):
            return False
        return self.cache.store(text, outcome.sql)

    def _record(self, entry: HistoryEntry) -> None:
        if self.history is not None:
            self.history.append(entry)
