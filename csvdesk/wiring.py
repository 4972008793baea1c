"""Build the command pipeline from configuration.

Usage:
    from csvdesk.wiring import create_pipeline, startup

    pipeline = create_pipeline()
    status = await startup(pipeline)
    async with pipeline.store:
        run = await pipeline.commands.run("show all rows", "people")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from csvdesk._logging import configure_logging, get_component_logger
from csvdesk.audit import CommandHistoryLog, TranslationAttemptLog, clear_logs_on_startup
from csvdesk.cache.command_cache import CommandCache
from csvdesk.config.constants import HEALTH_CHECK_TIMEOUT, PROBE_TIMEOUT, TRANSLATION_TIMEOUT
from csvdesk.config.settings import (
    LLMConnectionConfig,
    PipelinePaths,
    clear_logs_on_startup_enabled,
    log_level_from_env,
)
from csvdesk.connection import ConnectionStatus, determine_connection
from csvdesk.database.sqlite_store import SQLiteStore
from csvdesk.services.command_service import CommandService
from csvdesk.translation.client import TranslationClient
from csvdesk.translation.orchestrator import SqlTranslator
from llmlink.adapters.ollama_chat import OllamaChatAdapter
from llmlink.health import HttpHealthProbe


@dataclass
class Pipeline:
    config: LLMConnectionConfig
    paths: PipelinePaths
    prober: HttpHealthProbe
    adapter: OllamaChatAdapter
    attempt_log: TranslationAttemptLog
    history: CommandHistoryLog
    cache: CommandCache
    translator: SqlTranslator
    store: SQLiteStore
    commands: CommandService


def create_pipeline(
    config: Optional[LLMConnectionConfig] = None,
    paths: Optional[PipelinePaths] = None,
    logger: Optional[Any] = None,
) -> Pipeline:
    config = config or LLMConnectionConfig.from_env()
    paths = paths or PipelinePaths.from_env()

    prober = HttpHealthProbe(timeout=PROBE_TIMEOUT)
    adapter = OllamaChatAdapter(
        timeout=TRANSLATION_TIMEOUT, health_check_timeout=HEALTH_CHECK_TIMEOUT
    )
    attempt_log = TranslationAttemptLog(paths.attempt_log, logger=logger)
    history = CommandHistoryLog(paths.history_log, logger=logger)
    cache = CommandCache(paths.commands_file, logger=logger)
    translator = SqlTranslator(
        config=config,
        client=TranslationClient(adapter, attempt_log, logger=logger),
        prober=prober,
        attempt_log=attempt_log,
        cache=cache,
        logger=logger,
    )
    store = SQLiteStore(str(paths.database))
    commands = CommandService(translator, store, cache=cache, history=history, logger=logger)

    return Pipeline(
        config=config,
        paths=paths,
        prober=prober,
        adapter=adapter,
        attempt_log=attempt_log,
        history=history,
        cache=cache,
        translator=translator,
        store=store,
        commands=commands,
    )


async def startup(pipeline: Pipeline, logger: Optional[Any] = None) -> ConnectionStatus:
    """Set up logging, clear the logs (unless disabled) and check the model server."""
    configure_logging(log_level_from_env())
    log = get_component_logger("startup", logger)
    if clear_logs_on_startup_enabled():
        clear_logs_on_startup(pipeline.paths.attempt_log, pipeline.paths.history_log, logger=logger)
    status = await determine_connection(pipeline.config, pipeline.prober, pipeline.adapter, logger=logger)
    if status.suggestion:
        log.warning("llm_connection_suggestion", suggestion=status.suggestion)
    return status
