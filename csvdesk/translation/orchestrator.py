"""
Natural-language command to SQL, fail-soft.

Resolution order for one command:

    cache hit                      -> cached SQL, no network
    primary host   probe + model   -> sanitized model SQL
    127.0.0.1      probe + model   -> only when the host was defaulted
    pattern rules                  -> always produces SQL

Model failures never reach the caller. Each one is written to the attempt
log, and dropping to the pattern rules adds a fallback notice naming the
last error and the primary host's probe result. Schema errors raise before
any network traffic.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional

from csvdesk._logging import get_component_logger
from csvdesk.audit.attempt_log import TranslationAttemptLog
from csvdesk.cache.command_cache import CommandCache
from csvdesk.config.settings import LLMConnectionConfig
from csvdesk.schema import normalize_schema
from csvdesk.translation.client import TranslationClient
from csvdesk.translation.pattern_fallback import fallback_sql
from csvdesk.translation.prompts import (
    build_system_prompt,
    build_translation_request,
    render_prompt_for_log,
)
from llmlink.endpoints import EndpointSpec, ProbeResult
from llmlink.health import HealthProbe
from llmlink.types import ErrorKind, TranslationError


class SqlSource(str, Enum):
    CACHE = "cache"
    LLM = "llm"
    LLM_FALLBACK_HOST = "llm_fallback_host"
    PATTERN = "pattern"


@dataclass(frozen=True)
class TranslationOutcome:
    sql: str
    source: SqlSource
    host: Optional[str] = None

    @property
    def from_cache(self) -> bool:
        return self.source == SqlSource.CACHE


@dataclass
class _HostAttempt:
    sql: Optional[str] = None
    error: Optional[TranslationError] = None
    probe: Optional[ProbeResult] = None

    @property
    def probe_failed(self) -> bool:
        return self.probe is not None and not self.probe.reachable


def _probe_error(endpoint: EndpointSpec, probe: ProbeResult) -> TranslationError:
    kind = probe.error_kind or ErrorKind.OTHER
    return TranslationError(
        kind,
        f"Probe of {endpoint.label} failed: {probe.describe()}",
        status_code=probe.status_code,
    )


class SqlTranslator:
    def __init__(
        self,
        config: LLMConnectionConfig,
        client: TranslationClient,
        prober: HealthProbe,
        attempt_log: TranslationAttemptLog,
        cache: Optional[CommandCache] = None,
        logger: Optional[Any] = None,
    ):
        self.config = config
        self.client = client
        self.prober = prober
        self.attempt_log = attempt_log
        self.cache = cache
        self._logger = get_component_logger("SqlTranslator", logger)

    async def translate(self, text: str, table_name: str, schema: Iterable[Any]) -> TranslationOutcome:
        columns = normalize_schema(schema)

        if self.cache is not None:
            cached = self.cache.lookup(text)
            if cached is not None:
                self._logger.info("translation_cache_hit", command=text)
                return TranslationOutcome(sql=cached, source=SqlSource.CACHE)

        system_prompt = build_system_prompt(table_name, columns)
        prompt_for_log = render_prompt_for_log(
            build_translation_request(self.config.model, system_prompt, text)
        )

        primary = self.config.primary_endpoint
        first = await self._try_host(primary, system_prompt, text, prompt_for_log)
        if first.sql is not None:
            return TranslationOutcome(sql=first.sql, source=SqlSource.LLM, host=primary.host)

        last_error = first.error
        fallback = self.config.fallback_endpoint
        if fallback is not None and (first.probe_failed or last_error.is_connectivity):
            self._logger.info(
                "trying_fallback_host",
                failed=primary.label,
                fallback=fallback.label,
                error=last_error.message,
            )
            second = await self._try_host(fallback, system_prompt, text, prompt_for_log)
            if second.sql is not None:
                self._logger.warning(
                    "fallback_host_succeeded",
                    host=fallback.host,
                    suggestion=f"Consider setting OLLAMA_HOST={fallback.host}",
                )
                return TranslationOutcome(
                    sql=second.sql, source=SqlSource.LLM_FALLBACK_HOST, host=fallback.host
                )
            last_error = second.error

        diagnostics = first.probe.describe() if first.probe else "not run"
        self.attempt_log.append_fallback_notice(
            prompt_for_log, f"{last_error.message}. Connection test: {diagnostics}"
        )
        sql = fallback_sql(text, table_name, columns)
        self._logger.warning(
            "translation_pattern_fallback",
            command=text,
            error_kind=last_error.kind.value,
            sql=sql,
        )
        return TranslationOutcome(sql=sql, source=SqlSource.PATTERN)

    async def _try_host(
        self,
        endpoint: EndpointSpec,
        system_prompt: str,
        text: str,
        prompt_for_log: str,
    ) -> _HostAttempt:
        probe = await self.prober.probe(endpoint)
        if not probe.reachable:
            error = _probe_error(endpoint, probe)
            self._logger.warning("llm_probe_failed", endpoint=endpoint.label, error=error.message)
            self.attempt_log.append(prompt_for_log, error=error.message)
            return _HostAttempt(error=error, probe=probe)

        try:
            sql = await self.client.translate(endpoint, self.config.model, system_prompt, text)
        except TranslationError as e:
            return _HostAttempt(error=e, probe=probe)
        return _HostAttempt(sql=sql, probe=probe)
