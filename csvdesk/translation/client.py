"""Model-backed translation with per-call audit records."""

from __future__ import annotations

import json
from typing import Any, Optional

from csvdesk._logging import get_component_logger
from csvdesk.audit.attempt_log import TranslationAttemptLog
from csvdesk.translation.prompts import build_translation_request, render_prompt_for_log
from csvdesk.translation.sanitizer import sanitize
from llmlink.adapters.base import BackendAdapter
from llmlink.endpoints import EndpointSpec
from llmlink.types import ErrorKind, TranslationError


class TranslationClient:
    """Ask the model for SQL and return it sanitized.

    Every call leaves exactly one block in the attempt log, whether it
    succeeds or fails. Failures are re-raised as ``TranslationError``.
    """

    def __init__(
        self,
        adapter: BackendAdapter,
        attempt_log: TranslationAttemptLog,
        logger: Optional[Any] = None,
    ):
        self.adapter = adapter
        self.attempt_log = attempt_log
        self._logger = get_component_logger("TranslationClient", logger)

    async def translate(
        self,
        endpoint: EndpointSpec,
        model: str,
        system_prompt: str,
        user_text: str,
    ) -> str:
        request = build_translation_request(model, system_prompt, user_text)
        prompt_for_log = render_prompt_for_log(request)

        try:
            result = await self.adapter.infer(endpoint, request)
        except TranslationError as e:
            self._logger.warning(
                "llm_translate_failed",
                host=endpoint.host,
                port=endpoint.port,
                kind=e.kind.value,
                error=e.message,
            )
            self.attempt_log.append(prompt_for_log, error=e.message)
            raise

        raw_for_log = json.dumps(result.raw, indent=2) if result.raw is not None else result.content
        sql = sanitize(result.content)
        if not sql:
            message = "Model reply contained no SQL after sanitizing"
            self.attempt_log.append(prompt_for_log, error=message)
            raise TranslationError(ErrorKind.EMPTY_RESPONSE, message, raw_backend=result.content)

        self.attempt_log.append(prompt_for_log, response=raw_for_log)
        self._logger.info(
            "llm_translate_succeeded",
            host=endpoint.host,
            port=endpoint.port,
            original=result.content,
            cleaned=sql,
        )
        return sql
