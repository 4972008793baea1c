"""
Ollama chat adapter.

Talks to the native ``/api/chat`` endpoint of a local Ollama server with
non-streaming requests. Every failure is raised as a ``TranslationError``
so callers only ever deal with one error type.
"""
from __future__ import annotations

import asyncio
import json
from typing import Any, Dict

import httpx

from llmlink.adapters.base import BackendAdapter, categorize_exception
from llmlink.endpoints import EndpointSpec
from llmlink.types import (
    ErrorKind,
    InferenceRequest,
    InferenceResult,
    Message,
    TranslationError,
)

CHAT_PATH = "/api/chat"
HEALTH_CHECK_PROMPT = 'Say "OK" if you can read this.'


class OllamaChatAdapter(BackendAdapter):
    def __init__(self, timeout: float = 60.0, health_check_timeout: float = 30.0):
        self.timeout = timeout
        self.health_check_timeout = health_check_timeout

    async def infer(self, endpoint: EndpointSpec, request: InferenceRequest) -> InferenceResult:
        return await self._post_chat(endpoint, request, self.timeout)

    async def check_responds(self, endpoint: EndpointSpec, model: str) -> str:
        """Send a tiny prompt and return the reply; raises TranslationError."""
        request = InferenceRequest(
            model=model,
            messages=[Message(role="user", content=HEALTH_CHECK_PROMPT)],
            temperature=0.1,
            num_predict=10,
        )
        result = await self._post_chat(endpoint, request, self.health_check_timeout)
        return result.content

    async def _post_chat(
        self, endpoint: EndpointSpec, request: InferenceRequest, timeout: float
    ) -> InferenceResult:
        payload = self._build_payload(request)
        try:
            async with httpx.AsyncClient(
                base_url=endpoint.base_url,
                timeout=httpx.Timeout(timeout),
                headers={"Content-Type": "application/json"},
            ) as client:
                resp = await asyncio.wait_for(client.post(CHAT_PATH, json=payload), timeout)
        except Exception as exc:
            err = categorize_exception(exc, endpoint)
            if err.kind == ErrorKind.TIMEOUT:
                err.message = (
                    f"Request timeout after {timeout:g}s to {endpoint.label} - "
                    "model may be processing slowly or not loaded"
                )
            raise err from exc

        if not 200 <= resp.status_code < 300:
            raise TranslationError(
                ErrorKind.HTTP_ERROR,
                f"Ollama API error: {resp.status_code} {resp.reason_phrase}",
                status_code=resp.status_code,
                raw_backend=resp.text,
            )

        return self._parse_response(resp.text)

    def _build_payload(self, request: InferenceRequest) -> Dict[str, Any]:
        """Build the native Ollama chat payload."""
        payload: Dict[str, Any] = {
            "model": request.model,
            "messages": [{"role": m.role, "content": m.content} for m in request.messages],
            "stream": request.stream,
        }

        options: Dict[str, Any] = {}
        if request.temperature is not None:
            options["temperature"] = request.temperature
        if request.num_predict is not None:
            options["num_predict"] = request.num_predict
        options.update(request.extra_options)
        if options:
            payload["options"] = options

        return payload

    def _parse_response(self, body: str) -> InferenceResult:
        try:
            data = json.loads(body)
        except json.JSONDecodeError as exc:
            raise TranslationError(
                ErrorKind.PARSE_ERROR,
                f"Failed to parse Ollama response: {exc}",
                raw_backend=body,
            ) from exc

        message = data.get("message") if isinstance(data, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str) or not content.strip():
            raise TranslationError(
                ErrorKind.EMPTY_RESPONSE,
                "Empty response from Ollama - model may not be loaded",
                raw_backend=body,
            )

        return InferenceResult(
            content=content.strip(),
            raw=data,
            done_reason=data.get("done_reason"),
        )
