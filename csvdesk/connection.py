"""Startup check of the local model server.

Run once when the application starts: probe the configured host, then ask
the model for a one-word reply to prove it is loaded. When the host was
defaulted to ``localhost`` and cannot be reached, ``127.0.0.1`` is tried
once. The substitution is reported back, never written anywhere.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from csvdesk._logging import get_component_logger
from csvdesk.config.settings import LLMConnectionConfig
from llmlink.adapters.ollama_chat import OllamaChatAdapter
from llmlink.endpoints import EndpointSpec, ProbeResult
from llmlink.health import HealthProbe
from llmlink.types import TranslationError


@dataclass
class ConnectionStatus:
    connected: bool
    message: str
    host: str
    port: int
    model: str
    suggestion: Optional[str] = None
    error: Optional[str] = None


async def _check_endpoint(
    endpoint: EndpointSpec,
    model: str,
    adapter: OllamaChatAdapter,
) -> Optional[str]:
    """Return None when the model answers, else the failure message."""
    try:
        await adapter.check_responds(endpoint, model)
    except TranslationError as e:
        return e.message
    return None


async def determine_connection(
    config: LLMConnectionConfig,
    prober: HealthProbe,
    adapter: OllamaChatAdapter,
    logger: Optional[Any] = None,
) -> ConnectionStatus:
    log = get_component_logger("startup", logger)
    model = config.model
    primary = config.primary_endpoint

    log.info("llm_configuration", model=model, host=config.host, port=config.port)

    probe = await prober.probe(primary)
    if probe.reachable:
        failure = await _check_endpoint(primary, model, adapter)
        if failure is None:
            log.info("llm_connected", endpoint=primary.label, model=model)
            return ConnectionStatus(
                connected=True,
                message=f"Ollama connected and responding ({primary.label}, model: {model})",
                host=primary.host,
                port=primary.port,
                model=model,
            )
        message = f"Ollama connection OK but message test failed: {failure}"
        log.error("llm_message_test_failed", endpoint=primary.label, error=failure)
        return ConnectionStatus(
            connected=False,
            message=message,
            host=primary.host,
            port=primary.port,
            model=model,
            error=failure,
        )

    fallback = config.fallback_endpoint
    if fallback is None:
        message = f"Ollama not available on {primary.label}"
        log.error("llm_unavailable", endpoint=primary.label, probe=probe.describe())
        return ConnectionStatus(
            connected=False,
            message=message,
            host=primary.host,
            port=primary.port,
            model=model,
            error=probe.describe(),
        )

    log.info("trying_fallback_host", failed=primary.label, fallback=fallback.label)
    fallback_probe = await prober.probe(fallback)
    if fallback_probe.reachable:
        failure = await _check_endpoint(fallback, model, adapter)
        if failure is None:
            log.info("llm_connected", endpoint=fallback.label, model=model, via_fallback=True)
            return ConnectionStatus(
                connected=True,
                message=(
                    f"Ollama connected and responding via {fallback.label} "
                    f"({primary.host} failed, model: {model})"
                ),
                host=fallback.host,
                port=fallback.port,
                model=model,
                suggestion=f"Consider setting OLLAMA_HOST={fallback.host}",
            )
        log.error("llm_message_test_failed", endpoint=fallback.label, error=failure)
        return ConnectionStatus(
            connected=False,
            message=f"Ollama connection OK on {fallback.label} but message test failed: {failure}",
            host=fallback.host,
            port=fallback.port,
            model=model,
            error=failure,
        )

    log.error(
        "llm_unavailable",
        endpoint=primary.label,
        fallback=fallback.label,
        probe=probe.describe(),
    )
    return ConnectionStatus(
        connected=False,
        message=f"Ollama not available on {primary.label} or {fallback.label}",
        host=primary.host,
        port=primary.port,
        model=model,
        error=probe.describe(),
    )


async def probe_with_fallback(
    config: LLMConnectionConfig,
    prober: HealthProbe,
) -> Tuple[EndpointSpec, ProbeResult]:
    """Probe-only check with the same fallback rule.

    Returns the endpoint that answered, or the primary endpoint and its
    failed probe.
    """
    primary = config.primary_endpoint
    result = await prober.probe(primary)
    fallback = config.fallback_endpoint
    if not result.reachable and fallback is not None:
        fallback_result = await prober.probe(fallback)
        if fallback_result.reachable:
            return fallback, fallback_result
    return primary, result
