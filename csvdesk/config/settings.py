from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from csvdesk.config.constants import (
    ATTEMPT_LOG_FILENAME,
    COMMANDS_FILENAME,
    DATABASE_FILENAME,
    DEFAULT_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MODEL,
    DEFAULT_PORT,
    FALLBACK_HOST,
    HISTORY_LOG_FILENAME,
)
from csvdesk.errors import ConfigurationError
from llmlink.endpoints import EndpointSpec


_TRUE = {"1", "true", "yes"}
_FALSE = {"0", "false", "no"}


def _env_bool(name: str, default: bool, environ: Optional[Mapping[str, str]] = None) -> bool:
    env = os.environ if environ is None else environ
    val = env.get(name)
    if val is None:
        return default
    lowered = val.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    return default


def _env_value(name: str, environ: Mapping[str, str]) -> Optional[str]:
    val = environ.get(name)
    if val is None or not val.strip():
        return None
    return val.strip()


@dataclass(frozen=True)
class LLMConnectionConfig:
    """Where the local model server lives and which model to ask.

    ``host_explicit`` / ``port_explicit`` record whether the value came
    from the environment rather than a default. An explicit host is never
    swapped for the loopback fallback.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    model: str = DEFAULT_MODEL
    host_explicit: bool = False
    port_explicit: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LLMConnectionConfig":
        env = os.environ if environ is None else environ
        host = _env_value("OLLAMA_HOST", env)
        port_raw = _env_value("OLLAMA_PORT", env)
        model = _env_value("OLLAMA_MODEL", env)

        port = DEFAULT_PORT
        if port_raw is not None:
            try:
                port = int(port_raw)
            except ValueError as exc:
                raise ConfigurationError(f"OLLAMA_PORT must be an integer, got {port_raw!r}") from exc

        return cls(
            host=host or DEFAULT_HOST,
            port=port,
            model=model or DEFAULT_MODEL,
            host_explicit=host is not None,
            port_explicit=port_raw is not None,
        )

    @property
    def allows_host_fallback(self) -> bool:
        return self.host == DEFAULT_HOST and not self.host_explicit

    @property
    def primary_endpoint(self) -> EndpointSpec:
        return EndpointSpec(host=self.host, port=self.port)

    @property
    def fallback_endpoint(self) -> Optional[EndpointSpec]:
        if not self.allows_host_fallback:
            return None
        return EndpointSpec(host=FALLBACK_HOST, port=self.port)


@dataclass(frozen=True)
class PipelinePaths:
    commands_file: Path
    attempt_log: Path
    history_log: Path
    database: Path

    @classmethod
    def under(cls, base: Path) -> "PipelinePaths":
        base = Path(base)
        return cls(
            commands_file=base / COMMANDS_FILENAME,
            attempt_log=base / ATTEMPT_LOG_FILENAME,
            history_log=base / HISTORY_LOG_FILENAME,
            database=base / DATABASE_FILENAME,
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PipelinePaths":
        env = os.environ if environ is None else environ
        base = Path(_env_value("CSVDESK_HOME", env) or os.getcwd())
        paths = cls.under(base)
        db_override = _env_value("CSVDESK_DB_PATH", env)
        if db_override:
            paths = replace(paths, database=Path(db_override))
        return paths


def clear_logs_on_startup_enabled(environ: Optional[Mapping[str, str]] = None) -> bool:
    return _env_bool("CSVDESK_CLEAR_LOGS_ON_STARTUP", True, environ)


def log_level_from_env(environ: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if environ is None else environ
    return (_env_value("CSVDESK_LOG_LEVEL", env) or DEFAULT_LOG_LEVEL).upper()
