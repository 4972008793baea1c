"""Tests for environment configuration."""

from pathlib import Path

import pytest

from csvdesk.config.settings import (
    LLMConnectionConfig,
    PipelinePaths,
    _env_bool,
    clear_logs_on_startup_enabled,
    log_level_from_env,
)
from csvdesk.errors import ConfigurationError


class TestLLMConnectionConfig:
    def test_defaults(self):
        config = LLMConnectionConfig.from_env({})
        assert (config.host, config.port, config.model) == ("localhost", 11434, "codellama")
        assert not config.host_explicit
        assert config.allows_host_fallback
        assert config.primary_endpoint.label == "localhost:11434"
        assert config.fallback_endpoint.label == "127.0.0.1:11434"

    def test_env_overrides(self):
        config = LLMConnectionConfig.from_env(
            {"OLLAMA_HOST": "gpu-box", "OLLAMA_PORT": "8080", "OLLAMA_MODEL": "sqlcoder"}
        )
        assert config.primary_endpoint.base_url == "http://gpu-box:8080"
        assert config.model == "sqlcoder"
        assert config.port_explicit
        assert config.fallback_endpoint is None

    def test_explicit_localhost_has_no_fallback(self):
        config = LLMConnectionConfig.from_env({"OLLAMA_HOST": "localhost"})
        assert config.host == "localhost"
        assert config.host_explicit
        assert not config.allows_host_fallback
        assert config.fallback_endpoint is None

    def test_fallback_keeps_port(self):
        config = LLMConnectionConfig.from_env({"OLLAMA_PORT": "9999"})
        assert config.fallback_endpoint.label == "127.0.0.1:9999"

    def test_blank_values_use_defaults(self):
        config = LLMConnectionConfig.from_env({"OLLAMA_HOST": "  ", "OLLAMA_MODEL": ""})
        assert config.host == "localhost"
        assert config.model == "codellama"
        assert config.allows_host_fallback

    def test_bad_port(self):
        with pytest.raises(ConfigurationError):
            LLMConnectionConfig.from_env({"OLLAMA_PORT": "eleven"})


class TestPipelinePaths:
    def test_under(self, tmp_path):
        paths = PipelinePaths.under(tmp_path)
        assert paths.commands_file == tmp_path / "commands.txt"
        assert paths.attempt_log == tmp_path / "llm-prompt-log.txt"
        assert paths.history_log == tmp_path / "sql-command-log.txt"
        assert paths.database == tmp_path / "csvdesk.db"

    def test_from_env(self, tmp_path):
        paths = PipelinePaths.from_env(
            {"CSVDESK_HOME": str(tmp_path), "CSVDESK_DB_PATH": "/data/other.db"}
        )
        assert paths.commands_file == tmp_path / "commands.txt"
        assert paths.database == Path("/data/other.db")


@pytest.mark.parametrize(
    "value,expected",
    [("1", True), ("TRUE", True), ("yes", True), ("0", False), ("false", False), ("maybe", True)],
)
def test_env_bool(value, expected):
    assert _env_bool("FLAG", True, {"FLAG": value}) is expected


def test_clear_logs_flag():
    assert clear_logs_on_startup_enabled({}) is True
    assert clear_logs_on_startup_enabled({"CSVDESK_CLEAR_LOGS_ON_STARTUP": "0"}) is False


def test_log_level():
    assert log_level_from_env({}) == "INFO"
    assert log_level_from_env({"CSVDESK_LOG_LEVEL": " debug "}) == "DEBUG"
