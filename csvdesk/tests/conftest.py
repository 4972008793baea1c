"""Shared fakes for the command pipeline tests.

The fakes stand in for the network: a prober answering per host and a
chat adapter replying per host. Nothing here opens a socket.
"""

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from csvdesk.audit.attempt_log import TranslationAttemptLog
from csvdesk.config.settings import LLMConnectionConfig
from csvdesk.translation.client import TranslationClient
from csvdesk.translation.orchestrator import SqlTranslator
from llmlink.adapters.base import BackendAdapter
from llmlink.endpoints import ProbeResult
from llmlink.health import HealthProbe
from llmlink.types import ErrorKind, InferenceResult, TranslationError

PEOPLE_SCHEMA = [("name", "TEXT"), ("age", "INTEGER"), ("city", "TEXT")]


def reachable():
    return ProbeResult(reachable=True, status_code=200)


def refused(label="localhost:11434"):
    return ProbeResult(
        reachable=False,
        error_kind=ErrorKind.CONNECTION_REFUSED,
        detail=f"Connection refused to {label}",
    )


class FakeProber(HealthProbe):
    """Answers probes from a host -> ProbeResult table; unknown hosts are refused."""

    def __init__(self, results=None):
        self.results = dict(results or {})
        self.calls = []

    async def probe(self, endpoint):
        self.calls.append(endpoint.label)
        return self.results.get(endpoint.host, refused(endpoint.label))


class FakeAdapter(BackendAdapter):
    """Replies from a host -> reply table. A reply is a string or a TranslationError."""

    def __init__(self, replies=None):
        self.replies = dict(replies or {})
        self.requests = []
        self.checks = []

    async def infer(self, endpoint, request):
        self.requests.append((endpoint.label, request))
        reply = self.replies.get(endpoint.host)
        if reply is None:
            raise TranslationError(
                ErrorKind.CONNECTION_REFUSED, f"Connection refused to {endpoint.label}"
            )
        if isinstance(reply, TranslationError):
            raise reply
        return InferenceResult(
            content=reply,
            raw={"model": request.model, "message": {"role": "assistant", "content": reply}},
        )

    async def check_responds(self, endpoint, model):
        self.checks.append(endpoint.label)
        reply = self.replies.get(endpoint.host)
        if isinstance(reply, TranslationError):
            raise reply
        if reply is None:
            raise TranslationError(
                ErrorKind.CONNECTION_REFUSED, f"Connection refused to {endpoint.label}"
            )
        return "OK"


def fixed_clock():
    return datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def attempt_log(tmp_path, mock_logger):
    return TranslationAttemptLog(tmp_path / "llm-prompt-log.txt", clock=fixed_clock, logger=mock_logger)


@pytest.fixture
def make_translator(attempt_log, mock_logger):
    """Build a SqlTranslator around fakes.

    Returns (translator, prober, adapter).
    """

    def build(probes=None, replies=None, config=None, cache=None):
        prober = FakeProber(probes)
        adapter = FakeAdapter(replies)
        client = TranslationClient(adapter, attempt_log, logger=mock_logger)
        translator = SqlTranslator(
            config=config or LLMConnectionConfig(),
            client=client,
            prober=prober,
            attempt_log=attempt_log,
            cache=cache,
            logger=mock_logger,
        )
        return translator, prober, adapter

    return build


@pytest.fixture
def fakes():
    """Helpers for building probe results and fake backends inside tests."""
    return SimpleNamespace(
        reachable=reachable,
        refused=refused,
        Prober=FakeProber,
        Adapter=FakeAdapter,
        people_schema=list(PEOPLE_SCHEMA),
    )
