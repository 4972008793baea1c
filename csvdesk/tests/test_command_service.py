"""Tests for CommandService: translate, execute, remember, record."""

import pytest
import pytest_asyncio

from csvdesk.audit.history import CommandHistoryLog
from csvdesk.cache.command_cache import CommandCache
from csvdesk.database.sqlite_store import SQLiteStore
from csvdesk.errors import SQLExecutionError
from csvdesk.services.command_service import CommandService
from csvdesk.translation.orchestrator import SqlSource


@pytest_asyncio.fixture
async def store():
    db = SQLiteStore(":memory:")
    await db.connect()
    await db.executescript(
        """
        CREATE TABLE people (name TEXT, age INTEGER, city TEXT);
        INSERT INTO people VALUES ('Ada', 36, 'London');
        INSERT INTO people VALUES ('Grace', 45, 'New York');
        INSERT INTO people VALUES ('Linus', 28, 'Helsinki');
        """
    )
    yield db
    await db.disconnect()


@pytest.fixture
def commands_file(tmp_path):
    path = tmp_path / "commands.txt"
    path.write_text("list names\ncount rows\n", encoding="utf-8")
    return path


class TestCommandService:
    @pytest.fixture
    def service_for(self, make_translator, store, commands_file, tmp_path, mock_logger):
        def build(probes=None, replies=None):
            cache = CommandCache(commands_file, logger=mock_logger)
            translator, prober, adapter = make_translator(probes=probes, replies=replies, cache=cache)
            history = CommandHistoryLog(tmp_path / "sql-command-log.txt", logger=mock_logger)
            service = CommandService(
                translator,
                store,
                cache=cache,
                history=history,
                logger=mock_logger,
            )
            return service, cache, history, adapter

        return build

    @pytest.mark.asyncio
    async def test_model_sql_executed_and_cached(self, service_for, fakes):
        service, cache, history, _ = service_for(
            probes={"localhost": fakes.reachable()},
            replies={"localhost": "SELECT name FROM people ORDER BY name"},
        )

        run = await service.run("  list names ", "people")

        assert run.command == "list names"
        assert run.outcome.source == SqlSource.LLM
        assert [r["name"] for r in run.result.rows] == ["Ada", "Grace", "Linus"]
        assert run.cached is True
        assert cache.lookup("list names") == "SELECT name FROM people ORDER BY name"

        (entry,) = history.entries()
        assert entry.natural_language == "list names"
        assert entry.result == "3 rows"

    @pytest.mark.asyncio
    async def test_second_run_served_from_cache(self, service_for, fakes):
        service, _, _, adapter = service_for(
            probes={"localhost": fakes.reachable()},
            replies={"localhost": "SELECT name FROM people"},
        )

        await service.run("list names", "people")
        second = await service.run("list names", "people")

        assert second.outcome.from_cache
        assert second.cached is False
        assert len(adapter.requests) == 1

    @pytest.mark.asyncio
    async def test_pattern_sql_cached_after_execution(self, service_for):
        service, cache, _, _ = service_for()

        run = await service.run("count rows", "people")

        assert run.outcome.source == SqlSource.PATTERN
        assert run.result.rows == [{"COUNT(*)": 3}]
        assert run.cached is True
        assert cache.lookup("count rows") == 'SELECT COUNT(*) FROM "people"'

    @pytest.mark.asyncio
    async def test_unlisted_command_not_cached(self, service_for, fakes, commands_file):
        service, _, _, _ = service_for(
            probes={"localhost": fakes.reachable()},
            replies={"localhost": "SELECT city FROM people"},
        )
        before = commands_file.read_text(encoding="utf-8")

        run = await service.run("which cities", "people")

        assert run.cached is False
        assert commands_file.read_text(encoding="utf-8") == before

    @pytest.mark.asyncio
    async def test_execution_error_recorded_and_raised(self, service_for, fakes, commands_file):
        service, cache, history, _ = service_for(
            probes={"localhost": fakes.reachable()},
            replies={"localhost": "SELECT nope FROM people"},
        )

        with pytest.raises(SQLExecutionError):
            await service.run("list names", "people")

        (entry,) = history.entries()
        assert entry.sql == "SELECT nope FROM people"
        assert entry.error.startswith("SQL execution error")
        assert cache.lookup("list names") is None
