"""Tests for the commands.txt cache."""

import pytest

from csvdesk.cache.command_cache import CommandCache
from csvdesk.errors import CacheNotFoundError


@pytest.fixture
def commands_file(tmp_path):
    path = tmp_path / "commands.txt"
    path.write_text(
        "# people table\n"
        "show all rows\n"
        "[SELECT * FROM \"people\"]\n"
        "count rows\n"
        "\n"
        "  list cities  \n"
        "count rows\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def cache(commands_file, mock_logger):
    return CommandCache(commands_file, logger=mock_logger)


class TestLookup:
    def test_hit(self, cache):
        assert cache.lookup("show all rows") == 'SELECT * FROM "people"'

    def test_hit_ignores_surrounding_whitespace(self, cache):
        assert cache.lookup("  show all rows \n") == 'SELECT * FROM "people"'

    def test_listed_without_sql(self, cache):
        assert cache.lookup("count rows") is None

    def test_not_listed(self, cache):
        assert cache.lookup("drop everything") is None

    def test_comment_is_not_a_command(self, cache):
        assert cache.lookup("# people table") is None
        assert not cache.contains("# people table")

    def test_missing_file(self, tmp_path, mock_logger):
        cache = CommandCache(tmp_path / "absent.txt", logger=mock_logger)
        assert cache.lookup("show all rows") is None
        assert cache.commands() == []
        assert not cache.contains("show all rows")

    def test_indented_command_matches_trimmed(self, cache):
        assert cache.contains("list cities")


class TestStore:
    def test_store_then_lookup(self, cache, commands_file):
        assert cache.store("count rows", 'SELECT COUNT(*) FROM "people"') is True
        assert cache.lookup("count rows") == 'SELECT COUNT(*) FROM "people"'

        lines = commands_file.read_text(encoding="utf-8").split("\n")
        assert lines[3] == "count rows"
        assert lines[4] == '[SELECT COUNT(*) FROM "people"]'

    def test_store_targets_first_duplicate(self, cache, commands_file):
        cache.store("count rows", "SELECT 1")
        lines = commands_file.read_text(encoding="utf-8").split("\n")
        assert lines[-2] == "count rows"
        assert lines.count("[SELECT 1]") == 1

    def test_existing_sql_is_not_replaced(self, cache, commands_file):
        before = commands_file.read_text(encoding="utf-8")
        assert cache.store("show all rows", "SELECT name FROM people") is False
        assert commands_file.read_text(encoding="utf-8") == before
        assert cache.lookup("show all rows") == 'SELECT * FROM "people"'

    def test_unknown_command_raises(self, cache, commands_file):
        with pytest.raises(CacheNotFoundError) as exc_info:
            cache.store("drop everything", "DROP TABLE people")
        assert exc_info.value.command == "drop everything"
        assert str(commands_file) in str(exc_info.value)

    def test_missing_file_raises(self, tmp_path, mock_logger):
        cache = CommandCache(tmp_path / "absent.txt", logger=mock_logger)
        with pytest.raises(CacheNotFoundError):
            cache.store("show all rows", "SELECT 1")

    def test_multiline_sql_collapsed(self, cache):
        cache.store("list cities", "SELECT city\n  FROM people\r\nGROUP BY city")
        assert cache.lookup("list cities") == "SELECT city FROM people GROUP BY city"

    def test_other_lines_untouched(self, cache, commands_file):
        cache.store("list cities", "SELECT DISTINCT city FROM people")
        text = commands_file.read_text(encoding="utf-8")
        assert "# people table\n" in text
        assert "  list cities  \n[SELECT DISTINCT city FROM people]\n" in text


def test_commands_in_file_order(cache):
    assert cache.commands() == ["show all rows", "count rows", "list cities"]


class TestUnreadableFile:
    @pytest.fixture
    def undecodable(self, tmp_path):
        path = tmp_path / "commands.txt"
        path.write_bytes(b"show all rows\n\xff\xfe bad bytes\n")
        return path

    def test_reads_as_empty_cache(self, undecodable, mock_logger):
        cache = CommandCache(undecodable, logger=mock_logger)

        assert cache.lookup("show all rows") is None
        assert cache.contains("show all rows") is False
        assert cache.commands() == []
        events = [c.args[0] for c in mock_logger.warning.call_args_list]
        assert events == ["cache_read_failed"] * 3

    def test_directory_in_place_of_file(self, tmp_path, mock_logger):
        cache = CommandCache(tmp_path, logger=mock_logger)
        assert cache.lookup("show all rows") is None

    def test_store_still_raises(self, undecodable, mock_logger):
        cache = CommandCache(undecodable, logger=mock_logger)
        with pytest.raises(UnicodeDecodeError):
            cache.store("show all rows", "SELECT 1")
