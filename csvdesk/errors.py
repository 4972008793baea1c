"""Errors raised by the command pipeline.

LLM transport failures use ``llmlink.TranslationError`` and are absorbed
by the translator. The errors here are the ones that reach the caller.
"""

from typing import Optional


class CsvDeskError(Exception):
    """Base class for pipeline errors."""


class ConfigurationError(CsvDeskError):
    pass


class CacheNotFoundError(CsvDeskError):
    """Raised when storing SQL for a command that is not in the cache file."""

    def __init__(self, command: str, path: Optional[str] = None):
        self.command = command
        self.path = path
        where = f" in {path}" if path else ""
        super().__init__(f'Command text not found{where}: "{command}"')


class MalformedSchemaError(CsvDeskError):
    pass


class InvalidColumnTypeError(MalformedSchemaError):
    def __init__(self, column: str, column_type: object):
        self.column = column
        self.column_type = column_type
        super().__init__(
            f'Invalid column type {column_type!r} for column "{column}"'
        )


class SQLExecutionError(CsvDeskError):
    def __init__(self, sql: str, message: str):
        self.sql = sql
        super().__init__(f"SQL execution error: {message}")
