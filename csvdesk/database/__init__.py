from csvdesk.database.sqlite_store import SQLiteStore
from csvdesk.database.types import ExecutionResult, RelationalStore

__all__ = ["ExecutionResult", "RelationalStore", "SQLiteStore"]
