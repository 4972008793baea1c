"""SQLite store the command pipeline executes translated SQL against.

Implements RelationalStore using aiosqlite. Connection handling follows
the rest of the codebase: one connection, opened lazily, closed explicitly.
"""

import os
from pathlib import Path
from typing import List, Optional

import aiosqlite

from csvdesk.database.types import ExecutionResult
from csvdesk.errors import SQLExecutionError
from csvdesk.schema import ColumnSpec

DEFAULT_DB_PATH = "./data/csvdesk.db"


def _quote(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


class SQLiteStore:
    """SQLite database satisfying RelationalStore."""

    def __init__(self, database_path: Optional[str] = None):
        self.database_path = str(database_path or os.getenv("CSVDESK_DB_PATH", DEFAULT_DB_PATH))
        self._db: Optional[aiosqlite.Connection] = None

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    async def connect(self) -> None:
        if self._db is not None:
            return  # idempotent
        if self.database_path != ":memory:":
            Path(self.database_path).parent.mkdir(parents=True, exist_ok=True)
        self._db = await aiosqlite.connect(self.database_path)
        self._db.row_factory = aiosqlite.Row

    async def disconnect(self) -> None:
        if self._db:
            await self._db.close()
            self._db = None

    async def __aenter__(self) -> "SQLiteStore":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()

    async def execute_sql(self, sql: str) -> ExecutionResult:
        """Run one statement. SELECT returns rows; anything else is committed."""
        db = self._require_db()
        try:
            if sql.strip().upper().startswith("SELECT"):
                cursor = await db.execute(sql)
                rows = await cursor.fetchall()
                columns = [d[0] for d in cursor.description or ()]
                records = [dict(r) for r in rows]
                return ExecutionResult(
                    type="select", columns=columns, rows=records, row_count=len(records)
                )

            cursor = await db.execute(sql)
            await db.commit()
            return ExecutionResult(type="modify", affected_rows=max(cursor.rowcount, 0))
        except aiosqlite.Error as e:
            raise SQLExecutionError(sql, str(e)) from e

    async def get_schema(self, table: str) -> List[ColumnSpec]:
        db = self._require_db()
        cursor = await db.execute(f"PRAGMA table_info({_quote(table)})")
        rows = await cursor.fetchall()
        return [ColumnSpec(name=r["name"], type=r["type"] or "BLOB") for r in rows]

    async def list_tables(self) -> List[str]:
        db = self._require_db()
        cursor = await db.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table' "
            "AND name NOT LIKE 'sqlite_%' ORDER BY name"
        )
        return [r["name"] for r in await cursor.fetchall()]

    async def executescript(self, script: str) -> None:
        await self._require_db().executescript(script)

    # -- internals --

    def _require_db(self) -> aiosqlite.Connection:
        if self._db is None:
            raise RuntimeError("SQLiteStore is not connected; call connect() first")
        return self._db
