from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from csvdesk.schema import ColumnSpec


@dataclass
class ExecutionResult:
    type: str  # select | modify
    columns: List[str] = field(default_factory=list)
    rows: List[Dict[str, Any]] = field(default_factory=list)
    row_count: int = 0
    affected_rows: int = 0

    def summary(self) -> str:
        if self.type == "select":
            return f"{self.row_count} rows"
        return f"{self.affected_rows} rows affected"


class RelationalStore(Protocol):
    async def execute_sql(self, sql: str) -> ExecutionResult:
        ...

    async def get_schema(self, table: str) -> List[ColumnSpec]:
        ...
