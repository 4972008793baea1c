"""Table schema descriptor handed to prompts.

The pipeline does not own table schemas; it only needs an ordered list of
column names and types it can serialize into the system prompt.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping

from csvdesk.errors import InvalidColumnTypeError, MalformedSchemaError


@dataclass(frozen=True)
class ColumnSpec:
    name: str
    type: str


def _coerce_column(entry: Any, position: int) -> ColumnSpec:
    if isinstance(entry, ColumnSpec):
        name, col_type = entry.name, entry.type
    elif isinstance(entry, Mapping):
        name, col_type = entry.get("name"), entry.get("type")
    elif isinstance(entry, (tuple, list)) and len(entry) == 2:
        name, col_type = entry
    else:
        raise MalformedSchemaError(
            f"Schema entry {position} must be a column spec, (name, type) pair or mapping, "
            f"got {type(entry).__name__}"
        )

    if not isinstance(name, str) or not name.strip():
        raise MalformedSchemaError(f"Schema entry {position} has no column name")
    if not isinstance(col_type, str) or not col_type.strip():
        raise InvalidColumnTypeError(name, col_type)
    return ColumnSpec(name=name, type=col_type)


def normalize_schema(raw: Iterable[Any]) -> List[ColumnSpec]:
    """Return the schema as an ordered list of ColumnSpec.

    Raises:
        MalformedSchemaError: for entries without a usable name, or when
            ``raw`` is not iterable.
        InvalidColumnTypeError: when a column type is missing or not a string.
    """
    if raw is None or isinstance(raw, (str, bytes, Mapping)):
        raise MalformedSchemaError("Table schema must be a sequence of columns")
    try:
        entries = list(raw)
    except TypeError as exc:
        raise MalformedSchemaError("Table schema must be a sequence of columns") from exc
    return [_coerce_column(entry, i) for i, entry in enumerate(entries)]


def schema_to_prompt_json(columns: Iterable[ColumnSpec]) -> str:
    return json.dumps([{"name": c.name, "type": c.type} for c in columns])
