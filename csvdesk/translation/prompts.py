"""
SQL Translation Prompt

The system message pins the model to one SQLite table and asks for the bare
statement. The user message is the command exactly as typed.
"""

import json
from dataclasses import asdict
from typing import Iterable

from csvdesk.config.constants import TRANSLATION_MAX_TOKENS, TRANSLATION_TEMPERATURE
from csvdesk.schema import ColumnSpec, schema_to_prompt_json
from llmlink.types import InferenceRequest, Message


def sql_translation_system() -> str:
    return """You are a SQL expert. Convert natural language queries to SQLite SQL.
Table name: {table_name}
Schema: {schema_json}
IMPORTANT: Return ONLY the raw SQL query. Do NOT use markdown code blocks (no backticks, no ```sql).
Return the SQL statement directly without any formatting, explanations, or code block markers."""


def build_system_prompt(table_name: str, schema: Iterable[ColumnSpec]) -> str:
    return sql_translation_system().format(
        table_name=table_name,
        schema_json=schema_to_prompt_json(schema),
    )


def build_translation_request(model: str, system_prompt: str, user_text: str) -> InferenceRequest:
    return InferenceRequest(
        model=model,
        messages=[
            Message(role="system", content=system_prompt),
            Message(role="user", content=user_text),
        ],
        temperature=TRANSLATION_TEMPERATURE,
        num_predict=TRANSLATION_MAX_TOKENS,
        stream=False,
    )


def render_prompt_for_log(request: InferenceRequest) -> str:
    """Pretty-print the request payload the way it goes over the wire."""
    payload = {
        "model": request.model,
        "messages": [asdict(m) for m in request.messages],
        "stream": request.stream,
        "options": {
            "temperature": request.temperature,
            "num_predict": request.num_predict,
        },
    }
    return json.dumps(payload, indent=2)
