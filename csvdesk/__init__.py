"""
csvdesk - natural-language commands over imported CSV tables

Translates a typed command into SQL for one table. A local Ollama model is
asked first; when it cannot be reached or misbehaves, a small set of
pattern rules answers instead, so a command always yields runnable SQL.

Key components:
- translation/: sanitizer, pattern rules, prompt, model client, orchestrator
- cache/: command -> SQL cache kept in commands.txt
- audit/: model attempt log and command history log
- connection.py: startup check with localhost -> 127.0.0.1 fallback
- services/: CommandService (translate, execute, remember)
- wiring.py: builds the pipeline from environment configuration
"""

from csvdesk.config import LLMConnectionConfig, PipelinePaths
from csvdesk.translation import SqlSource, SqlTranslator, TranslationOutcome, fallback_sql, sanitize
from csvdesk.cache import CommandCache
from csvdesk.services import CommandService
from csvdesk.wiring import Pipeline, create_pipeline, startup

__version__ = "0.1.0"

__all__ = [
    "CommandCache",
    "CommandService",
    "LLMConnectionConfig",
    "Pipeline",
    "PipelinePaths",
    "SqlSource",
    "SqlTranslator",
    "TranslationOutcome",
    "create_pipeline",
    "fallback_sql",
    "sanitize",
    "startup",
]
