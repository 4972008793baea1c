from csvdesk.translation.client import TranslationClient
from csvdesk.translation.orchestrator import SqlSource, SqlTranslator, TranslationOutcome
from csvdesk.translation.pattern_fallback import fallback_sql
from csvdesk.translation.sanitizer import sanitize

__all__ = [
    "SqlSource",
    "SqlTranslator",
    "TranslationClient",
    "TranslationOutcome",
    "fallback_sql",
    "sanitize",
]
