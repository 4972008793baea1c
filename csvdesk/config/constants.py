"""Tuning knobs for the natural-language command pipeline.

Three separate time budgets: the probe only has to see the server, the
startup health check has to wait for a tiny generation, and a real
translation may have to load the model first.
"""

# =============================================================================
# TIMEOUTS (seconds)
# =============================================================================

PROBE_TIMEOUT = 5.0
HEALTH_CHECK_TIMEOUT = 30.0
TRANSLATION_TIMEOUT = 60.0

# =============================================================================
# GENERATION OPTIONS
# =============================================================================

TRANSLATION_TEMPERATURE = 0.3
TRANSLATION_MAX_TOKENS = 200

# =============================================================================
# CONNECTION DEFAULTS
# =============================================================================

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 11434
DEFAULT_MODEL = "codellama"
FALLBACK_HOST = "127.0.0.1"

# =============================================================================
# FILES
# =============================================================================

COMMANDS_FILENAME = "commands.txt"
ATTEMPT_LOG_FILENAME = "llm-prompt-log.txt"
HISTORY_LOG_FILENAME = "sql-command-log.txt"
DATABASE_FILENAME = "csvdesk.db"

# Marker written to the attempt log when translation drops to pattern matching
FALLBACK_NOTICE = "FALLBACK_TO_PATTERN_MATCHING"

DEFAULT_LOG_LEVEL = "INFO"
