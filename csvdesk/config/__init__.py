from csvdesk.config.settings import (
    LLMConnectionConfig,
    PipelinePaths,
    clear_logs_on_startup_enabled,
    log_level_from_env,
)

__all__ = [
    "LLMConnectionConfig",
    "PipelinePaths",
    "clear_logs_on_startup_enabled",
    "log_level_from_env",
]
