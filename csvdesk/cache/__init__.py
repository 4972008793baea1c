from csvdesk.cache.command_cache import CommandCache

__all__ = ["CommandCache"]
