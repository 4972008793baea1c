from csvdesk.services.command_service import CommandRunResult, CommandService

__all__ = ["CommandRunResult", "CommandService"]
