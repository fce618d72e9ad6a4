"""Services for the Taskwarrior API."""

from taskwarrior_api.services.command_builder import CommandBuilder, expand_home
from taskwarrior_api.services.config_service import (
    ConfigService,
    get_config_service,
    load_dotenv,
    reset_config_service,
)
from taskwarrior_api.services.taskwarrior_client import TaskwarriorClient

__all__ = [
    "CommandBuilder",
    "ConfigService",
    "TaskwarriorClient",
    "expand_home",
    "get_config_service",
    "load_dotenv",
    "reset_config_service",
]
