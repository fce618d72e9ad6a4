"""Configuration loading service.

Handles loading config.yaml, applying TW_* environment overrides and
validating the result against the Pydantic schema.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from taskwarrior_api.models.config import AppConfig

logger = logging.getLogger(__name__)

TRUE_VALUES = ("true", "1", "yes", "on")


def load_dotenv(env_file: str | Path = ".env") -> None:
    """Load environment variables from a .env file if it exists.

    Variables already present in the environment take precedence.
    """
    env_path = Path(env_file)
    if not env_path.exists():
        return
    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"').strip("'")
                if key and key not in os.environ:
                    os.environ[key] = value


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class ConfigService:
    """Service for loading and managing application configuration.

    Handles:
    - Loading config from config.yaml
    - Applying environment variable overrides
    - Validating against Pydantic schema
    """

    def __init__(self, config_path: str | Path = "config.yaml", environ: dict[str, str] | None = None):
        """Initialize the config service.

        Args:
            config_path: Path to the config file.
            environ: Environment to read overrides from. Defaults to os.environ.
        """
        self.config_path = Path(config_path)
        self.environ = environ
        self._config: AppConfig | None = None

    def load(self) -> AppConfig:
        """Load and validate configuration.

        Returns:
            Validated AppConfig instance.
        """
        raw_config: dict[str, Any] = {}
        if not self.config_path.exists():
            logger.info(f"Config file not found at {self.config_path}, using defaults")
        else:
            try:
                with open(self.config_path) as f:
                    raw_config = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Error reading config file: {e}, using defaults")
                raw_config = {}

        if not isinstance(raw_config, dict):
            logger.warning("Config file is not a mapping, using defaults")
            raw_config = {}

        merged = self._apply_env_overrides(raw_config)

        try:
            self._config = AppConfig(**merged)
        except ValidationError as e:
            logger.warning(f"Config validation error: {e}, using defaults")
            self._config = AppConfig()

        return self._config

    def get_config(self) -> AppConfig:
        """Get the current configuration.

        Loads from disk if not already loaded.
        """
        if self._config is None:
            return self.load()
        return self._config

    def _apply_env_overrides(self, raw: dict[str, Any]) -> dict[str, Any]:
        """Overlay TW_* environment variables onto the file configuration.

        Args:
            raw: Raw config dictionary from YAML.

        Returns:
            New dictionary with overrides applied.
        """
        env = self.environ if self.environ is not None else os.environ
        merged: dict[str, Any] = {
            section: dict(raw.get(section) or {})
            for section in ("server", "taskwarrior", "auth", "logging", "cors")
        }

        # Server
        if host := env.get("TW_API_HOST"):
            merged["server"]["host"] = host
        if port := env.get("TW_API_PORT"):
            try:
                merged["server"]["port"] = int(port)
            except ValueError:
                logger.warning(f"Ignoring invalid TW_API_PORT: {port}")

        # Taskwarrior
        if data_location := env.get("TW_DATA_LOCATION"):
            merged["taskwarrior"]["data_location"] = data_location
        if taskrc := env.get("TW_TASKRC_LOCATION"):
            merged["taskwarrior"]["taskrc_location"] = taskrc
        if binary := env.get("TW_TASK_BINARY"):
            merged["taskwarrior"]["binary"] = binary
        if timeout := env.get("TW_COMMAND_TIMEOUT"):
            try:
                merged["taskwarrior"]["command_timeout"] = float(timeout)
            except ValueError:
                logger.warning(f"Ignoring invalid TW_COMMAND_TIMEOUT: {timeout}")

        # Auth
        if tokens := env.get("TW_API_TOKENS"):
            merged["auth"]["tokens"] = _split_list(tokens)

        # Logging
        if level := env.get("TW_API_LOG_LEVEL"):
            merged["logging"]["level"] = level.lower()

        # CORS
        if enabled := env.get("TW_API_CORS_ENABLED"):
            merged["cors"]["enabled"] = enabled.lower() in TRUE_VALUES
        if origins := env.get("TW_API_CORS_ORIGINS"):
            merged["cors"]["allowed_origins"] = _split_list(origins)

        return merged


# Module-level singleton
_config_service: ConfigService | None = None


def get_config_service(config_path: str | Path = "config.yaml") -> ConfigService:
    """Get the global config service instance.

    Args:
        config_path: Path to config file (only used on first call).

    Returns:
        ConfigService singleton.
    """
    global _config_service
    if _config_service is None:
        _config_service = ConfigService(config_path)
    return _config_service


def reset_config_service() -> None:
    """Reset the global config service (for testing)."""
    global _config_service
    _config_service = None
