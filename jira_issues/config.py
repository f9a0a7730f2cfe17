"""Configuration module for the Jira issue client.
Provides a centralized configuration interface using ConfigLoader.
"""

from typing import Any

from jira_issues.config_loader import ENV_PREFIX, ConfigLoader
from jira_issues.display import configure_logging
from jira_issues.type_definitions import Config, LogLevel, SectionName

_config_loader = ConfigLoader()

jira_config = _config_loader.get_jira_config()
client_config = _config_loader.get_client_config()

LOG_LEVEL: LogLevel = client_config.get("log_level", "INFO")
logger = configure_logging(LOG_LEVEL, client_config.get("log_file"))


def get_config() -> Config:
    """Get the complete configuration object."""
    return _config_loader.get_config()


def get_value(section: SectionName, key: str, default: Any = None) -> Any:
    """Get a specific configuration value."""
    return _config_loader.get_value(section, key, default)


def validate_config() -> bool:
    """Validate that all required Jira connection settings are present."""
    missing_vars = [
        f"{ENV_PREFIX}_JIRA_{key.upper()}"
        for key in ("url", "username", "api_token")
        if not jira_config.get(key)
    ]

    if missing_vars:
        logger.error(
            "Missing required environment variables: %s", ", ".join(missing_vars),
        )
        return False

    return True
