"""Configuration loading for the Jira issue client.

Handles loading configuration from YAML files, .env files and environment
variables.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from jira_issues.type_definitions import (
    ClientConfig,
    Config,
    ConfigValue,
    JiraConfig,
    SectionName,
)

config_logger = logging.getLogger("jira_issues.config_loader")

ENV_PREFIX = "JIRA_ISSUES"
LOG_LEVELS = ("DEBUG", "INFO", "NOTICE", "WARNING", "ERROR", "CRITICAL", "SUCCESS")
DEFAULT_TIMEOUT = 30


def is_test_environment() -> bool:
    """Detect if code is running in a test environment.

    Returns:
        bool: True if running under pytest or with JIRA_ISSUES_TEST_MODE set

    """
    if "PYTEST_CURRENT_TEST" in os.environ:
        return True

    return os.environ.get(f"{ENV_PREFIX}_TEST_MODE", "").lower() in ("true", "1", "yes")


class ConfigLoader:
    """Loads configuration settings from a YAML file and environment variables."""

    def __init__(self, config_file_path: Path = Path("config/config.yaml")) -> None:
        """Initialize the configuration loader.

        Args:
            config_file_path (Path): Path to the YAML configuration file. A
                missing file is not an error; defaults and environment
                variables are used instead.

        """
        self._load_environment_configuration()

        self.config: Config = self._load_yaml_config(config_file_path)

        jira_section: dict[str, Any] = dict(self.config.get("jira") or {})
        jira_section.setdefault("url", "")
        jira_section.setdefault("username", "")
        jira_section.setdefault("api_token", "")
        jira_section.setdefault("verify_ssl", True)
        self.config["jira"] = jira_section  # type: ignore[typeddict-item]

        client_section: dict[str, Any] = dict(self.config.get("client") or {})
        client_section.setdefault("log_level", "INFO")
        client_section.setdefault("timeout", DEFAULT_TIMEOUT)
        self.config["client"] = client_section  # type: ignore[typeddict-item]

        self._apply_environment_overrides()

    def _load_environment_configuration(self) -> None:
        """Load environment variables from .env files based on execution context.

        Later files override values from earlier files:
        - .env
        - .env.local
        - .env.test (test environment only)
        - .env.test.local (test environment only)
        """
        load_dotenv(".env")
        config_logger.debug("Loaded base environment from .env")

        if Path(".env.local").exists():
            load_dotenv(".env.local", override=True)
            config_logger.debug("Loaded local overrides from .env.local")

        if is_test_environment():
            config_logger.debug("Running in test environment")
            if Path(".env.test").exists():
                load_dotenv(".env.test", override=True)
                config_logger.debug("Loaded test environment from .env.test")
            if Path(".env.test.local").exists():
                load_dotenv(".env.test.local", override=True)
                config_logger.debug("Loaded local test overrides from .env.test.local")

    def _load_yaml_config(self, config_file_path: Path) -> Config:
        """Load configuration from a YAML file.

        Args:
            config_file_path (Path): Path to the YAML configuration file

        Returns:
            dict: Configuration settings, empty when the file does not exist

        """
        if not config_file_path.exists():
            config_logger.debug("Config file not found, using defaults: %s", config_file_path)
            return {}  # type: ignore[typeddict-item]

        with config_file_path.open("r") as config_file:
            config = yaml.safe_load(config_file) or {}

        if not isinstance(config, dict):
            msg = f"Config file {config_file_path} must contain a mapping"
            raise ValueError(msg)
        return config  # type: ignore[return-value]

    def _apply_environment_overrides(self) -> None:
        """Override configuration settings with JIRA_ISSUES_* environment variables."""
        for env_var, env_value in os.environ.items():
            if not env_var.startswith(f"{ENV_PREFIX}_"):
                continue

            match env_var.split("_")[2:]:
                case ["LOG", "LEVEL"]:
                    log_level = env_value.upper()
                    if log_level in LOG_LEVELS:
                        self.config["client"]["log_level"] = log_level  # type: ignore[typeddict-item]
                        config_logger.debug("Applied log level: %s", log_level)

                case ["LOG", "FILE"]:
                    self.config["client"]["log_file"] = env_value
                    config_logger.debug("Applied log file: %s", env_value)

                case ["TIMEOUT"]:
                    self.config["client"]["timeout"] = int(env_value)
                    config_logger.debug("Applied timeout: %s", env_value)

                case ["JIRA", *rest] if rest:
                    key = "_".join(rest).lower()
                    if key in ("url", "username", "api_token"):
                        # Credentials and URLs stay strings even when numeric
                        self.config["jira"][key] = env_value  # type: ignore[literal-required]
                    else:
                        self.config["jira"][key] = self._convert_value(env_value)  # type: ignore[literal-required]
                    config_logger.debug("Applied Jira config: %s", key)

    def _convert_value(self, value: str) -> ConfigValue:
        """Convert a string value to the appropriate type."""
        if value.isdigit():
            return int(value)

        match value.lower():
            case "true" | "yes" | "y":
                return True
            case "false" | "no" | "n":
                return False
            case _:
                return value

    def get_config(self) -> Config:
        """Get the complete configuration dictionary."""
        return self.config

    def get_jira_config(self) -> JiraConfig:
        """Get Jira connection configuration."""
        return self.config["jira"]

    def get_client_config(self) -> ClientConfig:
        """Get client behaviour configuration."""
        return self.config["client"]

    def get_value(self, section: SectionName, key: str, default: Any = None) -> Any:
        """Get a specific configuration value.

        Args:
            section (str): Configuration section (jira, client)
            key (str): Configuration key
            default: Default value if not found

        Returns:
            Configuration value or default if not found

        """
        return self.config[section].get(key, default)
