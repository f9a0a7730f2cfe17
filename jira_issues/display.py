"""
Console and logging setup for the Jira issue client.
Provides rich-formatted logging with SUCCESS and NOTICE levels.
"""

import logging
import os
from typing import Any, Protocol, cast

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

SUCCESS = 25
NOTICE = 21

LOGGER_NAME = "jira_issues"


# Logger protocol including the success and notice helpers
class ExtendedLogger(Protocol):
    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def info(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def error(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def critical(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def success(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def notice(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None: ...


LOGGING_THEME = Theme(
    {
        "logging.level.debug": "dim",
        "logging.level.info": "blue",
        "logging.level.notice": "cyan",
        "logging.level.warning": "bold yellow",
        "logging.level.error": "bold red",
        "logging.level.critical": "bold red on white",
        "logging.level.success": "bold green",
    }
)

console = Console(theme=LOGGING_THEME, stderr=True)

rich_handler = RichHandler(
    console=console,
    rich_tracebacks=True,
    tracebacks_show_locals=False,
    markup=True,
    show_time=True,
    show_level=True,
    enable_link_path=True,
    log_time_format="[%X.%f]",
)


def _success(self: logging.Logger, message: str, *args: Any, **kwargs: Any) -> None:
    if self.isEnabledFor(SUCCESS):
        kwargs["extra"] = kwargs.get("extra", {})
        kwargs["extra"]["markup"] = True
        self._log(SUCCESS, f"[success]{message}[/]", args, stacklevel=2, **kwargs)


def _notice(self: logging.Logger, message: str, *args: Any, **kwargs: Any) -> None:
    if self.isEnabledFor(NOTICE):
        kwargs["extra"] = kwargs.get("extra", {})
        kwargs["extra"]["markup"] = True
        self._log(NOTICE, message, args, stacklevel=2, **kwargs)


def install_log_levels() -> None:
    """Register the SUCCESS and NOTICE levels and their logger methods."""
    logging.addLevelName(SUCCESS, "SUCCESS")
    logging.addLevelName(NOTICE, "NOTICE")
    setattr(logging.Logger, "success", _success)
    setattr(logging.Logger, "notice", _notice)


def get_logger(name: str = LOGGER_NAME) -> ExtendedLogger:
    """Return a logger that supports ``success`` and ``notice``."""
    install_log_levels()
    return cast(ExtendedLogger, logging.getLogger(name))


def configure_logging(
    level: str = "INFO", log_file: str | None = None
) -> ExtendedLogger:
    """
    Configure logging with rich formatting.

    Args:
        level: Logging level (DEBUG, NOTICE, INFO, SUCCESS, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a log file

    Returns:
        Configured ``jira_issues`` logger
    """
    install_log_levels()

    if level.upper() == "NOTICE":
        numeric_level = NOTICE
    elif level.upper() == "SUCCESS":
        numeric_level = SUCCESS
    else:
        numeric_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [rich_handler]

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)

        file_format = logging.Formatter(
            "%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s"
        )
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(file_format)
        file_handler.setLevel(numeric_level)
        handlers.append(file_handler)

    # Root logger is left untouched
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(numeric_level)
    logger.propagate = False

    logger.debug("Rich logging configured")
    if log_file:
        logger.debug("Log file: %s", log_file)

    return cast(ExtendedLogger, logger)
