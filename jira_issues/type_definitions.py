"""Type definitions for the Jira issue client.

This module contains the configuration shapes and type aliases used
throughout the package.
"""

from typing import Any, Literal, NotRequired, TypedDict

type WireObject = dict[str, Any]
type CustomFields = dict[str, str]

type ConfigValue = str | int | bool | dict[str, Any] | list[Any]


# Declared kinds of known issue fields
type FieldKind = Literal[
    "string",
    "array-of-string",
    "array-of-component",
    "date",
    "user",
    "project",
    "priority",
    "issuetype",
    "any",
]


class JiraConfig(TypedDict):
    """Configuration for the Jira connection."""

    url: str
    username: str
    api_token: str
    verify_ssl: bool
    auth_mode: NotRequired[str]


type LogLevel = Literal[
    "DEBUG",
    "INFO",
    "NOTICE",
    "WARNING",
    "ERROR",
    "CRITICAL",
    "SUCCESS",
]


class ClientConfig(TypedDict):
    """Configuration for client behaviour."""

    log_level: LogLevel
    timeout: int
    log_file: NotRequired[str]


class Config(TypedDict):
    """Configuration for the config loader."""

    jira: JiraConfig
    client: ClientConfig


type SectionName = Literal["jira", "client"]
