"""Shared pytest fixtures and configuration for all tests."""

import json
import os
from collections.abc import Generator
from typing import Any, cast
from unittest.mock import MagicMock

import pytest
import requests
from _pytest.config import Config

from jira_issues.clients.issue_client import IssueClient
from jira_issues.clients.transport import JiraTransport
from jira_issues.fields.metadata import IssueTypeMeta, ProjectMeta

BASE_URL = "https://jira.local"


def pytest_configure(config: Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark a test as a unit test")
    config.addinivalue_line(
        "markers",
        "integration: mark a test as an integration test against a live Jira",
    )


def _env_flag(name: str, default: bool = False) -> bool:
    """Read boolean environment flag (true/false)."""
    val = os.environ.get(name, "true" if default else "false").strip().lower()
    return val in {"1", "true", "yes", "on"}


def pytest_collection_modifyitems(config: Config, items: list[pytest.Item]) -> None:
    """Skip integration and unmarked tests by default.

    - Integration tests run only with JIRA_ISSUES_RUN_INTEGRATION=true.
    - Unmarked tests run only with JIRA_ISSUES_RUN_ALL_TESTS=true.
    """
    run_all = _env_flag("JIRA_ISSUES_RUN_ALL_TESTS", False)
    run_integration = _env_flag("JIRA_ISSUES_RUN_INTEGRATION", False) or run_all

    skip_integration = pytest.mark.skip(
        reason="Integration tests disabled by default. Set JIRA_ISSUES_RUN_INTEGRATION=true to enable.",
    )
    skip_unmarked = pytest.mark.skip(
        reason="Unmarked test skipped by default. Mark with unit/integration or set JIRA_ISSUES_RUN_ALL_TESTS=true.",
    )

    for item in items:
        kws = item.keywords
        if "integration" in kws and not run_integration:
            item.add_marker(skip_integration)
            continue
        if not run_all and not any(m in kws for m in ("unit", "integration")):
            item.add_marker(skip_unmarked)


@pytest.fixture
def test_env() -> Generator[dict[str, str]]:
    """Control environment variables during a test, restoring them afterwards."""
    original_env = os.environ.copy()
    try:
        yield cast("dict[str, str]", os.environ)
    finally:
        os.environ.clear()
        os.environ.update(original_env)


def make_response(
    status_code: int = 200,
    json_data: Any = None,
    *,
    content: bytes | None = None,
    headers: dict[str, str] | None = None,
    reason: str = "OK",
) -> MagicMock:
    """Build a mocked ``requests.Response``."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.reason = reason
    response.headers = headers or {}
    if json_data is not None:
        response.json.return_value = json_data
        response.content = content if content is not None else json.dumps(json_data).encode()
    else:
        response.json.side_effect = ValueError("No JSON object could be decoded")
        response.content = content if content is not None else b""
    return response


@pytest.fixture
def response_factory():
    """Provide the mocked response builder to tests."""
    return make_response


@pytest.fixture
def mock_session() -> MagicMock:
    """Mocked requests session answering 204 No Content by default."""
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    session.request.return_value = make_response(204)
    return session


@pytest.fixture
def transport(mock_session: MagicMock) -> JiraTransport:
    """Transport over the mocked session."""
    return JiraTransport(BASE_URL, mock_session, timeout=5)


@pytest.fixture
def issue_client(transport: JiraTransport) -> IssueClient:
    """Issue client over the mocked transport."""
    return IssueClient(transport)


@pytest.fixture
def createmeta_issuetype() -> dict[str, Any]:
    """Raw createmeta payload of a "Bug" issue type."""
    return {
        "id": "1",
        "name": "Bug",
        "fields": {
            "summary": {
                "name": "Summary",
                "required": True,
                "schema": {"type": "string", "system": "summary"},
            },
            "components": {
                "name": "Component/s",
                "required": False,
                "schema": {"type": "array", "items": "component", "system": "components"},
            },
            "labels": {
                "name": "Labels",
                "required": False,
                "schema": {"type": "array", "items": "string", "system": "labels"},
            },
            "assignee": {
                "name": "Assignee",
                "required": False,
                "schema": {"type": "user", "system": "assignee"},
            },
            "project": {
                "name": "Project",
                "required": True,
                "schema": {"type": "project", "system": "project"},
            },
            "priority": {
                "name": "Priority",
                "required": False,
                "schema": {"type": "priority", "system": "priority"},
            },
            "issuetype": {
                "name": "Issue Type",
                "required": True,
                "schema": {"type": "issuetype", "system": "issuetype"},
            },
            "duedate": {
                "name": "Due Date",
                "required": False,
                "schema": {"type": "date", "system": "duedate"},
            },
            "customfield_10218": {
                "name": "Justification",
                "required": False,
                "schema": {"type": "any", "custom": "com.example:justification", "customId": 10218},
            },
            "customfield_10300": {
                "name": "Sprint Goal",
                "required": False,
                "schema": {"type": "sprint-goal", "customId": 10300},
            },
        },
    }


@pytest.fixture
def meta_issuetype(createmeta_issuetype: dict[str, Any]) -> IssueTypeMeta:
    """Issue type metadata for "Bug"."""
    return IssueTypeMeta.from_dict(createmeta_issuetype)


@pytest.fixture
def meta_project(createmeta_issuetype: dict[str, Any]) -> ProjectMeta:
    """Project metadata with a single "Bug" issue type."""
    return ProjectMeta.from_dict(
        {"id": "10000", "key": "OPS", "name": "Operations", "issuetypes": [createmeta_issuetype]},
    )
