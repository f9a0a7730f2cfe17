"""Jira REST clients.

Lazily expose the client classes so that importing the exception module
does not pull in the models and the HTTP stack.
"""

__all__ = ["IssueClient", "JiraTransport"]


def __getattr__(name: str) -> object:  # pragma: no cover - simple lazy import shim
    if name == "IssueClient":
        from .issue_client import IssueClient as _IssueClient  # noqa: PLC0415

        return _IssueClient
    if name == "JiraTransport":
        from .transport import JiraTransport as _JiraTransport  # noqa: PLC0415

        return _JiraTransport
    raise AttributeError(name)
