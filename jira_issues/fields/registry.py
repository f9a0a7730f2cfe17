"""Known-field registry.

Maps the wire keys of the fixed issue schema to their declared kind.
Everything not listed here is a dynamic field and lives in the
``unknowns`` store of :class:`~jira_issues.models.issue.IssueFields`.
"""

from functools import cache
from types import MappingProxyType

from pydantic import BaseModel

from jira_issues.type_definitions import FieldKind

KNOWN_FIELDS: MappingProxyType[str, FieldKind] = MappingProxyType(
    {
        "issuetype": "issuetype",
        "project": "project",
        "resolution": "any",
        "priority": "priority",
        "resolutiondate": "date",
        "created": "date",
        "duedate": "date",
        "watches": "any",
        "assignee": "user",
        "updated": "date",
        "description": "string",
        "summary": "string",
        "Creator": "user",
        "reporter": "user",
        "components": "array-of-component",
        "status": "any",
        "progress": "any",
        "aggregateprogress": "any",
        "worklog": "any",
        "issuelinks": "any",
        "comment": "any",
        "fixVersions": "any",
        "labels": "array-of-string",
        "subtasks": "any",
        "attachment": "any",
        "epic": "any",
    }
)


def is_known(key: str) -> bool:
    """Return True if ``key`` is a field of the fixed issue schema."""
    return key in KNOWN_FIELDS


def kind_of(key: str) -> FieldKind | None:
    """Return the declared kind of a known field, or None for dynamic fields."""
    return KNOWN_FIELDS.get(key)


@cache
def known_field_keys(model: type[BaseModel]) -> frozenset[str]:
    """Return the wire keys declared by ``model``.

    The wire key of a field is its alias. Fields without an alias have no
    wire representation and are skipped.
    """
    return frozenset(field.alias for field in model.model_fields.values() if field.alias)


@cache
def recognised_keys(model: type[BaseModel]) -> frozenset[str]:
    """Return every input key a typed decode of ``model`` consumes.

    Models accept attribute names as well as wire keys, so the attribute
    name of each aliased field is included alongside the alias.
    """
    keys: set[str] = set()
    for name, field in model.model_fields.items():
        if field.alias:
            keys.update((field.alias, name))
    return frozenset(keys)
