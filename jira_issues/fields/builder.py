"""Build issues from display-name/value pairs and create-metadata."""

import logging
from collections.abc import Mapping
from typing import Any

from jira_issues.clients.exceptions import FieldNotFoundError, UnsupportedTypeError
from jira_issues.fields.metadata import IssueTypeMeta, ProjectMeta
from jira_issues.models.issue import Issue, IssueFields
from jira_issues.models.resources import Component, IssueType, Priority, Project, User

logger = logging.getLogger(__name__)

COMPONENT_ITEMS = "component"


def coerce_field_value(
    meta_project: ProjectMeta,
    meta_issuetype: IssueTypeMeta,
    jira_key: str,
    name: str,
    value: str,
) -> Any:
    """Shape ``value`` the way the schema type of ``jira_key`` requires.

    Raises:
        UnsupportedTypeError: If the schema type is not one the builder knows
        MetadataLookupError: If the schema type (or item type) is missing

    """
    value_type = meta_issuetype.schema_type(jira_key)
    match value_type:
        case "array":
            elem_type = meta_issuetype.schema_items(jira_key)
            if elem_type == COMPONENT_ITEMS:
                return [Component(name=value)]
            return [value]
        case "string" | "date" | "any":
            # "any" is treated as a string
            return value
        case "project":
            return Project(name=meta_project.name, id=meta_project.id)
        case "priority":
            return Priority(name=value)
        case "user":
            return User(name=value)
        case "issuetype":
            return IssueType(name=value)
        case _:
            raise UnsupportedTypeError(value_type, name)


def init_issue_with_meta_and_fields(
    meta_project: ProjectMeta,
    meta_issuetype: IssueTypeMeta,
    fields_config: Mapping[str, str],
) -> Issue:
    """Return an Issue with the values of ``fields_config`` set.

    Args:
        meta_project: Metadata of the project the issue is created in
        meta_issuetype: Metadata of the issue type to create
        fields_config: Field name as shown in the UI mapped to its string value

    Every value is placed in ``unknowns`` under its internal key, including
    keys the fixed schema knows; a serialize/deserialize cycle moves those
    into their typed attributes. Completeness against the required fields
    is not checked here.

    Raises:
        FieldNotFoundError: If a name is not a field of the issue type
        UnsupportedTypeError: If a field's schema type cannot be coerced

    """
    all_fields = meta_issuetype.all_fields()
    unknowns: dict[str, Any] = {}

    for name, value in fields_config.items():
        jira_key = all_fields.get(name)
        if jira_key is None:
            logger.error("Field %r is not available for issue type %s", name, meta_issuetype.name)
            raise FieldNotFoundError(name)

        unknowns[jira_key] = coerce_field_value(meta_project, meta_issuetype, jira_key, name, value)
        logger.debug("Mapped field %r to %s", name, jira_key)

    return Issue(fields=IssueFields(unknowns=unknowns))
