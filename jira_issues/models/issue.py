"""Jira issue record and its fields payload.

An issue's ``fields`` object mixes the fixed schema (summary, status,
assignee, ...) with per-instance custom fields such as
``customfield_10218``. :class:`IssueFields` keeps the fixed schema in typed
attributes and everything else in the ``unknowns`` store; both are merged
back into one flat object when serialized.
"""

from collections.abc import Mapping
from typing import Any, ClassVar

from pydantic import (
    Field,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    model_serializer,
    model_validator,
)

from jira_issues.fields.registry import known_field_keys, recognised_keys
from jira_issues.models.base import JiraModel, dump_value, is_wire
from jira_issues.models.resources import (
    Attachment,
    Comment,
    Comments,
    Component,
    Epic,
    FixVersion,
    IssueType,
    Priority,
    Progress,
    Project,
    Resolution,
    Status,
    User,
    Watches,
    Worklog,
)

# Value of the "Assignee: Automatic" option in Jira
ASSIGNEE_AUTOMATIC = "-1"

UNKNOWNS = "unknowns"


class IssueFields(JiraModel):
    """The fields of a Jira issue.

    Keys of the wire object that are not declared wire keys end up in
    ``unknowns``, attribute names such as ``creator`` or ``type`` included;
    on serialization they are written back at the same level as the
    declared fields. When constructing in Python, attribute names are
    accepted and ``unknowns=`` seeds the store.
    """

    always_emit: ClassVar[frozenset[str]] = frozenset({"summary"})

    # TODO: timespent, timeestimate, timetracking and environment are still
    # only reachable through unknowns
    type: IssueType = Field(default_factory=IssueType, alias="issuetype")
    project: Project = Field(default_factory=Project, alias="project")
    resolution: Resolution | None = Field(None, alias="resolution")
    priority: Priority | None = Field(None, alias="priority")
    resolutiondate: str | None = Field(None, alias="resolutiondate")
    created: str | None = Field(None, alias="created")
    watches: Watches | None = Field(None, alias="watches")
    assignee: User | None = Field(None, alias="assignee")
    updated: str | None = Field(None, alias="updated")
    description: str | None = Field(None, alias="description")
    summary: str = Field("", alias="summary")
    creator: User | None = Field(None, alias="Creator")
    reporter: User | None = Field(None, alias="reporter")
    components: list[Component] = Field(default_factory=list, alias="components")
    status: Status | None = Field(None, alias="status")
    progress: Progress | None = Field(None, alias="progress")
    aggregate_progress: Progress | None = Field(None, alias="aggregateprogress")
    worklog: Worklog | None = Field(None, alias="worklog")
    issue_links: list["IssueLink"] = Field(default_factory=list, alias="issuelinks")
    comments: Comments | None = Field(None, alias="comment")
    fix_versions: list[FixVersion] = Field(default_factory=list, alias="fixVersions")
    labels: list[str] = Field(default_factory=list, alias="labels")
    subtasks: list["Subtasks"] = Field(default_factory=list, alias="subtasks")
    attachments: list[Attachment] = Field(default_factory=list, alias="attachment")
    epic: Epic | None = Field(None, alias="epic")
    duedate: str | None = Field(None, alias="duedate")
    unknowns: dict[str, Any] = Field(default_factory=dict, exclude=True)

    @model_validator(mode="wrap")
    @classmethod
    def _split(cls, data: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo) -> "IssueFields":
        if isinstance(data, IssueFields) or not isinstance(data, Mapping):
            return handler(data)

        if is_wire(info):
            # Only declared wire keys reach the typed decode; null leaves the default
            known = known_field_keys(cls)
            fields = handler({key: value for key, value in data.items() if key in known and value is not None})
            fields.unknowns = {key: value for key, value in data.items() if key not in known}
            return fields

        rest = dict(data)
        store = rest.pop(UNKNOWNS, None)
        fields = handler(rest)
        unknowns = dict(store) if isinstance(store, Mapping) else {}
        known = recognised_keys(cls)
        unknowns.update((key, value) for key, value in rest.items() if key not in known)
        fields.unknowns = unknowns
        return fields

    @model_serializer(mode="wrap")
    def _serialize(self, handler: SerializerFunctionWrapHandler, info: SerializationInfo) -> dict[str, Any]:
        flat = self._drop_empty(handler(self), info)
        mode = "json" if info.mode_is_json() else "python"
        for key, value in self.unknowns.items():
            flat[key] = dump_value(value, mode=mode, by_alias=bool(info.by_alias))
        return flat

    def custom_fields(self) -> dict[str, Any]:
        """Return the dynamic fields whose key follows the customfield_<n> convention."""
        return {key: value for key, value in self.unknowns.items() if key.startswith("customfield_")}


class Issue(JiraModel):
    """A Jira issue."""

    expand: str | None = Field(None, alias="expand")
    id: str | None = Field(None, alias="id")
    self_url: str | None = Field(None, alias="self")
    key: str | None = Field(None, alias="key")
    fields: IssueFields | None = Field(None, alias="fields")


class Subtasks(JiraModel):
    """A sub-task of a parent issue."""

    always_emit: ClassVar[frozenset[str]] = frozenset({"id", "key", "self_url", "fields"})

    id: str = Field("", alias="id")
    key: str = Field("", alias="key")
    self_url: str = Field("", alias="self")
    fields: IssueFields = Field(default_factory=IssueFields, alias="fields")


class IssueLinkType(JiraModel):
    """Type of a link between two issues ("Related to", "Duplicate", ...)."""

    always_emit: ClassVar[frozenset[str]] = frozenset({"name", "inward", "outward"})

    id: str | None = Field(None, alias="id")
    self_url: str | None = Field(None, alias="self")
    name: str = Field("", alias="name")
    inward: str = Field("", alias="inward")
    outward: str = Field("", alias="outward")


class IssueLink(JiraModel):
    """A link between two issues."""

    always_emit: ClassVar[frozenset[str]] = frozenset({"type", "outward_issue", "inward_issue"})

    id: str | None = Field(None, alias="id")
    self_url: str | None = Field(None, alias="self")
    type: IssueLinkType = Field(default_factory=IssueLinkType, alias="type")
    outward_issue: Issue | None = Field(None, alias="outwardIssue")
    inward_issue: Issue | None = Field(None, alias="inwardIssue")
    comment: Comment | None = Field(None, alias="comment")


IssueFields.model_rebuild()
Issue.model_rebuild()
Subtasks.model_rebuild()
IssueLink.model_rebuild()
