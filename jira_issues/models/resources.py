"""Reference resources embedded in Jira issues.

Users, projects, priorities and the other small objects an issue points to.
"""

from typing import Any, ClassVar

from pydantic import Field

from jira_issues.models.base import JiraModel, JiraTime


class AvatarUrls(JiraModel):
    """Different dimensions of avatars / images."""

    size_48: str | None = Field(None, alias="48x48")
    size_24: str | None = Field(None, alias="24x24")
    size_16: str | None = Field(None, alias="16x16")
    size_32: str | None = Field(None, alias="32x32")


class User(JiraModel):
    """A user an issue is assigned to, reported by or created by."""

    self_url: str | None = Field(None, alias="self")
    name: str | None = Field(None, alias="name")
    key: str | None = Field(None, alias="key")
    email_address: str | None = Field(None, alias="emailAddress")
    avatar_urls: AvatarUrls | None = Field(None, alias="avatarUrls")
    display_name: str | None = Field(None, alias="displayName")
    active: bool = Field(False, alias="active")
    time_zone: str | None = Field(None, alias="timeZone")


class Project(JiraModel):
    """A Jira project reference."""

    self_url: str | None = Field(None, alias="self")
    id: str | None = Field(None, alias="id")
    key: str | None = Field(None, alias="key")
    name: str | None = Field(None, alias="name")
    description: str | None = Field(None, alias="description")
    avatar_urls: AvatarUrls | None = Field(None, alias="avatarUrls")


class IssueType(JiraModel):
    """A type of Jira issue.

    Typical types are "Request", "Bug", "Story", ...
    """

    self_url: str | None = Field(None, alias="self")
    id: str | None = Field(None, alias="id")
    description: str | None = Field(None, alias="description")
    icon_url: str | None = Field(None, alias="iconUrl")
    name: str | None = Field(None, alias="name")
    subtask: bool = Field(False, alias="subtask")
    avatar_id: int = Field(0, alias="avatarId")


class Resolution(JiraModel):
    """A resolution of a Jira issue ("Fixed", "Won't Fix", ...)."""

    always_emit: ClassVar[frozenset[str]] = frozenset({"self_url", "id", "description", "name"})

    self_url: str = Field("", alias="self")
    id: str = Field("", alias="id")
    description: str = Field("", alias="description")
    name: str = Field("", alias="name")


class Priority(JiraModel):
    """A priority of a Jira issue ("Normal", "Urgent", ...)."""

    self_url: str | None = Field(None, alias="self")
    icon_url: str | None = Field(None, alias="iconUrl")
    name: str | None = Field(None, alias="name")
    id: str | None = Field(None, alias="id")


class Watches(JiraModel):
    """How many users are watching an issue."""

    self_url: str | None = Field(None, alias="self")
    watch_count: int = Field(0, alias="watchCount")
    is_watching: bool = Field(False, alias="isWatching")


class Component(JiraModel):
    """A user defined component of a project."""

    self_url: str | None = Field(None, alias="self")
    id: str | None = Field(None, alias="id")
    name: str | None = Field(None, alias="name")


class StatusCategory(JiraModel):
    """The category a status belongs to."""

    always_emit: ClassVar[frozenset[str]] = frozenset({"self_url", "id", "name", "key", "color_name"})

    self_url: str = Field("", alias="self")
    id: int = Field(0, alias="id")
    name: str = Field("", alias="name")
    key: str = Field("", alias="key")
    color_name: str = Field("", alias="colorName")


class Status(JiraModel):
    """The current status of an issue ("Open", "In Progress", "Closed", ...)."""

    always_emit: ClassVar[frozenset[str]] = frozenset(
        {"self_url", "description", "icon_url", "name", "id", "status_category"},
    )

    self_url: str = Field("", alias="self")
    description: str = Field("", alias="description")
    icon_url: str = Field("", alias="iconUrl")
    name: str = Field("", alias="name")
    id: str = Field("", alias="id")
    status_category: StatusCategory = Field(default_factory=StatusCategory, alias="statusCategory")


class Progress(JiraModel):
    """Progress of an issue."""

    always_emit: ClassVar[frozenset[str]] = frozenset({"progress", "total"})

    progress: int = Field(0, alias="progress")
    total: int = Field(0, alias="total")


class Epic(JiraModel):
    """The epic an issue belongs to. The "color" value is not kept."""

    always_emit: ClassVar[frozenset[str]] = frozenset({"id", "key", "self_url", "name", "summary", "done"})

    id: int = Field(0, alias="id")
    key: str = Field("", alias="key")
    self_url: str = Field("", alias="self")
    name: str = Field("", alias="name")
    summary: str = Field("", alias="summary")
    done: bool = Field(False, alias="done")


class FixVersion(JiraModel):
    """A software release in which an issue is fixed."""

    archived: bool | None = Field(None, alias="archived")
    id: str | None = Field(None, alias="id")
    name: str | None = Field(None, alias="name")
    project_id: int = Field(0, alias="projectId")
    release_date: str | None = Field(None, alias="releaseDate")
    released: bool | None = Field(None, alias="released")
    self_url: str | None = Field(None, alias="self")
    user_release_date: str | None = Field(None, alias="userReleaseDate")

    def _omitted(self, name: str, value: Any) -> bool:
        # archived/released are tri-state: an explicit False is sent
        if name in ("archived", "released"):
            return value is None
        return super()._omitted(name, value)


class CommentVisibility(JiraModel):
    """Visibility of a comment, e.g. type "role" and value "Administrators"."""

    type: str | None = Field(None, alias="type")
    value: str | None = Field(None, alias="value")


class Comment(JiraModel):
    """A comment by a person on an issue."""

    id: str | None = Field(None, alias="id")
    self_url: str | None = Field(None, alias="self")
    name: str | None = Field(None, alias="name")
    author: User | None = Field(None, alias="author")
    body: str | None = Field(None, alias="body")
    update_author: User | None = Field(None, alias="updateAuthor")
    updated: str | None = Field(None, alias="updated")
    created: str | None = Field(None, alias="created")
    visibility: CommentVisibility | None = Field(None, alias="visibility")


class Comments(JiraModel):
    """The comments of an issue."""

    comments: list[Comment] = Field(default_factory=list, alias="comments")


class Attachment(JiraModel):
    """A file attached to an issue."""

    self_url: str | None = Field(None, alias="self")
    id: str | None = Field(None, alias="id")
    filename: str | None = Field(None, alias="filename")
    author: User | None = Field(None, alias="author")
    created: str | None = Field(None, alias="created")
    size: int = Field(0, alias="size")
    mime_type: str | None = Field(None, alias="mimeType")
    content: str | None = Field(None, alias="content")
    thumbnail: str | None = Field(None, alias="thumbnail")


class WorklogRecord(JiraModel):
    """One entry of an issue's work log."""

    always_emit: ClassVar[frozenset[str]] = frozenset(
        {"self_url", "comment", "time_spent", "time_spent_seconds", "id", "issue_id"},
    )

    self_url: str = Field("", alias="self")
    author: User = Field(default_factory=User, alias="author")
    update_author: User = Field(default_factory=User, alias="updateAuthor")
    comment: str = Field("", alias="comment")
    created: JiraTime | None = Field(None, alias="created")
    updated: JiraTime | None = Field(None, alias="updated")
    started: JiraTime | None = Field(None, alias="started")
    time_spent: str = Field("", alias="timeSpent")
    time_spent_seconds: int = Field(0, alias="timeSpentSeconds")
    id: str = Field("", alias="id")
    issue_id: str = Field("", alias="issueId")


class Worklog(JiraModel):
    """The work log of an issue: zero or more WorklogRecords."""

    always_emit: ClassVar[frozenset[str]] = frozenset({"start_at", "max_results", "total", "worklogs"})

    start_at: int = Field(0, alias="startAt")
    max_results: int = Field(0, alias="maxResults")
    total: int = Field(0, alias="total")
    worklogs: list[WorklogRecord] = Field(default_factory=list, alias="worklogs")
