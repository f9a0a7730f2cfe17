"""Models package for Jira REST resources."""

from jira_issues.models.base import JiraModel, JiraTime
from jira_issues.models.issue import (
    ASSIGNEE_AUTOMATIC,
    Issue,
    IssueFields,
    IssueLink,
    IssueLinkType,
    Subtasks,
)
from jira_issues.models.resources import (
    Attachment,
    AvatarUrls,
    Comment,
    Comments,
    CommentVisibility,
    Component,
    Epic,
    FixVersion,
    IssueType,
    Priority,
    Progress,
    Project,
    Resolution,
    Status,
    StatusCategory,
    User,
    Watches,
    Worklog,
    WorklogRecord,
)
from jira_issues.models.search import SearchOptions, SearchResult
from jira_issues.models.transition import (
    CreateTransitionPayload,
    Transition,
    TransitionField,
    TransitionPayload,
    TransitionResult,
    UpdateIssueRequest,
)

__all__ = [
    "ASSIGNEE_AUTOMATIC",
    "Attachment",
    "AvatarUrls",
    "Comment",
    "CommentVisibility",
    "Comments",
    "Component",
    "CreateTransitionPayload",
    "Epic",
    "FixVersion",
    "Issue",
    "IssueFields",
    "IssueLink",
    "IssueLinkType",
    "IssueType",
    "JiraModel",
    "JiraTime",
    "Priority",
    "Progress",
    "Project",
    "Resolution",
    "SearchOptions",
    "SearchResult",
    "Status",
    "StatusCategory",
    "Subtasks",
    "Transition",
    "TransitionField",
    "TransitionPayload",
    "TransitionResult",
    "UpdateIssueRequest",
    "User",
    "Watches",
    "Worklog",
    "WorklogRecord",
]
