"""Client library for Jira REST API v2 issues.

Issues keep the fixed Jira schema in typed fields and every custom field
in a dynamic store; both are written back as one flat ``fields`` object.
"""

from jira_issues.clients.exceptions import (
    DecodeError,
    FieldNotFoundError,
    JiraError,
    MetadataLookupError,
    ParseError,
    TransportError,
    UnsupportedTypeError,
)
from jira_issues.fields.builder import init_issue_with_meta_and_fields
from jira_issues.fields.metadata import IssueTypeMeta, MetadataTree, ProjectMeta
from jira_issues.models import Issue, IssueFields

__version__ = "0.1.0"

__all__ = [
    "DecodeError",
    "FieldNotFoundError",
    "Issue",
    "IssueFields",
    "IssueTypeMeta",
    "JiraError",
    "MetadataLookupError",
    "MetadataTree",
    "ParseError",
    "ProjectMeta",
    "TransportError",
    "UnsupportedTypeError",
    "__version__",
    "init_issue_with_meta_and_fields",
]
