"""Field registry, create-metadata and the metadata-driven issue builder.

The builder is loaded lazily; it depends on the models, which in turn use
the registry from this package.
"""

from jira_issues.fields.metadata import NOT_FOUND, IssueTypeMeta, MetadataTree, ProjectMeta, slash_path
from jira_issues.fields.registry import KNOWN_FIELDS, is_known, kind_of, known_field_keys

__all__ = [
    "KNOWN_FIELDS",
    "NOT_FOUND",
    "IssueTypeMeta",
    "MetadataTree",
    "ProjectMeta",
    "init_issue_with_meta_and_fields",
    "is_known",
    "kind_of",
    "known_field_keys",
    "slash_path",
]


def __getattr__(name: str) -> object:  # pragma: no cover - simple lazy import shim
    if name == "init_issue_with_meta_and_fields":
        from .builder import init_issue_with_meta_and_fields as _init  # noqa: PLC0415

        return _init
    raise AttributeError(name)
