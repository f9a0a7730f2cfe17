"""Create-metadata for projects and issue types.

Jira describes the fields available when creating an issue of a given type
in a given project as a nested JSON tree (the ``createmeta`` resource):

    {"summary": {"name": "Summary", "required": true,
                 "schema": {"type": "string", "system": "summary"}},
     "components": {"name": "Component/s", "required": false,
                    "schema": {"type": "array", "items": "component"}}}

Fetching that payload is left to the caller; this module only reads it.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Final

from jira_issues.clients.exceptions import MetadataLookupError


class _NotFound:
    """Sentinel type returned for missing metadata paths."""

    _instance: "_NotFound | None" = None

    def __new__(cls) -> "_NotFound":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND: Final = _NotFound()


def slash_path(path: str) -> tuple[str, ...]:
    """Split a slash separated path such as ``"customfield_1/schema/type"``."""
    return tuple(segment for segment in path.split("/") if segment)


class MetadataTree(Mapping[str, Any]):
    """Read-only view over a nested mapping, addressed by path segments.

    >>> tree = MetadataTree({"duedate": {"schema": {"type": "date"}}})
    >>> tree.lookup("duedate", "schema", "type")
    'date'
    >>> tree.lookup("duedate", "schema", "items")
    NOT_FOUND
    """

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: Mapping[str, Any] = MappingProxyType(dict(data or {}))

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"MetadataTree({dict(self._data)!r})"

    def lookup(self, *path: str) -> Any:
        """Return the value at ``path`` or NOT_FOUND if any segment is missing."""
        node: Any = self._data
        for segment in path:
            if not isinstance(node, Mapping) or segment not in node:
                return NOT_FOUND
            node = node[segment]
        return node

    def string(self, *path: str) -> str:
        """Return the string at ``path``.

        Raises:
            MetadataLookupError: If the path is missing or does not hold a string

        """
        value = self.lookup(*path)
        if not isinstance(value, str):
            raise MetadataLookupError(path)
        return value

    def subtree(self, *path: str) -> "MetadataTree":
        """Return the mapping at ``path`` as a tree, empty if it is missing."""
        value = self.lookup(*path)
        return MetadataTree(value if isinstance(value, Mapping) else None)


@dataclass(frozen=True, slots=True)
class IssueTypeMeta:
    """Metadata of one issue type as returned by createmeta."""

    name: str
    id: str = ""
    fields: MetadataTree = field(default_factory=MetadataTree)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "IssueTypeMeta":
        return cls(
            name=str(data.get("name", "")),
            id=str(data.get("id", "")),
            fields=MetadataTree(data.get("fields") or {}),
        )

    def all_fields(self) -> dict[str, str]:
        """Return the display name to internal key table of this issue type.

        Fields without a ``name`` member are listed under their key.
        """
        table: dict[str, str] = {}
        for key in self.fields:
            name = self.fields.lookup(key, "name")
            table[name if isinstance(name, str) and name else key] = key
        return table

    def schema_type(self, key: str) -> str:
        """Return the declared schema type of the field with internal key ``key``."""
        return self.fields.string(key, "schema", "type")

    def schema_items(self, key: str) -> str:
        """Return the element type of an array field."""
        return self.fields.string(key, "schema", "items")

    def required_fields(self) -> list[str]:
        """Return the internal keys marked as required."""
        return [key for key in self.fields if self.fields.lookup(key, "required") is True]


@dataclass(frozen=True, slots=True)
class ProjectMeta:
    """Metadata of a project as returned by createmeta."""

    name: str
    id: str = ""
    key: str = ""
    issuetypes: tuple[IssueTypeMeta, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProjectMeta":
        return cls(
            name=str(data.get("name", "")),
            id=str(data.get("id", "")),
            key=str(data.get("key", "")),
            issuetypes=tuple(IssueTypeMeta.from_dict(item) for item in data.get("issuetypes") or ()),
        )

    def issue_type(self, name: str) -> IssueTypeMeta | None:
        """Return the issue type called ``name``, or None."""
        for issuetype in self.issuetypes:
            if issuetype.name == name:
                return issuetype
        return None
