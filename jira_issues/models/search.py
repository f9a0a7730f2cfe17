"""JQL search results and paging options."""

from typing import ClassVar

from pydantic import Field, NonNegativeInt

from jira_issues.models.base import JiraModel
from jira_issues.models.issue import Issue

DEFAULT_MAX_RESULTS = 50


class SearchOptions(JiraModel):
    """Paging parameters for a search.

    ``start_at`` is the zero-based index of the first issue to return,
    ``max_results`` the page size (Jira defaults to 50).
    """

    start_at: NonNegativeInt = Field(0, alias="startAt")
    max_results: NonNegativeInt = Field(DEFAULT_MAX_RESULTS, alias="maxResults")

    def to_params(self) -> dict[str, int]:
        return {"startAt": self.start_at, "maxResults": self.max_results}


class SearchResult(JiraModel):
    """One page of issues matching a JQL query."""

    always_emit: ClassVar[frozenset[str]] = frozenset({"issues", "start_at", "max_results", "total"})

    issues: list[Issue] = Field(default_factory=list, alias="issues")
    start_at: int = Field(0, alias="startAt")
    max_results: int = Field(0, alias="maxResults")
    total: int = Field(0, alias="total")

    def has_more(self) -> bool:
        """Return True if issues beyond this page exist."""
        return self.start_at + len(self.issues) < self.total

    def next_options(self) -> SearchOptions:
        """Return the paging options for the page after this one."""
        return SearchOptions(
            start_at=self.start_at + len(self.issues),
            max_results=self.max_results or DEFAULT_MAX_RESULTS,
        )
