"""Issue transitions and the request payloads for issue updates."""

from typing import ClassVar

from pydantic import Field

from jira_issues.models.base import JiraModel


class TransitionField(JiraModel):
    """Requirement flag of a field on a transition screen."""

    always_emit: ClassVar[frozenset[str]] = frozenset({"required"})

    required: bool = Field(False, alias="required")


class Transition(JiraModel):
    """A transition available for an issue."""

    always_emit: ClassVar[frozenset[str]] = frozenset({"id", "name", "fields"})

    id: str = Field("", alias="id")
    name: str = Field("", alias="name")
    fields: dict[str, TransitionField] = Field(default_factory=dict, alias="fields")

    def required_fields(self) -> list[str]:
        """Return the keys of fields that must be set to perform this transition."""
        return [key for key, field in self.fields.items() if field.required]


class TransitionResult(JiraModel):
    """Response wrapper of the transitions endpoint."""

    always_emit: ClassVar[frozenset[str]] = frozenset({"transitions"})

    transitions: list[Transition] = Field(default_factory=list, alias="transitions")


class TransitionPayload(JiraModel):
    """The transition reference sent when performing a transition."""

    always_emit: ClassVar[frozenset[str]] = frozenset({"id"})

    id: str = Field("", alias="id")


class CreateTransitionPayload(JiraModel):
    """Request body for performing a transition."""

    always_emit: ClassVar[frozenset[str]] = frozenset({"transition"})

    transition: TransitionPayload = Field(default_factory=TransitionPayload, alias="transition")


class UpdateIssueRequest(JiraModel):
    """Request body for an issue update.

    ``update`` maps a field key to a list of operations, e.g.
    ``{"labels": [{"add": "triaged"}]}``.
    """

    always_emit: ClassVar[frozenset[str]] = frozenset({"update"})

    update: dict[str, list[dict[str, str]]] = Field(default_factory=dict, alias="update")
