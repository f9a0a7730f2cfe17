"""Tests for splitting and flattening issue fields."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from jira_issues.clients.exceptions import DecodeError, ParseError
from jira_issues.fields.registry import known_field_keys
from jira_issues.models import (
    Comment,
    Component,
    Issue,
    IssueFields,
    IssueLink,
    IssueLinkType,
    IssueType,
    Priority,
    User,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def raw_fields() -> dict:
    """A fields object as returned by GET /rest/api/2/issue/{id}."""
    return {
        "issuetype": {"id": "1", "name": "Bug", "subtask": False},
        "project": {"id": "10000", "key": "OPS", "name": "Operations"},
        "summary": "Login page returns 500",
        "description": "Stack trace attached",
        "assignee": {"name": "alice", "displayName": "Alice", "active": True},
        "labels": ["backend", "regression"],
        "components": [{"id": "10100", "name": "Backend"}],
        "priority": {"id": "2", "name": "High"},
        "created": "2023-01-01T12:00:00.000+0000",
        "customfield_10218": "because",
        "customfield_10400": {"value": "Prod", "id": "4"},
        "customfield_10500": ["a", "b"],
        "customfield_10600": None,
    }


class TestSplit:
    """Decoding a flat fields object into typed fields and unknowns."""

    def test_summary_and_custom_field(self) -> None:
        fields = IssueFields.from_wire({"summary": "Bug", "customfield_10218": "because"})

        assert fields.summary == "Bug"
        assert fields.unknowns == {"customfield_10218": "because"}

    def test_known_fields_are_typed(self, raw_fields: dict) -> None:
        fields = IssueFields.from_wire(raw_fields)

        assert fields.type == IssueType(id="1", name="Bug")
        assert fields.project.key == "OPS"
        assert fields.assignee == User(name="alice", display_name="Alice", active=True)
        assert fields.labels == ["backend", "regression"]
        assert fields.components == [Component(id="10100", name="Backend")]
        assert fields.priority == Priority(id="2", name="High")

    def test_unknowns_hold_only_dynamic_keys(self, raw_fields: dict) -> None:
        fields = IssueFields.from_wire(raw_fields)

        assert list(fields.unknowns) == [
            "customfield_10218",
            "customfield_10400",
            "customfield_10500",
            "customfield_10600",
        ]
        assert fields.unknowns["customfield_10400"] == {"value": "Prod", "id": "4"}
        assert fields.unknowns["customfield_10600"] is None

    def test_unknown_keys_never_overlap_known_keys(self, raw_fields: dict) -> None:
        raw_fields["environment"] = "staging"
        fields = IssueFields.from_wire(raw_fields)

        assert not set(fields.unknowns) & known_field_keys(IssueFields)
        assert fields.unknowns["environment"] == "staging"

    def test_capitalised_creator_key(self) -> None:
        fields = IssueFields.from_wire({"Creator": {"name": "bob"}, "creator": {"name": "carol"}})

        assert fields.creator == User(name="bob")
        assert fields.unknowns == {"creator": {"name": "carol"}}

    def test_attribute_names_are_dynamic_on_the_wire(self) -> None:
        fields = IssueFields.from_wire({"summary": "x", "type": "story", "fix_versions": ["1.0"]})

        assert fields.type == IssueType()
        assert fields.fix_versions == []
        assert fields.unknowns == {"type": "story", "fix_versions": ["1.0"]}

    def test_attribute_name_next_to_wire_key(self) -> None:
        fields = IssueFields.from_wire({"issuetype": {"name": "Bug"}, "type": "story"})

        assert fields.type == IssueType(name="Bug")
        assert fields.unknowns == {"type": "story"}
        assert fields.to_wire() == {"summary": "", "issuetype": {"name": "Bug"}, "type": "story"}

    def test_literal_unknowns_key_is_a_dynamic_field(self) -> None:
        fields = IssueFields.from_wire({"summary": "x", "unknowns": {"customfield_1": "y"}})

        assert fields.unknowns == {"unknowns": {"customfield_1": "y"}}
        assert fields.to_wire() == {"summary": "x", "unknowns": {"customfield_1": "y"}}

    def test_attribute_names_inside_issue(self) -> None:
        issue = Issue.from_wire({"key": "OPS-1", "fields": {"summary": "x", "comments": "none"}})

        assert issue.fields.comments is None
        assert issue.fields.unknowns == {"comments": "none"}

    def test_null_known_fields_keep_their_defaults(self) -> None:
        fields = IssueFields.from_wire(
            {
                "summary": None,
                "labels": None,
                "components": None,
                "fixVersions": None,
                "issuelinks": None,
                "subtasks": None,
                "attachment": None,
                "issuetype": None,
                "project": None,
                "resolution": None,
                "customfield_1": None,
            },
        )

        assert fields.summary == ""
        assert fields.labels == []
        assert fields.components == []
        assert fields.type == IssueType()
        assert fields.resolution is None
        assert fields.unknowns == {"customfield_1": None}

    def test_python_construction_accepts_attribute_names(self) -> None:
        fields = IssueFields(creator=User(name="bob"), type=IssueType(name="Bug"), unknowns={"customfield_1": "y"})

        assert fields.creator == User(name="bob")
        assert fields.type == IssueType(name="Bug")
        assert fields.unknowns == {"customfield_1": "y"}

    def test_accepts_json_text(self) -> None:
        fields = IssueFields.from_wire(b'{"summary": "Bug", "customfield_1": 3}')

        assert fields.summary == "Bug"
        assert fields.unknowns == {"customfield_1": 3}

    def test_input_mapping_is_not_modified(self, raw_fields: dict) -> None:
        snapshot = json.loads(json.dumps(raw_fields))

        IssueFields.from_wire(raw_fields)

        assert raw_fields == snapshot

    def test_nested_subtask_fields_are_split(self) -> None:
        fields = IssueFields.from_wire(
            {
                "summary": "Parent",
                "subtasks": [
                    {
                        "id": "2",
                        "key": "OPS-2",
                        "self": "https://jira.local/rest/api/2/issue/2",
                        "fields": {"summary": "Child", "customfield_7": "x"},
                    },
                ],
            },
        )

        child = fields.subtasks[0].fields
        assert child.summary == "Child"
        assert child.unknowns == {"customfield_7": "x"}


class TestFlatten:
    """Encoding typed fields and unknowns into one flat object."""

    def test_reproduces_input_object(self) -> None:
        raw = {"summary": "Bug", "customfield_10218": "because"}

        assert IssueFields.from_wire(raw).to_wire() == raw

    def test_empty_known_fields_are_omitted(self) -> None:
        assert IssueFields(summary="Only summary").to_wire() == {"summary": "Only summary"}

    def test_summary_is_always_emitted(self) -> None:
        assert IssueFields().to_wire() == {"summary": ""}

    def test_unknowns_key_is_never_emitted(self) -> None:
        fields = IssueFields(summary="x", unknowns={"customfield_1": "y"})

        wire = fields.to_wire()

        assert "unknowns" not in wire
        assert wire == {"summary": "x", "customfield_1": "y"}

    def test_unknowns_are_emitted_at_top_level(self) -> None:
        fields = IssueFields(
            summary="x",
            labels=["a"],
            unknowns={"customfield_1": {"value": "High"}, "customfield_2": None},
        )

        assert fields.to_wire() == {
            "summary": "x",
            "labels": ["a"],
            "customfield_1": {"value": "High"},
            "customfield_2": None,
        }

    def test_unknown_wins_on_collision(self) -> None:
        fields = IssueFields(summary="typed", unknowns={"summary": "dynamic"})

        assert fields.to_wire()["summary"] == "dynamic"

    def test_models_in_unknowns_are_dumped_by_alias(self) -> None:
        fields = IssueFields(
            unknowns={
                "components": [Component(name="Backend")],
                "assignee": User(name="alice", display_name="Alice"),
            },
        )

        wire = fields.to_wire()

        assert wire["components"] == [{"name": "Backend"}]
        assert wire["assignee"] == {"name": "alice", "displayName": "Alice"}

    def test_known_field_with_value_is_emitted_by_wire_key(self) -> None:
        fields = IssueFields(summary="x", creator=User(name="bob"), fix_versions=[])

        assert fields.to_wire() == {"summary": "x", "Creator": {"name": "bob"}}


class TestRoundTrip:
    """Flatten followed by split keeps dynamic fields intact."""

    def test_dynamic_fields_survive(self, raw_fields: dict) -> None:
        first = IssueFields.from_wire(raw_fields)

        second = IssueFields.from_wire(first.to_wire())

        assert second.unknowns == first.unknowns
        assert second.summary == first.summary
        assert second.components == first.components

    def test_builder_style_unknowns_move_into_typed_fields(self) -> None:
        fields = IssueFields(
            unknowns={
                "components": [Component(name="Backend")],
                "customfield_10218": "because",
            },
        )

        reparsed = IssueFields.from_wire(fields.to_wire())

        assert reparsed.components == [Component(name="Backend")]
        assert reparsed.unknowns == {"customfield_10218": "because"}

    def test_json_text_round_trip(self, raw_fields: dict) -> None:
        issue = Issue(id="10002", key="OPS-1", fields=IssueFields.from_wire(raw_fields))

        decoded = Issue.from_wire(issue.to_json())

        assert decoded.key == "OPS-1"
        assert decoded.fields is not None
        assert decoded.fields.unknowns == issue.fields.unknowns


class TestIssue:
    """Issue envelope around the fields object."""

    def test_decode(self) -> None:
        issue = Issue.from_wire(
            {
                "expand": "renderedFields",
                "id": "10002",
                "self": "https://jira.local/rest/api/2/issue/10002",
                "key": "OPS-1",
                "fields": {"summary": "Bug", "customfield_10218": "because"},
            },
        )

        assert issue.id == "10002"
        assert issue.self_url == "https://jira.local/rest/api/2/issue/10002"
        assert issue.fields is not None
        assert issue.fields.unknowns == {"customfield_10218": "because"}

    def test_new_issue_has_no_identity(self) -> None:
        wire = Issue(fields=IssueFields(summary="New")).to_wire()

        assert wire == {"fields": {"summary": "New"}}

    def test_issue_link_keeps_required_members(self) -> None:
        link = IssueLink(
            type=IssueLinkType(name="Duplicate"),
            inward_issue=Issue(key="OPS-1"),
            outward_issue=Issue(key="OPS-2"),
            comment=Comment(body="Same stack trace"),
        )

        assert link.to_wire() == {
            "type": {"name": "Duplicate", "inward": "", "outward": ""},
            "outwardIssue": {"key": "OPS-2"},
            "inwardIssue": {"key": "OPS-1"},
            "comment": {"body": "Same stack trace"},
        }


class TestDecodeErrors:
    """Malformed payloads fail as a whole."""

    def test_malformed_json(self) -> None:
        with pytest.raises(DecodeError, match="Could not decode IssueFields payload"):
            IssueFields.from_wire("{not json")

    def test_non_object_payload(self) -> None:
        with pytest.raises(DecodeError, match="expected a JSON object"):
            IssueFields.from_wire(["summary"])

    def test_wrong_type_names_field(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            IssueFields.from_wire({"summary": "x", "labels": "not-a-list"})

        assert exc_info.value.field == "labels"
        assert not isinstance(exc_info.value, ParseError)

    def test_malformed_worklog_timestamp(self) -> None:
        raw = {
            "summary": "x",
            "worklog": {
                "startAt": 0,
                "maxResults": 1,
                "total": 1,
                "worklogs": [{"id": "1", "started": "yesterday afternoon"}],
            },
        }

        with pytest.raises(ParseError) as exc_info:
            Issue.from_wire({"key": "OPS-1", "fields": raw})

        assert exc_info.value.field == "fields.worklog.worklogs.0.started"
        assert "yesterday afternoon" in str(exc_info.value)

    def test_worklog_timestamp_round_trip(self) -> None:
        raw = {
            "summary": "x",
            "worklog": {
                "startAt": 0,
                "maxResults": 1,
                "total": 1,
                "worklogs": [
                    {
                        "self": "https://jira.local/rest/api/2/issue/1/worklog/5",
                        "id": "5",
                        "issueId": "1",
                        "comment": "",
                        "timeSpent": "2h",
                        "timeSpentSeconds": 7200,
                        "started": "2016-11-21T10:15:30.000+0100",
                    },
                ],
            },
        }

        fields = IssueFields.from_wire(raw)
        record = fields.worklog.worklogs[0]

        assert record.started == datetime(2016, 11, 21, 10, 15, 30, tzinfo=timezone(timedelta(hours=1)))
        assert fields.to_wire()["worklog"]["worklogs"][0]["started"] == "2016-11-21T10:15:30.000+0100"
