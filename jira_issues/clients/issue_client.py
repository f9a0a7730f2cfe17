"""Jira issue operations.

Each method is one request/response round trip through a
:class:`~jira_issues.clients.transport.JiraTransport`.

JIRA API docs: https://docs.atlassian.com/jira/REST/latest/#api/2/issue
"""

from collections.abc import Mapping
from contextlib import closing
from typing import IO, Any

from requests import Response

from jira_issues.clients.exceptions import DecodeError
from jira_issues.clients.transport import JiraTransport
from jira_issues.display import get_logger
from jira_issues.models.base import decode_list, load_json
from jira_issues.models.issue import Issue, IssueLink
from jira_issues.models.resources import Attachment, Comment
from jira_issues.models.search import SearchOptions, SearchResult
from jira_issues.models.transition import (
    CreateTransitionPayload,
    Transition,
    TransitionPayload,
    TransitionResult,
    UpdateIssueRequest,
)
from jira_issues.type_definitions import CustomFields

CUSTOM_FIELD_MARKER = "customfield"
DOWNLOAD_CHUNK_SIZE = 64 * 1024

logger = get_logger(__name__)


def extract_custom_fields(fields: Mapping[str, Any] | None) -> CustomFields:
    """Return every ``customfield`` entry of a raw fields object as a string.

    Option values such as ``{"value": "High", "id": "1"}`` are reduced to
    their ``value`` member before conversion. Everything else goes through
    ``str()``: null becomes ``"None"``, booleans ``"True"``/``"False"`` and
    lists their Python repr such as ``"['a']"``.
    """
    custom_fields: CustomFields = {}
    if not isinstance(fields, Mapping):
        return custom_fields

    for key, value in fields.items():
        if CUSTOM_FIELD_MARKER not in key:
            continue
        if isinstance(value, Mapping) and "value" in value:
            value = value["value"]
        custom_fields[key] = str(value)
    return custom_fields


class IssueClient:
    """Issue operations of the Jira REST API v2."""

    def __init__(self, transport: JiraTransport) -> None:
        self.transport = transport

    def get(self, issue_id: str) -> Issue:
        """Return the issue with the given id or key.

        Jira also resolves moved issues and matches keys case-insensitively.
        """
        data = self.transport.request_json("GET", f"rest/api/2/issue/{issue_id}")
        return Issue.from_wire(data)

    def create(self, issue: Issue) -> Issue:
        """Create an issue or a sub-task.

        A sub-task needs a sub-task issue type and a ``parent`` entry in
        the fields naming the parent issue's id or key.

        Raises:
            DecodeError: If the response body cannot be decoded into an Issue

        """
        response = self.transport.request("POST", "rest/api/2/issue/", json_body=issue.to_wire())
        with closing(response):
            body = response.content

        try:
            created = Issue.from_wire(load_json(body, "Issue"))
        except DecodeError as e:
            logger.exception("Could not decode the created issue")
            msg = f"Could not decode the created issue: {e!s}"
            raise DecodeError(msg, field=e.field) from e

        logger.success("Created issue %s", created.key)
        return created

    def update_issue(self, issue_id: str, update_request: UpdateIssueRequest) -> None:
        """Apply field operations such as ``{"labels": [{"add": "x"}]}`` to an issue."""
        response = self.transport.request(
            "PUT",
            f"rest/api/2/issue/{issue_id}",
            json_body=update_request.to_wire(),
        )
        response.close()
        logger.debug("Updated issue %s", issue_id)

    def add_comment(self, issue_id: str, comment: Comment) -> Comment:
        """Add a comment to an issue and return it as stored by Jira."""
        data = self.transport.request_json(
            "POST",
            f"rest/api/2/issue/{issue_id}/comment",
            json_body=comment.to_wire(),
        )
        return Comment.from_wire(data)

    def add_link(self, issue_link: IssueLink) -> None:
        """Link two issues."""
        response = self.transport.request("POST", "rest/api/2/issueLink", json_body=issue_link.to_wire())
        response.close()

    def search(self, jql: str, options: SearchOptions | None = None) -> SearchResult:
        """Return one page of issues matching ``jql``.

        Without options, Jira's default paging applies.
        """
        params: dict[str, Any] = {"jql": jql}
        if options is not None:
            params.update(options.to_params())

        data = self.transport.request_json("GET", "rest/api/2/search", params=params)
        result = SearchResult.from_wire(data)
        logger.debug(
            "Search returned %s of %s issues starting at %s",
            len(result.issues),
            result.total,
            result.start_at,
        )
        return result

    def get_custom_fields(self, issue_id: str) -> CustomFields:
        """Return the issue's custom fields as ``customfield_* -> str``."""
        data = self.transport.request_json("GET", f"rest/api/2/issue/{issue_id}")
        if not isinstance(data, Mapping):
            msg = f"Could not decode issue {issue_id}: expected a JSON object"
            raise DecodeError(msg)
        return extract_custom_fields(data.get("fields"))

    def get_transitions(self, issue_id: str) -> list[Transition]:
        """Return the transitions the current user may perform, with their fields."""
        data = self.transport.request_json(
            "GET",
            f"rest/api/2/issue/{issue_id}/transitions",
            params={"expand": "transitions.fields"},
        )
        return TransitionResult.from_wire(data).transitions

    def do_transition(self, issue_id: str, transition_id: str) -> None:
        """Perform a transition on an issue."""
        payload = CreateTransitionPayload(transition=TransitionPayload(id=transition_id))
        response = self.transport.request(
            "POST",
            f"rest/api/2/issue/{issue_id}/transitions",
            json_body=payload.to_wire(),
        )
        response.close()
        logger.debug("Performed transition %s on %s", transition_id, issue_id)

    def post_attachment(self, issue_id: str, reader: IO[bytes], attachment_name: str) -> list[Attachment]:
        """Upload the content of ``reader`` as an attachment called ``attachment_name``.

        The reader is closed once the upload finished or failed.
        """
        with closing(reader):
            response = self.transport.request(
                "POST",
                f"rest/api/2/issue/{issue_id}/attachments",
                files={"file": (attachment_name, reader, "application/octet-stream")},
                headers={"X-Atlassian-Token": "no-check"},
            )
        with closing(response):
            attachments = decode_list(Attachment, load_json(response.content, "Attachment"))

        logger.debug("Attached %s to %s", attachment_name, issue_id)
        return attachments

    def download_attachment(self, attachment_id: str) -> Response:
        """Return the streamed response of an attachment.

        The content is read from the response; the caller closes it.
        """
        return self.transport.request("GET", f"secure/attachment/{attachment_id}/", stream=True)

    def download_attachment_to(self, attachment_id: str, writer: IO[bytes]) -> int:
        """Copy an attachment into ``writer`` and return the number of bytes written."""
        written = 0
        with closing(self.download_attachment(attachment_id)) as response:
            for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                writer.write(chunk)
                written += len(chunk)
        return written
