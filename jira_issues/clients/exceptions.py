"""Common exceptions for the Jira issue client."""


class JiraError(Exception):
    """Base exception for all Jira issue client errors."""


class TransportError(JiraError):
    """Network or HTTP failure while talking to Jira."""


class TransportConnectionError(TransportError):
    """Error when connection to the Jira server fails."""


class TransportAuthenticationError(TransportError):
    """Error when authentication to Jira fails."""


class TransportNotFoundError(TransportError):
    """Error when a requested Jira resource is not found."""


class TransportApiError(TransportError):
    """Error when the Jira API returns an error response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize an API error with the HTTP status code, if known."""
        super().__init__(message)
        self.status_code = status_code


class JiraCaptchaError(TransportError):
    """Error when Jira requires CAPTCHA resolution."""


class DecodeError(JiraError):
    """Error when a wire payload cannot be decoded."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize a decode error, optionally naming the offending field."""
        super().__init__(message)
        self.field = field


class ParseError(DecodeError):
    """Error when a Jira timestamp inside a known field is malformed."""


class FieldNotFoundError(JiraError):
    """Error when a display name is missing from the issue type metadata."""

    def __init__(self, field: str) -> None:
        """Initialize the error with the unresolved display name."""
        super().__init__(f"Key {field} is not found in the list of fields.")
        self.field = field


class UnsupportedTypeError(JiraError):
    """Error when metadata declares a schema type the builder cannot coerce."""

    def __init__(self, field_type: str, field: str) -> None:
        """Initialize the error with the schema type and the field it was declared on."""
        super().__init__(f"Unknown issue type encountered: {field_type} for {field}")
        self.field_type = field_type
        self.field = field


class MetadataLookupError(JiraError):
    """Error when a path is missing from a metadata tree."""

    def __init__(self, path: tuple[str, ...]) -> None:
        """Initialize the error with the path segments that could not be resolved."""
        super().__init__(f"Metadata path not found: {'/'.join(path)}")
        self.path = path
