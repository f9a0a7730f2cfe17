"""HTTP transport for the Jira REST API.

Thin wrapper around a ``requests`` session: joins API paths to the server
URL, sends the request once and turns failures into the client's
exception hierarchy. Authentication is whatever the session carries.
"""

from collections.abc import Mapping
from typing import Any, Self

import requests
from requests import Response

from jira import JIRA
from jira_issues.clients.exceptions import (
    DecodeError,
    JiraCaptchaError,
    TransportApiError,
    TransportAuthenticationError,
    TransportConnectionError,
    TransportNotFoundError,
)
from jira_issues.display import get_logger
from jira_issues.type_definitions import JiraConfig

HTTP_BAD_REQUEST_MIN = 400
HTTP_NOT_FOUND = 404
HTTP_AUTH_ERRORS = frozenset({401, 403})

DEFAULT_TIMEOUT = 30

logger = get_logger(__name__)


class JiraTransport:
    """Sends requests to one Jira server through a ``requests`` session."""

    def __init__(
        self,
        base_url: str,
        session: requests.Session | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        verify_ssl: bool = True,
    ) -> None:
        if not base_url:
            msg = "Jira URL is required"
            raise ValueError(msg)
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.session.verify = verify_ssl
        self.timeout = timeout
        self.request_count = 0

    @classmethod
    def from_config(cls, jira_config: JiraConfig | None = None, *, timeout: float | None = None) -> Self:
        """Create a transport from the loaded configuration.

        Uses basic authentication when a username is configured and a bearer
        token (personal access token) otherwise.
        """
        if jira_config is None or timeout is None:
            from jira_issues import config  # noqa: PLC0415

            jira_config = jira_config if jira_config is not None else config.jira_config
            timeout = timeout if timeout is not None else config.client_config.get("timeout", DEFAULT_TIMEOUT)

        if not jira_config.get("api_token"):
            msg = "Jira API token is required"
            raise ValueError(msg)

        session = requests.Session()
        username = jira_config.get("username")
        if username:
            session.auth = (username, jira_config["api_token"])
        else:
            session.headers["Authorization"] = f"Bearer {jira_config['api_token']}"

        return cls(
            jira_config.get("url", ""),
            session,
            timeout=timeout,
            verify_ssl=jira_config.get("verify_ssl", True),
        )

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()

    def url(self, path: str) -> str:
        """Return the absolute URL of an API path such as ``rest/api/2/issue/X-1``."""
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        params: Mapping[str, Any] | None = None,
        files: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        stream: bool = False,
    ) -> Response:
        """Send one request and return the response.

        Raises:
            TransportConnectionError: If the server cannot be reached
            TransportAuthenticationError: On HTTP 401/403
            TransportNotFoundError: On HTTP 404
            TransportApiError: On any other HTTP error status
            JiraCaptchaError: If Jira demands a CAPTCHA login

        """
        url = self.url(path)
        request_headers = {"Accept": "application/json"}
        if headers:
            request_headers.update(headers)

        self.request_count += 1
        logger.debug("%s %s (request #%s)", method, url, self.request_count)

        try:
            response = self.session.request(
                method,
                url,
                json=json_body,
                params=params,
                files=files,
                headers=request_headers,
                stream=stream,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            msg = f"Error during API request to {url}: {e!s}"
            raise TransportConnectionError(msg) from e

        try:
            self.handle_response(response)
        except Exception:
            response.close()
            raise
        return response

    def request_json(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            DecodeError: If the response body is not valid JSON

        """
        response = self.request(method, path, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            msg = f"Could not decode response of {method} {path}: {e!s}"
            raise DecodeError(msg) from e

    def handle_response(self, response: Response) -> None:
        """Raise the matching exception for CAPTCHA challenges and error statuses.

        Args:
            response: The HTTP response to check

        """
        header_value = response.headers.get("X-Authentication-Denied-Reason", "")
        if "CAPTCHA_CHALLENGE" in header_value:
            login_url = self.base_url + "/login.jsp"
            if "; login-url=" in header_value:
                login_url = header_value.split("; login-url=")[1].strip()

            logger.error("CAPTCHA challenge detected from Jira!")
            msg = (
                f"CAPTCHA challenge detected. Please open {login_url} in your web "
                f"browser, log in to resolve the CAPTCHA, and then retry"
            )
            raise JiraCaptchaError(msg)

        if response.status_code < HTTP_BAD_REQUEST_MIN:
            return

        error_msg = f"HTTP Error {response.status_code}: {response.reason}"
        try:
            error_json = response.json()
        except ValueError:
            error_json = None
        if isinstance(error_json, dict):
            if error_json.get("errorMessages"):
                error_msg = f"{error_msg} - {', '.join(error_json['errorMessages'])}"
            elif error_json.get("errors"):
                error_msg = f"{error_msg} - {error_json['errors']}"

        if response.status_code == HTTP_NOT_FOUND:
            raise TransportNotFoundError(error_msg)
        if response.status_code in HTTP_AUTH_ERRORS:
            raise TransportAuthenticationError(error_msg)
        raise TransportApiError(error_msg, status_code=response.status_code)


def connect(
    url: str,
    username: str,
    api_token: str,
    *,
    verify_ssl: bool = True,
    timeout: float = DEFAULT_TIMEOUT,
) -> JiraTransport:
    """Connect to Jira with the ``jira`` library and return a transport over its session.

    Token authentication is tried first, then basic authentication.

    Raises:
        ValueError: If URL or token are missing
        TransportAuthenticationError: If both authentication methods fail

    """
    if not url:
        msg = "Jira URL is required"
        raise ValueError(msg)
    if not api_token:
        msg = "Jira API token is required"
        raise ValueError(msg)

    connection_errors: list[str] = []
    options = {"verify": verify_ssl}

    try:
        logger.info("Attempting to connect to Jira using token authentication")
        jira = JIRA(server=url, token_auth=api_token, options=options, max_retries=0)
        server_info = jira.server_info()
        logger.success(
            "Connected to Jira server: %s (%s)",
            server_info.get("baseUrl"),
            server_info.get("version"),
        )
        return JiraTransport(url, jira._session, timeout=timeout, verify_ssl=verify_ssl)  # noqa: SLF001
    except Exception as e:  # noqa: BLE001
        error_msg = f"Token authentication failed: {e!s}"
        logger.warning(error_msg)
        connection_errors.append(error_msg)

    try:
        jira = JIRA(server=url, basic_auth=(username, api_token), options=options, max_retries=0)
        logger.debug("Connected using basic authentication")
        return JiraTransport(url, jira._session, timeout=timeout, verify_ssl=verify_ssl)  # noqa: SLF001
    except Exception as e:  # noqa: BLE001
        error_msg = f"Basic authentication failed: {e!s}"
        logger.warning(error_msg)
        connection_errors.append(error_msg)

    logger.error("All authentication methods failed for Jira connection to %s", url)
    msg = f"Failed to authenticate with Jira: {'; '.join(connection_errors)}"
    raise TransportAuthenticationError(msg) from None
