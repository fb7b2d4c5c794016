"""Exception hierarchy for GitHub API failures.

Every failure raised by the request executor, and surfaced by item streams,
derives from GitHubClientError:

- TransportError: the request never produced a response (timeout, refused
  connection, dropped stream)
- ResponseError: the server answered with a non-success status
- DecodeError: the body was not JSON or did not match the expected schema
"""

from typing import Any

__all__ = ["DecodeError", "GitHubClientError", "ResponseError", "TransportError"]


class GitHubClientError(Exception):
    """Raised when a GitHub API request fails.

    Wraps httpx and pydantic errors for consistent error handling.
    """

    pass


class TransportError(GitHubClientError):
    """Raised when the HTTP exchange itself fails."""

    def __init__(self, method: str, url: str, message: str):
        self.method = method
        self.url = url
        super().__init__(f"{method} {url} failed: {message}")


class ResponseError(GitHubClientError):
    """Raised when the API returns a non-success status.

    Attributes:
        status_code: HTTP status of the response
        message: The "message" field of GitHub's error body, or the raw text
        errors: The "errors" list of a validation failure (422), if any
        documentation_url: Link to the relevant API docs, if provided
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        errors: list[Any] | None = None,
        documentation_url: str | None = None,
    ):
        self.status_code = status_code
        self.message = message
        self.errors = errors or []
        self.documentation_url = documentation_url
        super().__init__(f"GitHub API error {status_code}: {message}")


class DecodeError(GitHubClientError):
    """Raised when a response body cannot be decoded into the expected type."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Could not decode response from {url}: {message}")
