"""Project-native typed exceptions for GitHub Actions API failures."""

from __future__ import annotations


class GitHubAdapterError(Exception):
    """Base exception for adapter-level GitHub API failures.

    Attributes:
        status_code: Optional HTTP status code returned by the API.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class GitHubAdapterConnectionError(GitHubAdapterError, ConnectionError):
    """Transport-level connectivity failure during GitHub API communication."""


class GitHubAdapterTimeoutError(GitHubAdapterError, TimeoutError):
    """Transport timeout while waiting for a GitHub API response."""


class GitHubRequestError(GitHubAdapterError, ValueError):
    """Request rejected by the API as malformed or unprocessable."""


class GitHubAuthError(GitHubRequestError):
    """Token missing, invalid or lacking permission for the requested resource."""


class GitHubNotFoundError(GitHubRequestError):
    """Repository, workflow or run does not exist or is not visible to the token."""


class GitHubResponseError(GitHubAdapterError, RuntimeError):
    """Server-side failure or response body that violates the expected contract."""
