"""Canonical GitHub REST API status-code semantics for adapter-layer routing."""

from __future__ import annotations

from enum import IntEnum
from typing import Final

from .github_errors import (
    GitHubAdapterError,
    GitHubAuthError,
    GitHubNotFoundError,
    GitHubRequestError,
    GitHubResponseError,
)


class GitHubStatusCode(IntEnum):
    """HTTP status codes the GitHub Actions endpoints are documented to return."""

    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    CONFLICT = 409
    UNPROCESSABLE_ENTITY = 422
    TOO_MANY_REQUESTS = 429
    INTERNAL_SERVER_ERROR = 500
    BAD_GATEWAY = 502
    SERVICE_UNAVAILABLE = 503
    GATEWAY_TIMEOUT = 504


GITHUB_STATUS_DEFAULT_MESSAGES: Final[dict[int, str]] = {
    GitHubStatusCode.BAD_REQUEST.value: "Request body could not be parsed.",
    GitHubStatusCode.UNAUTHORIZED.value: "Bad credentials.",
    GitHubStatusCode.FORBIDDEN.value: "Token lacks permission or rate limit exceeded.",
    GitHubStatusCode.NOT_FOUND.value: "Resource not found or not visible to the token.",
    GitHubStatusCode.CONFLICT.value: "Request conflicts with the current resource state.",
    GitHubStatusCode.UNPROCESSABLE_ENTITY.value: (
        "Request was rejected. Check the ref exists and the workflow has a workflow_dispatch trigger."
    ),
    GitHubStatusCode.TOO_MANY_REQUESTS.value: "Secondary rate limit exceeded.",
    GitHubStatusCode.INTERNAL_SERVER_ERROR.value: "GitHub encountered an internal error.",
    GitHubStatusCode.BAD_GATEWAY.value: "GitHub is temporarily unavailable.",
    GitHubStatusCode.SERVICE_UNAVAILABLE.value: "GitHub is temporarily unavailable.",
    GitHubStatusCode.GATEWAY_TIMEOUT.value: "GitHub did not respond in time.",
}

GITHUB_AUTH_CODES: Final[frozenset[int]] = frozenset(
    {
        GitHubStatusCode.UNAUTHORIZED.value,
        GitHubStatusCode.FORBIDDEN.value,
    }
)

GITHUB_TRANSIENT_CODES: Final[frozenset[int]] = frozenset(
    {
        GitHubStatusCode.TOO_MANY_REQUESTS.value,
        GitHubStatusCode.INTERNAL_SERVER_ERROR.value,
        GitHubStatusCode.BAD_GATEWAY.value,
        GitHubStatusCode.SERVICE_UNAVAILABLE.value,
        GitHubStatusCode.GATEWAY_TIMEOUT.value,
    }
)


def github_status_default_message(status_code: int, fallback_message: str) -> str:
    """Return canonical default message for a status code.

    Args:
        status_code: HTTP status code returned by the API.
        fallback_message: Fallback message when code is unknown.

    Returns:
        str: Canonical message for known code, else provided fallback message.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return GITHUB_STATUS_DEFAULT_MESSAGES.get(status_code, fallback_message)


def github_status_error_class(status_code: int) -> type[GitHubAdapterError]:
    """Return the adapter exception class that represents a failing status code.

    Args:
        status_code: HTTP status code >= 300; unfollowed redirects map to GitHubRequestError.

    Returns:
        type[GitHubAdapterError]: Exception class to raise for the status.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if status_code in GITHUB_AUTH_CODES:
        return GitHubAuthError
    if status_code == GitHubStatusCode.NOT_FOUND.value:
        return GitHubNotFoundError
    if status_code >= 500 or status_code in GITHUB_TRANSIENT_CODES:
        return GitHubResponseError
    return GitHubRequestError


def github_status_is_transient(status_code: int) -> bool:
    """Return whether a failing status is worth another attempt later."""

    return status_code in GITHUB_TRANSIENT_CODES


def github_error_is_transient(error: BaseException) -> bool:
    """Return whether an adapter failure is worth another poll attempt.

    Args:
        error: Exception raised by a remote API call.

    Returns:
        bool: True for transport failures and transient HTTP statuses.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if isinstance(error, GitHubAdapterError) and error.status_code is not None:
        return github_status_is_transient(error.status_code)
    return isinstance(error, (ConnectionError, TimeoutError))
