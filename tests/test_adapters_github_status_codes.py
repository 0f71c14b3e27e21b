"""Regression tests for centralized GitHub status-code semantics."""

from __future__ import annotations

from release_trigger.adapters import (
    GitHubAdapterConnectionError,
    GitHubAdapterTimeoutError,
    GitHubAuthError,
    GitHubNotFoundError,
    GitHubRequestError,
    GitHubResponseError,
)
from release_trigger.adapters.github_status_codes import (
    GITHUB_AUTH_CODES,
    GITHUB_TRANSIENT_CODES,
    github_error_is_transient,
    github_status_default_message,
    github_status_error_class,
)


def test_adapters_github_status_auth_and_transient_sets_are_disjoint() -> None:
    """Ensure auth and transient classifications never overlap.

    Returns:
        None: Assertions validate classification-set separation.

    Raises:
        AssertionError: Raised when classification sets overlap.
    """

    assert GITHUB_AUTH_CODES.isdisjoint(GITHUB_TRANSIENT_CODES)


def test_adapters_github_status_error_class_routing() -> None:
    assert github_status_error_class(401) is GitHubAuthError
    assert github_status_error_class(404) is GitHubNotFoundError
    assert github_status_error_class(422) is GitHubRequestError
    assert github_status_error_class(429) is GitHubResponseError
    assert github_status_error_class(503) is GitHubResponseError
    assert github_status_error_class(418) is GitHubRequestError


def test_adapters_github_status_known_message_and_unknown_fallback() -> None:
    """Resolve known default messages and preserve fallback for unknown codes."""

    assert github_status_default_message(401, "fallback") == "Bad credentials."
    assert github_status_default_message(418, "fallback") == "fallback"


def test_adapters_github_error_transience() -> None:
    """Classify transport failures and transient statuses as retryable.

    Returns:
        None: Assertions validate transience classification.

    Raises:
        AssertionError: Raised when a fatal error is treated as transient or vice versa.
    """

    assert github_error_is_transient(GitHubAdapterConnectionError("reset"))
    assert github_error_is_transient(GitHubAdapterTimeoutError("timed out"))
    assert github_error_is_transient(GitHubResponseError("busy", status_code=503))
    assert not github_error_is_transient(GitHubResponseError("malformed"))
    assert not github_error_is_transient(GitHubAuthError("denied", status_code=401))
    assert not github_error_is_transient(GitHubNotFoundError("gone", status_code=404))
