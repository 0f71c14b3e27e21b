"""Typed interfaces for adapter-layer responsibilities."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol


@dataclass(frozen=True)
class WorkflowRun:
    """Workflow run snapshot returned by the remote API.

    Attributes:
        id: Workflow run identifier.
        created_at: Run creation timestamp (timezone-aware UTC).
        workflow_id: Identifier of the workflow definition the run was created from.
        status: Remote status (`queued`, `in_progress`, `completed`, ...).
        conclusion: Remote conclusion once completed, otherwise None.
    """

    id: int
    created_at: datetime
    workflow_id: int
    status: str
    conclusion: str | None = None


@dataclass(frozen=True)
class WorkflowDefinition:
    """Workflow definition metadata returned by the remote API.

    Attributes:
        id: Workflow definition identifier.
        path: Repository-relative path of the workflow file.
    """

    id: int
    path: str


class WorkflowApiPort(Protocol):
    """Port definition for the remote workflow job-control API."""

    async def adapter_dispatch_workflow(
        self,
        owner: str,
        repo: str,
        workflow_file: str,
        ref: str,
        inputs: dict[str, Any],
    ) -> None:
        """Request a new run of a workflow definition.

        Args:
            owner: Repository owner.
            repo: Repository name.
            workflow_file: Workflow file name or id.
            ref: Git ref the run executes against.
            inputs: Workflow dispatch inputs.

        Returns:
            None: The API does not return the created run.

        Raises:
            GitHubAdapterConnectionError: Raised when the upstream connection fails.
            GitHubAdapterTimeoutError: Raised when the request times out.
            GitHubRequestError: Raised when the API rejects the dispatch (GitHubAuthError and
                GitHubNotFoundError are subclasses).
            GitHubResponseError: Raised for 5xx statuses or an unreadable response.
        """

    async def adapter_list_recent_runs(
        self,
        owner: str,
        repo: str,
        event: str,
        per_page: int,
    ) -> list[WorkflowRun]:
        """List the most recent runs of a repository, newest first.

        Args:
            owner: Repository owner.
            repo: Repository name.
            event: Triggering event filter.
            per_page: Page size.

        Returns:
            list[WorkflowRun]: Recent runs as returned by the API.

        Raises:
            GitHubAdapterConnectionError: Raised when the upstream connection fails.
            GitHubAdapterTimeoutError: Raised when the request times out.
            GitHubRequestError: Raised for 4xx statuses, including auth and not-found.
            GitHubResponseError: Raised for 5xx statuses or a malformed body.
        """

    async def adapter_get_run(self, owner: str, repo: str, run_id: int) -> WorkflowRun:
        """Fetch one workflow run by id.

        Raises:
            GitHubAdapterConnectionError: Raised when the upstream connection fails.
            GitHubAdapterTimeoutError: Raised when the request times out.
            GitHubNotFoundError: Raised when the id does not exist.
            GitHubResponseError: Raised for 5xx statuses or a malformed body.
        """

    async def adapter_get_workflow(self, owner: str, repo: str, workflow_id: int) -> WorkflowDefinition:
        """Fetch one workflow definition by id.

        Raises:
            GitHubAdapterConnectionError: Raised when the upstream connection fails.
            GitHubAdapterTimeoutError: Raised when the request times out.
            GitHubNotFoundError: Raised when the id does not exist.
            GitHubResponseError: Raised for 5xx statuses or a malformed body.
        """
