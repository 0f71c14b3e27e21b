"""GitHub Actions REST API adapter implementation for workflow control."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any, Final

import httpx

from .github_errors import (
    GitHubAdapterConnectionError,
    GitHubAdapterTimeoutError,
    GitHubResponseError,
)
from .github_status_codes import github_status_default_message, github_status_error_class
from .interfaces import WorkflowApiPort, WorkflowDefinition, WorkflowRun


class GitHubActionsAdapter(WorkflowApiPort):
    """Adapter implementation for workflow dispatch, run listing and run polling."""

    _USER_AGENT: Final[str] = "release-trigger/1.0 (Python/httpx)"
    _API_VERSION: Final[str] = "2022-11-28"

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        request_timeout_seconds: float = 30.0,
        max_in_flight_requests: int = 10,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize GitHub Actions adapter.

        Args:
            token: GitHub token with `actions:write` on every target repository.
            base_url: Base endpoint URL for the GitHub REST API.
            request_timeout_seconds: HTTP request timeout in seconds.
            max_in_flight_requests: Upper bound on concurrent API calls.
            http_client: Optional pre-configured client; one pooled client is created otherwise.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when required config values are invalid.
        """

        normalized_token = token.strip()
        normalized_base_url = base_url.strip()

        if not normalized_token:
            raise ValueError("token must not be blank")
        if not normalized_base_url:
            raise ValueError("base_url must not be blank")
        if request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be > 0")
        if max_in_flight_requests < 1:
            raise ValueError("max_in_flight_requests must be >= 1")

        self._base_url = normalized_base_url.rstrip("/")
        self._semaphore = asyncio.Semaphore(max_in_flight_requests)
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=self._base_url,
            timeout=request_timeout_seconds,
        )
        self._headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {normalized_token}",
            "User-Agent": self._USER_AGENT,
            "X-GitHub-Api-Version": self._API_VERSION,
        }

    async def __aenter__(self) -> GitHubActionsAdapter:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.adapter_close()

    async def adapter_close(self) -> None:
        """Close the pooled HTTP client when this adapter created it."""

        if self._owns_client:
            await self._client.aclose()

    async def adapter_dispatch_workflow(
        self,
        owner: str,
        repo: str,
        workflow_file: str,
        ref: str,
        inputs: dict[str, Any],
    ) -> None:
        """Create a `workflow_dispatch` event for one workflow file.

        Args:
            owner: Repository owner.
            repo: Repository name.
            workflow_file: Workflow file name.
            ref: Git ref the run executes against.
            inputs: Workflow dispatch inputs.

        Returns:
            None: GitHub answers 204 without a run reference.

        Raises:
            GitHubAdapterConnectionError: Raised for transport failures.
            GitHubAdapterTimeoutError: Raised when the request times out.
            GitHubRequestError: Raised when GitHub rejects the dispatch.
        """

        await self._adapter_request(
            method="POST",
            path=f"/repos/{owner}/{repo}/actions/workflows/{workflow_file}/dispatches",
            json_body={"ref": ref, "inputs": inputs},
        )

    async def adapter_list_recent_runs(
        self,
        owner: str,
        repo: str,
        event: str,
        per_page: int,
    ) -> list[WorkflowRun]:
        """List recent runs filtered by triggering event, newest first.

        Args:
            owner: Repository owner.
            repo: Repository name.
            event: Triggering event filter.
            per_page: Page size.

        Returns:
            list[WorkflowRun]: Parsed runs in API order.

        Raises:
            GitHubAdapterConnectionError: Raised for transport failures.
            GitHubResponseError: Raised when the response body is malformed.
        """

        payload = await self._adapter_request(
            method="GET",
            path=f"/repos/{owner}/{repo}/actions/runs",
            query_parameters={"event": event, "per_page": per_page},
        )
        raw_runs = payload.get("workflow_runs") if isinstance(payload, dict) else None
        if not isinstance(raw_runs, list):
            raise GitHubResponseError(f"workflow run listing for {owner}/{repo} is missing workflow_runs")
        return [self._adapter_parse_run(raw_run) for raw_run in raw_runs]

    async def adapter_get_run(self, owner: str, repo: str, run_id: int) -> WorkflowRun:
        """Fetch one workflow run by id.

        Args:
            owner: Repository owner.
            repo: Repository name.
            run_id: Workflow run identifier.

        Returns:
            WorkflowRun: Parsed run snapshot.

        Raises:
            GitHubAdapterConnectionError: Raised for transport failures.
            GitHubNotFoundError: Raised when the run does not exist.
            GitHubResponseError: Raised when the response body is malformed.
        """

        payload = await self._adapter_request(method="GET", path=f"/repos/{owner}/{repo}/actions/runs/{run_id}")
        return self._adapter_parse_run(payload)

    async def adapter_get_workflow(self, owner: str, repo: str, workflow_id: int) -> WorkflowDefinition:
        """Fetch one workflow definition by id.

        Args:
            owner: Repository owner.
            repo: Repository name.
            workflow_id: Workflow definition identifier.

        Returns:
            WorkflowDefinition: Parsed workflow id and path.

        Raises:
            GitHubAdapterConnectionError: Raised for transport failures.
            GitHubNotFoundError: Raised when the workflow does not exist.
            GitHubResponseError: Raised when the response body is malformed.
        """

        payload = await self._adapter_request(
            method="GET",
            path=f"/repos/{owner}/{repo}/actions/workflows/{workflow_id}",
        )
        try:
            return WorkflowDefinition(id=int(payload["id"]), path=str(payload["path"]))
        except (KeyError, TypeError, ValueError) as error:
            raise GitHubResponseError(f"workflow {workflow_id} payload is malformed") from error

    async def _adapter_request(
        self,
        method: str,
        path: str,
        query_parameters: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> Any:
        """Execute one HTTP request and return the decoded JSON body.

        Args:
            method: HTTP method.
            path: API path relative to the base URL.
            query_parameters: Optional query string parameters.
            json_body: Optional JSON request body.

        Returns:
            Any: Decoded JSON body, or None for empty responses.

        Raises:
            GitHubAdapterTimeoutError: Raised when the request times out.
            GitHubAdapterConnectionError: Raised for network failures.
            GitHubResponseError: Raised when the response cannot be read or decoded.
            GitHubAdapterError: Raised for non-success HTTP status, typed by status code.
        """

        async with self._semaphore:
            try:
                response = await self._client.request(
                    method,
                    f"{self._base_url}{path}",
                    params=query_parameters,
                    json=json_body,
                    headers=self._headers,
                    follow_redirects=True,
                )
            except httpx.TimeoutException as error:
                raise GitHubAdapterTimeoutError(f"GitHub request timed out: {method} {path}") from error
            except httpx.TransportError as error:
                raise GitHubAdapterConnectionError(f"GitHub transport request failed: {method} {path}") from error
            except httpx.HTTPError as error:
                raise GitHubResponseError(f"GitHub request failed: {method} {path}: {error}") from error

        # Redirects left after following (no Location, 304) carry no usable body.
        if response.status_code >= 300:
            error_class = github_status_error_class(response.status_code)
            upstream_message = self._adapter_extract_error_message(response)
            message = upstream_message or github_status_default_message(
                response.status_code,
                fallback_message="unexpected upstream response",
            )
            raise error_class(
                f"GitHub returned HTTP {response.status_code} for {method} {path}: {message}",
                status_code=response.status_code,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as error:
            raise GitHubResponseError(f"GitHub response for {method} {path} is not valid JSON") from error

    def _adapter_extract_error_message(self, response: httpx.Response) -> str:
        """Best-effort extraction of the `message` field from an error body."""

        try:
            payload = response.json()
        except ValueError:
            return ""
        if isinstance(payload, dict):
            return str(payload.get("message") or "").strip()
        return ""

    def _adapter_parse_run(self, payload: Any) -> WorkflowRun:
        """Parse one workflow run payload into a typed snapshot.

        Args:
            payload: Decoded run JSON object.

        Returns:
            WorkflowRun: Parsed run.

        Raises:
            GitHubResponseError: Raised when required fields are missing or malformed.
        """

        try:
            return WorkflowRun(
                id=int(payload["id"]),
                created_at=adapter_parse_timestamp(str(payload["created_at"])),
                workflow_id=int(payload["workflow_id"]),
                status=str(payload["status"]),
                conclusion=payload.get("conclusion"),
            )
        except (KeyError, TypeError, ValueError) as error:
            raise GitHubResponseError("workflow run payload is malformed") from error


def adapter_parse_timestamp(value: str) -> datetime:
    """Parse a GitHub ISO-8601 timestamp into an aware UTC datetime.

    Args:
        value: Timestamp such as `2024-05-01T12:00:00Z`.

    Returns:
        datetime: Timezone-aware UTC timestamp.

    Raises:
        ValueError: Raised when the value is not ISO-8601.
    """

    normalized_value = value.strip()
    if normalized_value.endswith("Z"):
        normalized_value = f"{normalized_value[:-1]}+00:00"
    parsed_value = datetime.fromisoformat(normalized_value)
    if parsed_value.tzinfo is None:
        parsed_value = parsed_value.replace(tzinfo=timezone.utc)
    return parsed_value.astimezone(timezone.utc)
