"""Shared fakes for orchestration tests: a virtual clock and an in-memory workflow API."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from release_trigger.adapters import GitHubNotFoundError, WorkflowDefinition, WorkflowRun
from release_trigger.config import TriggerConfig

DISPATCH_TIME = datetime(2024, 5, 1, 12, 0, 0, 250000, tzinfo=timezone.utc)
EXPECTED_PATH = ".github/workflows/rc-next-release.yaml"


class VirtualClock:
    """Clock stub whose sleeps advance virtual time instead of waiting.

    Monotonic time is tracked per asyncio task: each concurrently monitored
    target only sees the time its own sleeps consumed, the way overlapping
    real sleeps would behave. Wall-clock time is shared.
    """

    def __init__(self, start: datetime = DISPATCH_TIME):
        """Initialize virtual clock state.

        Args:
            start: Initial wall-clock time.

        Returns:
            None: Initializer does not return values.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        self._now = start
        self._task_elapsed: dict[asyncio.Task[Any] | None, float] = {}
        self.sleep_calls: list[float] = []

    def clock_now(self) -> datetime:
        return self._now

    def clock_monotonic(self) -> float:
        return self._task_elapsed.get(_current_task(), 0.0)

    async def clock_sleep(self, seconds: float) -> None:
        self.sleep_calls.append(seconds)
        self._now += timedelta(seconds=seconds)
        task = _current_task()
        self._task_elapsed[task] = self._task_elapsed.get(task, 0.0) + seconds
        await asyncio.sleep(0)


def _current_task() -> asyncio.Task[Any] | None:
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None


class FakeWorkflowApi:
    """In-memory workflow API with scripted responses per repository.

    Listing responses and run snapshots are consumed one per call; the last
    scripted item repeats once the script is exhausted.
    """

    def __init__(self):
        """Initialize empty scripted state.

        Returns:
            None: Initializer does not return values.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        self.dispatch_calls: list[dict[str, Any]] = []
        self.dispatch_errors: dict[str, Exception] = {}
        self.list_scripts: dict[str, list[Any]] = {}
        self.list_calls: dict[str, int] = {}
        self.workflows: dict[tuple[str, int], Any] = {}
        self.workflow_calls: list[tuple[str, int]] = []
        self.run_scripts: dict[tuple[str, int], list[Any]] = {}
        self.get_run_calls: dict[tuple[str, int], int] = {}

    def script_release(
        self,
        repo: str,
        run_id: int,
        final_status: str = "completed",
        conclusion: str | None = "success",
        workflow_id: int = 77,
        path: str = EXPECTED_PATH,
        created_at: datetime = DISPATCH_TIME + timedelta(seconds=2),
    ) -> None:
        """Script one repository whose dispatch is found on the first listing attempt."""

        self.list_scripts[repo] = [[fake_run(run_id, created_at, workflow_id=workflow_id)]]
        self.workflows[(repo, workflow_id)] = WorkflowDefinition(id=workflow_id, path=path)
        self.run_scripts[(repo, run_id)] = [
            fake_run(run_id, created_at, workflow_id=workflow_id, status="in_progress"),
            fake_run(run_id, created_at, workflow_id=workflow_id, status=final_status, conclusion=conclusion),
        ]

    async def adapter_dispatch_workflow(
        self,
        owner: str,
        repo: str,
        workflow_file: str,
        ref: str,
        inputs: dict[str, Any],
    ) -> None:
        self.dispatch_calls.append(
            {"owner": owner, "repo": repo, "workflow_file": workflow_file, "ref": ref, "inputs": inputs}
        )
        await asyncio.sleep(0)
        if repo in self.dispatch_errors:
            raise self.dispatch_errors[repo]

    async def adapter_list_recent_runs(self, owner: str, repo: str, event: str, per_page: int) -> list[WorkflowRun]:
        _ = (owner, event, per_page)
        self.list_calls[repo] = self.list_calls.get(repo, 0) + 1
        return _next_scripted(self.list_scripts.get(repo, [[]]), self.list_calls[repo])

    async def adapter_get_workflow(self, owner: str, repo: str, workflow_id: int) -> WorkflowDefinition:
        _ = owner
        self.workflow_calls.append((repo, workflow_id))
        await asyncio.sleep(0)
        workflow = self.workflows.get((repo, workflow_id))
        if workflow is None:
            raise GitHubNotFoundError("Not Found", status_code=404)
        if isinstance(workflow, Exception):
            raise workflow
        return workflow

    async def adapter_get_run(self, owner: str, repo: str, run_id: int) -> WorkflowRun:
        _ = owner
        key = (repo, run_id)
        self.get_run_calls[key] = self.get_run_calls.get(key, 0) + 1
        return _next_scripted(self.run_scripts[key], self.get_run_calls[key])


def _next_scripted(script: list[Any], call_number: int) -> Any:
    item = script[min(call_number, len(script)) - 1]
    if isinstance(item, Exception):
        raise item
    return item


def fake_run(
    run_id: int,
    created_at: datetime,
    workflow_id: int = 77,
    status: str = "queued",
    conclusion: str | None = None,
) -> WorkflowRun:
    """Build one workflow run snapshot."""

    return WorkflowRun(
        id=run_id,
        created_at=created_at,
        workflow_id=workflow_id,
        status=status,
        conclusion=conclusion,
    )


@pytest.fixture
def virtual_clock() -> VirtualClock:
    """Return a fresh virtual clock starting at the fixed dispatch time."""

    return VirtualClock()


@pytest.fixture
def fake_api() -> FakeWorkflowApi:
    """Return an empty in-memory workflow API."""

    return FakeWorkflowApi()


@pytest.fixture
def trigger_config() -> TriggerConfig:
    """Return the default routing config with the fixed polling constants."""

    return TriggerConfig(branch_name="release/1.2")
