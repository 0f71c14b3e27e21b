"""Discovery stage: find the run created by each dispatch."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from release_trigger.adapters import GitHubAdapterError, WorkflowApiPort, WorkflowRun
from release_trigger.config import TriggerConfig
from release_trigger.config.routing import DISPATCH_EVENT
from release_trigger.domain import (
    DispatchRecord,
    RunHandle,
    TargetOutcome,
    domain_build_stage_event,
    domain_extend_timeline,
)
from release_trigger.log import get_logger

from .errors import RunNotFoundError
from .interfaces import ClockPort
from .settled import job_gather_settled

logger = get_logger(__name__)


def job_select_dispatched_run(runs: Sequence[WorkflowRun], dispatched_at: datetime) -> WorkflowRun | None:
    """Return the first listed run created at or after the dispatch timestamp.

    Runs created before the dispatch belong to earlier triggers and are never
    accepted, even when they are the only candidates.

    The dispatch timestamp is truncated to whole seconds to match the
    precision of `created_at`. A run started by another trigger earlier in the
    same second as the dispatch therefore passes the bound and can be selected.
    The workflow path check in validation does not tell the two apart.

    Args:
        runs: Runs in API order.
        dispatched_at: Timestamp recorded before the dispatch call.

    Returns:
        WorkflowRun | None: Matching run, or None when no run qualifies.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    for run in runs:
        if run.created_at >= dispatched_at:
            return run
    return None


async def job_discover_run(
    api: WorkflowApiPort,
    config: TriggerConfig,
    clock: ClockPort,
    record: DispatchRecord,
) -> RunHandle:
    """Poll recent dispatch-triggered runs until the new run appears.

    Every attempt counts against the budget, including attempts whose API
    call failed. There is no backoff wait after the final attempt.

    Args:
        api: Remote workflow API.
        config: Routing and polling configuration.
        clock: Time source used for backoff waits.
        record: Accepted dispatch.

    Returns:
        RunHandle: Run created by the dispatch.

    Raises:
        RunNotFoundError: Raised when the attempt budget is exhausted.
    """

    target = record.target
    timeline = domain_extend_timeline(
        record.timeline,
        domain_build_stage_event(stage="discovery", status="started", at_utc=clock.clock_now()),
    )
    logger.info("Looking for %s run triggered after %s", target, record.dispatched_at.isoformat())

    for attempt in range(1, config.discovery_attempts + 1):
        try:
            runs = await api.adapter_list_recent_runs(
                owner=config.owner,
                repo=target,
                event=DISPATCH_EVENT,
                per_page=config.discovery_page_size,
            )
        except (GitHubAdapterError, OSError) as error:
            logger.error("Error finding %s run (attempt %d/%d): %s", target, attempt, config.discovery_attempts, error)
        else:
            run = job_select_dispatched_run(runs, record.dispatched_at)
            if run is not None:
                logger.info("Found %s run #%d", target, run.id)
                return RunHandle(
                    target=target,
                    run_id=run.id,
                    expected_workflow_id=run.workflow_id,
                    created_at=run.created_at,
                    timeline=domain_extend_timeline(
                        timeline,
                        domain_build_stage_event(
                            stage="discovery",
                            status="completed",
                            details={"run_id": run.id, "attempt": attempt},
                            at_utc=clock.clock_now(),
                        ),
                    ),
                )
            logger.debug("No %s run yet (attempt %d/%d)", target, attempt, config.discovery_attempts)

        if attempt < config.discovery_attempts:
            await clock.clock_sleep(config.discovery_backoff_seconds)

    raise RunNotFoundError(
        target=target,
        message=f"Run not found after {config.discovery_attempts} attempts",
        timeline=domain_extend_timeline(
            timeline,
            domain_build_stage_event(
                stage="discovery",
                status="failed",
                details={"attempts": config.discovery_attempts},
                at_utc=clock.clock_now(),
            ),
        ),
    )


async def job_discovery_stage(
    api: WorkflowApiPort,
    config: TriggerConfig,
    clock: ClockPort,
    records: Sequence[DispatchRecord],
) -> tuple[list[RunHandle], list[TargetOutcome]]:
    """Discover runs for every accepted dispatch concurrently."""

    return await job_gather_settled(
        job_discover_run(api=api, config=config, clock=clock, record=record) for record in records
    )
