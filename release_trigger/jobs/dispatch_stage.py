"""Dispatch stage: trigger one workflow run per unique target."""

from __future__ import annotations

from typing import Sequence

from release_trigger.adapters import GitHubAdapterError, WorkflowApiPort
from release_trigger.config import TriggerConfig
from release_trigger.domain import DispatchRecord, TargetOutcome, domain_build_stage_event
from release_trigger.log import get_logger

from .errors import DispatchFailedError
from .interfaces import ClockPort
from .settled import job_gather_settled

logger = get_logger(__name__)


async def job_dispatch_target(
    api: WorkflowApiPort,
    config: TriggerConfig,
    clock: ClockPort,
    target: str,
) -> DispatchRecord:
    """Dispatch the controlled workflow in one repository.

    The dispatch timestamp is truncated to whole seconds because run
    `created_at` values carry second precision.

    Args:
        api: Remote workflow API.
        config: Routing configuration.
        clock: Time source.
        target: Repository to dispatch in.

    Returns:
        DispatchRecord: Accepted dispatch with its timestamp.

    Raises:
        DispatchFailedError: Raised when the dispatch call fails.
    """

    # Same-second runs from other triggers also satisfy the discovery bound.
    dispatched_at = clock.clock_now().replace(microsecond=0)
    logger.info("Triggering %s at %s", target, dispatched_at.isoformat())
    started_event = domain_build_stage_event(
        stage="dispatch",
        status="started",
        details={"ref": config.branch_name},
        at_utc=dispatched_at,
    )

    try:
        await api.adapter_dispatch_workflow(
            owner=config.owner,
            repo=target,
            workflow_file=config.workflow_file,
            ref=config.branch_name,
            inputs={"branch": config.branch_name},
        )
    except (GitHubAdapterError, OSError) as error:
        logger.error("Failed to trigger %s: %s", target, error)
        raise DispatchFailedError(
            target=target,
            message=str(error),
            timeline=(
                started_event,
                domain_build_stage_event(stage="dispatch", status="failed", at_utc=clock.clock_now()),
            ),
        ) from error

    return DispatchRecord(
        target=target,
        dispatched_at=dispatched_at,
        timeline=(
            started_event,
            domain_build_stage_event(stage="dispatch", status="completed", at_utc=clock.clock_now()),
        ),
    )


async def job_dispatch_stage(
    api: WorkflowApiPort,
    config: TriggerConfig,
    clock: ClockPort,
    targets: Sequence[str],
) -> tuple[list[DispatchRecord], list[TargetOutcome]]:
    """Dispatch every target concurrently and wait for all calls to settle."""

    return await job_gather_settled(
        job_dispatch_target(api=api, config=config, clock=clock, target=target) for target in dict.fromkeys(targets)
    )
