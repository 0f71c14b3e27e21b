"""Validation stage: confirm each run comes from the controlled workflow file."""

from __future__ import annotations

from typing import Sequence

from release_trigger.adapters import GitHubAdapterError, WorkflowApiPort
from release_trigger.config import TriggerConfig
from release_trigger.domain import (
    RunHandle,
    TargetOutcome,
    ValidatedRun,
    domain_build_stage_event,
    domain_extend_timeline,
)
from release_trigger.log import get_logger

from .errors import WorkflowValidationError
from .interfaces import ClockPort
from .settled import job_gather_settled

logger = get_logger(__name__)


async def job_validate_run(
    api: WorkflowApiPort,
    config: TriggerConfig,
    clock: ClockPort,
    handle: RunHandle,
) -> ValidatedRun:
    """Fetch the run's workflow definition and compare its path.

    Args:
        api: Remote workflow API.
        config: Routing configuration holding the expected workflow path.
        clock: Time source.
        handle: Discovered run.

    Returns:
        ValidatedRun: Run confirmed to come from the expected workflow file.

    Raises:
        WorkflowValidationError: Raised on path mismatch or API failure; never retried.
    """

    target = handle.target
    expected_path = config.expected_workflow_path
    timeline = domain_extend_timeline(
        handle.timeline,
        domain_build_stage_event(stage="validation", status="started", at_utc=clock.clock_now()),
    )

    try:
        workflow = await api.adapter_get_workflow(
            owner=config.owner,
            repo=target,
            workflow_id=handle.expected_workflow_id,
        )
    except (GitHubAdapterError, OSError) as error:
        logger.error("Validation failed for %s: %s", target, error)
        raise WorkflowValidationError(
            target=target,
            message=f"Could not fetch workflow {handle.expected_workflow_id}: {error}",
            run_id=handle.run_id,
            timeline=domain_extend_timeline(
                timeline,
                domain_build_stage_event(stage="validation", status="failed", at_utc=clock.clock_now()),
            ),
        ) from error

    if workflow.path != expected_path:
        logger.error("Validation failed for %s: invalid workflow path %s", target, workflow.path)
        raise WorkflowValidationError(
            target=target,
            message=f"Invalid workflow path: {workflow.path} (expected {expected_path})",
            run_id=handle.run_id,
            timeline=domain_extend_timeline(
                timeline,
                domain_build_stage_event(
                    stage="validation",
                    status="failed",
                    details={"workflow_path": workflow.path},
                    at_utc=clock.clock_now(),
                ),
            ),
        )

    logger.info("%s workflow path validated", target)
    return ValidatedRun(
        target=target,
        run_id=handle.run_id,
        workflow_id=workflow.id,
        workflow_path=workflow.path,
        timeline=domain_extend_timeline(
            timeline,
            domain_build_stage_event(
                stage="validation",
                status="completed",
                details={"workflow_id": workflow.id},
                at_utc=clock.clock_now(),
            ),
        ),
    )


async def job_validation_stage(
    api: WorkflowApiPort,
    config: TriggerConfig,
    clock: ClockPort,
    handles: Sequence[RunHandle],
) -> tuple[list[ValidatedRun], list[TargetOutcome]]:
    """Validate every discovered run concurrently."""

    return await job_gather_settled(
        job_validate_run(api=api, config=config, clock=clock, handle=handle) for handle in handles
    )
