"""Completion monitor: poll validated runs until a terminal state or timeout."""

from __future__ import annotations

from typing import Final, Sequence

from release_trigger.adapters import GitHubAdapterError, WorkflowApiPort, github_error_is_transient
from release_trigger.config import TriggerConfig
from release_trigger.domain import (
    OutcomeKind,
    TargetOutcome,
    ValidatedRun,
    domain_build_stage_event,
    domain_extend_timeline,
)
from release_trigger.log import get_logger

from .errors import WorkflowFailedError, WorkflowTimedOutError, WorkflowValidationError
from .interfaces import ClockPort
from .settled import job_gather_settled

logger = get_logger(__name__)

RUN_STATUS_COMPLETED: Final[str] = "completed"
RUN_CONCLUSION_SUCCESS: Final[str] = "success"


async def job_monitor_run(
    api: WorkflowApiPort,
    config: TriggerConfig,
    clock: ClockPort,
    validated_run: ValidatedRun,
) -> TargetOutcome:
    """Poll one run at a fixed interval until it completes or the budget runs out.

    Transient API failures are logged and polling continues; the wall-clock
    budget still bounds the loop. Status changes are logged once per
    transition.

    Args:
        api: Remote workflow API.
        config: Polling configuration.
        clock: Time source for elapsed budget and poll waits.
        validated_run: Run confirmed by the validation stage.

    Returns:
        TargetOutcome: Success outcome for a run concluded with `success`.

    Raises:
        WorkflowValidationError: Raised when the run's workflow id changes mid-flight.
        WorkflowFailedError: Raised for a non-success conclusion or a non-transient API error.
        WorkflowTimedOutError: Raised when the wall-clock budget is exhausted.
    """

    target = validated_run.target
    run_id = validated_run.run_id
    timeline = domain_extend_timeline(
        validated_run.timeline,
        domain_build_stage_event(stage="monitor", status="started", at_utc=clock.clock_now()),
    )
    started_at = clock.clock_monotonic()
    last_status = ""
    poll_count = 0

    while clock.clock_monotonic() - started_at < config.max_wait_seconds:
        poll_count += 1
        try:
            run = await api.adapter_get_run(owner=config.owner, repo=target, run_id=run_id)
        except (GitHubAdapterError, OSError) as error:
            if not github_error_is_transient(error):
                logger.error("%s monitoring aborted: %s", target, error)
                raise WorkflowFailedError(
                    target=target,
                    message=f"Monitoring aborted: {error}",
                    run_id=run_id,
                    timeline=domain_extend_timeline(
                        timeline,
                        domain_build_stage_event(stage="monitor", status="failed", at_utc=clock.clock_now()),
                    ),
                ) from error
            logger.warning("%s status poll failed, retrying: %s", target, error)
        else:
            if run.workflow_id != validated_run.workflow_id:
                raise WorkflowValidationError(
                    target=target,
                    message=f"Workflow ID changed! Expected {validated_run.workflow_id}, got {run.workflow_id}",
                    run_id=run_id,
                    timeline=domain_extend_timeline(
                        timeline,
                        domain_build_stage_event(
                            stage="monitor",
                            status="failed",
                            details={"workflow_id": run.workflow_id},
                            at_utc=clock.clock_now(),
                        ),
                    ),
                )

            if run.status != last_status:
                logger.info("%s workflow status: %s", target, run.status)
                timeline = domain_extend_timeline(
                    timeline,
                    domain_build_stage_event(
                        stage="monitor",
                        status="transition",
                        details={"run_status": run.status},
                        at_utc=clock.clock_now(),
                    ),
                )
                last_status = run.status

            if run.status == RUN_STATUS_COMPLETED:
                finished_event = domain_build_stage_event(
                    stage="monitor",
                    status="completed",
                    details={"conclusion": run.conclusion, "polls": poll_count},
                    at_utc=clock.clock_now(),
                )
                if run.conclusion == RUN_CONCLUSION_SUCCESS:
                    logger.info("%s workflow completed successfully", target)
                    return TargetOutcome(
                        target=target,
                        kind=OutcomeKind.SUCCESS,
                        run_id=run_id,
                        timeline=domain_extend_timeline(timeline, finished_event),
                    )
                logger.error("%s workflow failed with conclusion: %s", target, run.conclusion)
                raise WorkflowFailedError(
                    target=target,
                    message=f"Workflow failed with conclusion: {run.conclusion}",
                    run_id=run_id,
                    timeline=domain_extend_timeline(timeline, finished_event),
                )

        await clock.clock_sleep(config.poll_interval_seconds)

    logger.error("%s workflow timed out after %g minutes", target, config.max_wait_seconds / 60)
    raise WorkflowTimedOutError(
        target=target,
        message=f"Workflow timed out after {config.max_wait_seconds / 60:g} minutes",
        run_id=run_id,
        timeline=domain_extend_timeline(
            timeline,
            domain_build_stage_event(
                stage="monitor",
                status="timed_out",
                details={"polls": poll_count},
                at_utc=clock.clock_now(),
            ),
        ),
    )


async def job_monitor_stage(
    api: WorkflowApiPort,
    config: TriggerConfig,
    clock: ClockPort,
    validated_runs: Sequence[ValidatedRun],
) -> tuple[list[TargetOutcome], list[TargetOutcome]]:
    """Monitor every validated run concurrently and independently."""

    return await job_gather_settled(
        job_monitor_run(api=api, config=config, clock=clock, validated_run=validated_run)
        for validated_run in validated_runs
    )
