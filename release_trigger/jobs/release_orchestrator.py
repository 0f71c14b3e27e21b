"""Job-layer release orchestrator chaining dispatch, discovery, validation and monitoring."""

from __future__ import annotations

from typing import Sequence

from release_trigger.adapters import WorkflowApiPort
from release_trigger.config import TriggerConfig
from release_trigger.domain import BatchVerdict, TargetOutcome
from release_trigger.log import get_logger

from .completion_monitor import job_monitor_stage
from .discovery_stage import job_discovery_stage
from .dispatch_stage import job_dispatch_stage
from .errors import BatchFailedError
from .interfaces import BatchOrchestratorPort, ClockPort, SystemClock
from .target_resolver import job_resolve_targets
from .validation_stage import job_validation_stage

logger = get_logger(__name__)


class ReleaseWorkflowOrchestrator(BatchOrchestratorPort):
    """Concrete orchestrator for one batch of release workflow runs.

    Stages run in order and each stage only receives the successes of the
    previous one. A target failing at any stage becomes a terminal outcome
    and never affects its siblings.
    """

    def __init__(
        self,
        api: WorkflowApiPort,
        config: TriggerConfig,
        clock: ClockPort | None = None,
    ):
        """Initialize orchestrator dependencies.

        Args:
            api: Remote workflow API adapter.
            config: Immutable routing and polling configuration.
            clock: Optional time source; the system clock is used otherwise.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies are missing.
        """

        if api is None:
            raise ValueError("api must not be None")
        if config is None:
            raise ValueError("config must not be None")

        self._api = api
        self._config = config
        self._clock = clock or SystemClock()

    async def job_execute(
        self,
        target_lines: Sequence[str],
        requested_services: Sequence[str] = (),
    ) -> BatchVerdict:
        """Run the full pipeline for every resolvable target.

        Args:
            target_lines: Raw comma-separated target lines.
            requested_services: Optional allow-list; empty means all services.

        Returns:
            BatchVerdict: Outcomes for every dispatched target, or a skipped verdict
            when nothing resolved.

        Raises:
            RuntimeError: Raised for unexpected errors outside the stage failure taxonomy.
        """

        resolution = job_resolve_targets(
            target_lines=target_lines,
            requested_services=requested_services,
            config=self._config,
        )
        if not resolution.targets:
            logger.info("No valid repositories to trigger")
            if requested_services:
                logger.info("Services requested: %s", ", ".join(requested_services))
            return BatchVerdict(skipped=True)

        logger.info("Target repositories: %s", ", ".join(resolution.targets))
        if requested_services:
            logger.info("Deploying only selected services: %s", ", ".join(requested_services))

        logger.info("Starting workflow triggering")
        dispatch_records, dispatch_failures = await job_dispatch_stage(
            api=self._api, config=self._config, clock=self._clock, targets=resolution.targets
        )

        logger.info("Searching for triggered runs")
        run_handles, discovery_failures = await job_discovery_stage(
            api=self._api, config=self._config, clock=self._clock, records=dispatch_records
        )

        logger.info("Validating workflow paths")
        validated_runs, validation_failures = await job_validation_stage(
            api=self._api, config=self._config, clock=self._clock, handles=run_handles
        )

        logger.info("Starting workflow monitoring")
        monitor_successes, monitor_failures = await job_monitor_stage(
            api=self._api, config=self._config, clock=self._clock, validated_runs=validated_runs
        )

        verdict = job_aggregate_outcomes(
            [*monitor_successes, *dispatch_failures, *discovery_failures, *validation_failures, *monitor_failures]
        )
        for failure in verdict.failures:
            logger.error("%s failed: %s", failure.target, failure.detail or failure.kind.value)
        if verdict.succeeded:
            logger.info("All workflows completed successfully")
        return verdict


def job_aggregate_outcomes(outcomes: Sequence[TargetOutcome]) -> BatchVerdict:
    """Reduce per-target outcomes into one verdict sorted by target name."""

    return BatchVerdict(outcomes=tuple(sorted(outcomes, key=lambda outcome: outcome.target)))


def job_raise_for_failures(verdict: BatchVerdict) -> None:
    """Raise the composite batch error when any target failed.

    Args:
        verdict: Batch verdict to inspect.

    Returns:
        None: Returns normally when every target succeeded or the batch was skipped.

    Raises:
        BatchFailedError: Raised when at least one target has a failure outcome.
    """

    if verdict.failures:
        raise BatchFailedError(verdict.failures)
