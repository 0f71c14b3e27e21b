"""Stage failure taxonomy for the per-target orchestration pipeline."""

from __future__ import annotations

from typing import Any, Sequence

from release_trigger.domain import OutcomeKind, TargetOutcome


class TargetStageError(Exception):
    """Base exception for a terminal failure of one target pipeline.

    Attributes:
        target: Repository the failure belongs to.
        outcome_kind: Terminal outcome kind the failure maps to.
        run_id: Remote run id when one was discovered.
        timeline: Stage timeline collected up to the failure.
    """

    outcome_kind: OutcomeKind = OutcomeKind.FAILED

    def __init__(
        self,
        target: str,
        message: str,
        run_id: int | None = None,
        timeline: tuple[dict[str, Any], ...] = (),
    ):
        super().__init__(message)
        self.target = target
        self.message = message
        self.run_id = run_id
        self.timeline = timeline

    def error_to_outcome(self) -> TargetOutcome:
        """Convert the failure into the target's terminal outcome."""

        return TargetOutcome(
            target=self.target,
            kind=self.outcome_kind,
            detail=self.message,
            run_id=self.run_id,
            timeline=self.timeline,
        )


class DispatchFailedError(TargetStageError):
    """Dispatch call for the target was rejected or could not be delivered."""

    outcome_kind = OutcomeKind.DISPATCH_ERROR


class RunNotFoundError(TargetStageError):
    """No run created after the dispatch appeared within the discovery budget."""

    outcome_kind = OutcomeKind.NOT_FOUND


class WorkflowValidationError(TargetStageError):
    """Discovered run belongs to an unexpected or changed workflow definition."""

    outcome_kind = OutcomeKind.VALIDATION_ERROR


class WorkflowFailedError(TargetStageError):
    """Run completed with a non-success conclusion or monitoring hit a fatal API error."""

    outcome_kind = OutcomeKind.FAILED


class WorkflowTimedOutError(TargetStageError):
    """Run did not reach a terminal state within the wall-clock budget."""

    outcome_kind = OutcomeKind.TIMED_OUT


class BatchFailedError(RuntimeError):
    """Composite failure listing every target that did not succeed.

    Attributes:
        failures: Failing terminal outcomes in target order.
    """

    def __init__(self, failures: Sequence[TargetOutcome]):
        self.failures = tuple(failures)
        failure_lines = "\n- ".join(outcome.outcome_describe() for outcome in self.failures)
        super().__init__(f"{len(self.failures)} workflow(s) failed:\n- {failure_lines}")
