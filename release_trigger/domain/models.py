"""Typed domain models shared across orchestration stages.

Every record is immutable and request-scoped: each stage produces new records
for the next stage instead of mutating what it received.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class OutcomeKind(str, Enum):
    """Terminal result kinds for one target pipeline."""

    SUCCESS = "success"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    NOT_FOUND = "not_found"
    VALIDATION_ERROR = "validation_error"
    DISPATCH_ERROR = "dispatch_error"


@dataclass(frozen=True)
class DispatchRecord:
    """Dispatch request that was accepted by the remote API.

    Attributes:
        target: Repository the workflow was dispatched in.
        dispatched_at: UTC timestamp taken right before the dispatch call.
        timeline: Structured stage events collected so far.
    """

    target: str
    dispatched_at: datetime
    timeline: tuple[dict[str, Any], ...] = ()


@dataclass(frozen=True)
class RunHandle:
    """Workflow run discovered for one dispatch.

    Attributes:
        target: Repository the run belongs to.
        run_id: Remote workflow run identifier.
        expected_workflow_id: Workflow definition id reported by the discovered run.
        created_at: Run creation timestamp, never earlier than the dispatch timestamp.
        timeline: Structured stage events collected so far.
    """

    target: str
    run_id: int
    expected_workflow_id: int
    created_at: datetime
    timeline: tuple[dict[str, Any], ...] = ()


@dataclass(frozen=True)
class ValidatedRun:
    """Run whose workflow definition path matched the controlled workflow file.

    Attributes:
        target: Repository the run belongs to.
        run_id: Remote workflow run identifier.
        workflow_id: Confirmed workflow definition id.
        workflow_path: Confirmed workflow definition path.
        timeline: Structured stage events collected so far.
    """

    target: str
    run_id: int
    workflow_id: int
    workflow_path: str
    timeline: tuple[dict[str, Any], ...] = ()


@dataclass(frozen=True)
class TargetOutcome:
    """Terminal result for one target.

    Attributes:
        target: Repository the outcome belongs to.
        kind: Terminal outcome kind.
        detail: Human-readable reason, empty for success.
        run_id: Remote run id when a run was discovered.
        timeline: Full structured stage timeline of the target pipeline.
    """

    target: str
    kind: OutcomeKind
    detail: str = ""
    run_id: int | None = None
    timeline: tuple[dict[str, Any], ...] = field(default=(), compare=False)

    @property
    def is_failure(self) -> bool:
        return self.kind is not OutcomeKind.SUCCESS

    def outcome_describe(self) -> str:
        """Return a one-line summary used by the batch failure message."""

        if not self.detail:
            return f"{self.target}: {self.kind.value}"
        return f"{self.target}: {self.kind.value}: {self.detail}"


@dataclass(frozen=True)
class BatchVerdict:
    """Consolidated result for a whole batch.

    Attributes:
        outcomes: Terminal outcomes for every dispatched target, sorted by target.
        skipped: True when nothing was dispatched and the run short-circuited.
    """

    outcomes: tuple[TargetOutcome, ...] = ()
    skipped: bool = False

    @property
    def failures(self) -> tuple[TargetOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if outcome.is_failure)

    @property
    def succeeded(self) -> bool:
        return not self.failures
