"""Job layer package for release workflow orchestration."""

from .completion_monitor import job_monitor_run, job_monitor_stage
from .discovery_stage import job_discover_run, job_discovery_stage, job_select_dispatched_run
from .dispatch_stage import job_dispatch_stage, job_dispatch_target
from .errors import (
	BatchFailedError,
	DispatchFailedError,
	RunNotFoundError,
	TargetStageError,
	WorkflowFailedError,
	WorkflowTimedOutError,
	WorkflowValidationError,
)
from .interfaces import BatchOrchestratorPort, ClockPort, SystemClock
from .release_orchestrator import ReleaseWorkflowOrchestrator, job_aggregate_outcomes, job_raise_for_failures
from .settled import job_gather_settled
from .target_resolver import TargetResolution, job_parse_service_name, job_resolve_targets
from .validation_stage import job_validate_run, job_validation_stage

__all__ = [
	"BatchFailedError",
	"BatchOrchestratorPort",
	"ClockPort",
	"DispatchFailedError",
	"ReleaseWorkflowOrchestrator",
	"RunNotFoundError",
	"SystemClock",
	"TargetResolution",
	"TargetStageError",
	"WorkflowFailedError",
	"WorkflowTimedOutError",
	"WorkflowValidationError",
	"job_aggregate_outcomes",
	"job_discover_run",
	"job_discovery_stage",
	"job_dispatch_stage",
	"job_dispatch_target",
	"job_gather_settled",
	"job_monitor_run",
	"job_monitor_stage",
	"job_parse_service_name",
	"job_raise_for_failures",
	"job_resolve_targets",
	"job_select_dispatched_run",
	"job_validate_run",
	"job_validation_stage",
]
