"""Domain models used across orchestration stage boundaries."""

from .models import BatchVerdict, DispatchRecord, OutcomeKind, RunHandle, TargetOutcome, ValidatedRun
from .timeline import domain_build_stage_event, domain_extend_timeline

__all__ = [
	"BatchVerdict",
	"DispatchRecord",
	"OutcomeKind",
	"RunHandle",
	"TargetOutcome",
	"ValidatedRun",
	"domain_build_stage_event",
	"domain_extend_timeline",
]
