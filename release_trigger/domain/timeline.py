"""Shared timeline event helper utilities."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def domain_build_stage_event(
    stage: str,
    status: str,
    details: dict[str, Any] | None = None,
    at_utc: datetime | None = None,
) -> dict[str, object]:
    """Build one structured timeline event payload.

    Args:
        stage: Pipeline stage name (`dispatch`, `discovery`, `validation`, `monitor`).
        status: Stage status marker.
        details: Optional structured details object.
        at_utc: Event timestamp; defaults to the current UTC time.

    Returns:
        dict[str, object]: Structured timeline event.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    event_time = at_utc if at_utc is not None else datetime.now(timezone.utc)
    event_payload: dict[str, object] = {
        "stage": stage,
        "status": status,
        "at_utc": event_time.isoformat(),
    }
    if details is not None:
        event_payload["details"] = details
    return event_payload


def domain_extend_timeline(
    timeline: tuple[dict[str, Any], ...],
    *events: dict[str, object],
) -> tuple[dict[str, Any], ...]:
    """Return a new timeline tuple with events appended."""

    return timeline + tuple(events)
