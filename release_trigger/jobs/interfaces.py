"""Typed interfaces for job-layer orchestration responsibilities."""

from __future__ import annotations

import asyncio
import time
from datetime import datetime, timezone
from typing import Protocol, Sequence

from release_trigger.domain import BatchVerdict


class ClockPort(Protocol):
    """Time source used by every polling loop.

    Polling loops never read system time directly so tests can substitute a
    virtual clock whose sleeps return immediately.
    """

    def clock_now(self) -> datetime:
        """Return the current timezone-aware UTC wall-clock time."""

    def clock_monotonic(self) -> float:
        """Return a monotonic reading in seconds for elapsed-time budgets."""

    async def clock_sleep(self, seconds: float) -> None:
        """Suspend the calling task for the given number of seconds."""


class SystemClock(ClockPort):
    """Clock backed by the system time and the running event loop."""

    def clock_now(self) -> datetime:
        return datetime.now(timezone.utc)

    def clock_monotonic(self) -> float:
        return time.monotonic()

    async def clock_sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class BatchOrchestratorPort(Protocol):
    """Port definition for orchestrating one batch of workflow runs."""

    async def job_execute(
        self,
        target_lines: Sequence[str],
        requested_services: Sequence[str] = (),
    ) -> BatchVerdict:
        """Trigger, discover, validate and monitor one workflow run per target.

        Args:
            target_lines: Raw comma-separated target lines; the first field is the service name.
            requested_services: Optional allow-list of service names; empty means all.

        Returns:
            BatchVerdict: Consolidated terminal outcomes.

        Raises:
            RuntimeError: Raised for unexpected execution failures.
        """
