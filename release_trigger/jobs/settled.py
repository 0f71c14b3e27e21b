"""Join-all-settled helper shared by every fan-out stage."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Iterable, TypeVar

from release_trigger.domain import TargetOutcome

from .errors import TargetStageError

_RecordT = TypeVar("_RecordT")


async def job_gather_settled(
    awaitables: Iterable[Awaitable[_RecordT]],
) -> tuple[list[_RecordT], list[TargetOutcome]]:
    """Await every task concurrently and partition results by outcome.

    One task failing never cancels its siblings. Target stage failures become
    terminal outcomes; any other exception is a programming error and is
    re-raised after every task has settled.

    Args:
        awaitables: One awaitable per target.

    Returns:
        tuple[list[_RecordT], list[TargetOutcome]]: Successful records and failure outcomes.

    Raises:
        BaseException: Re-raises the first non-stage exception raised by any task.
    """

    results = await asyncio.gather(*awaitables, return_exceptions=True)
    successes: list[_RecordT] = []
    failures: list[TargetOutcome] = []
    unexpected_errors: list[BaseException] = []
    for result in results:
        if isinstance(result, TargetStageError):
            failures.append(result.error_to_outcome())
        elif isinstance(result, BaseException):
            unexpected_errors.append(result)
        else:
            successes.append(result)

    if unexpected_errors:
        raise unexpected_errors[0]
    return successes, failures
