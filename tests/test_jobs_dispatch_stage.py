"""Regression tests for concurrent workflow dispatch."""

from __future__ import annotations

from datetime import datetime, timezone

from release_trigger.adapters import GitHubAuthError
from release_trigger.config import TriggerConfig
from release_trigger.domain import OutcomeKind
from release_trigger.jobs import job_dispatch_stage


async def test_jobs_dispatch_stage_dispatches_each_target_once(fake_api, virtual_clock, trigger_config: TriggerConfig) -> None:
    """Issue exactly one dispatch per unique target with the shared branch input.

    Args:
        fake_api: In-memory workflow API fixture.
        virtual_clock: Virtual clock fixture.
        trigger_config: Default routing config fixture.

    Returns:
        None: Assertions validate dispatch calls and records.

    Raises:
        AssertionError: Raised when a target is dispatched more than once.
    """

    records, failures = await job_dispatch_stage(
        api=fake_api,
        config=trigger_config,
        clock=virtual_clock,
        targets=["fdw", "fdw", "reports"],
    )

    assert failures == []
    assert sorted(record.target for record in records) == ["fdw", "reports"]
    assert len(fake_api.dispatch_calls) == 2
    for call in fake_api.dispatch_calls:
        assert call["owner"] == "Alaffia-Technology-Solutions"
        assert call["workflow_file"] == "rc-next-release.yaml"
        assert call["ref"] == "release/1.2"
        assert call["inputs"] == {"branch": "release/1.2"}


async def test_jobs_dispatch_stage_truncates_timestamp_to_seconds(fake_api, virtual_clock, trigger_config: TriggerConfig) -> None:
    """Record the dispatch time at second precision to match run timestamps."""

    records, _ = await job_dispatch_stage(api=fake_api, config=trigger_config, clock=virtual_clock, targets=["fdw"])

    assert records[0].dispatched_at == datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
    assert records[0].timeline[0]["stage"] == "dispatch"


async def test_jobs_dispatch_stage_failure_does_not_affect_siblings(
    fake_api,
    virtual_clock,
    trigger_config: TriggerConfig,
) -> None:
    """Convert one failing dispatch into a dispatch outcome and keep the other target.

    Args:
        fake_api: In-memory workflow API fixture.
        virtual_clock: Virtual clock fixture.
        trigger_config: Default routing config fixture.

    Returns:
        None: Assertions validate failure isolation.

    Raises:
        AssertionError: Raised when a dispatch failure leaks into sibling targets.
    """

    fake_api.dispatch_errors["reports"] = GitHubAuthError("Bad credentials", status_code=401)

    records, failures = await job_dispatch_stage(
        api=fake_api,
        config=trigger_config,
        clock=virtual_clock,
        targets=["fdw", "reports"],
    )

    assert [record.target for record in records] == ["fdw"]
    assert len(failures) == 1
    assert failures[0].target == "reports"
    assert failures[0].kind is OutcomeKind.DISPATCH_ERROR
    assert "Bad credentials" in failures[0].detail
    assert len(fake_api.dispatch_calls) == 2
