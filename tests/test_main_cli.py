"""Regression tests for the command-line entrypoint exit behavior."""

from __future__ import annotations

from pathlib import Path

import pytest

import release_trigger.main as main_module
from release_trigger.domain import BatchVerdict, OutcomeKind, TargetOutcome
from release_trigger.jobs import BatchFailedError


@pytest.fixture(autouse=True)
def _runtime_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Provide required settings and isolate the working directory."""

    monkeypatch.setenv("GITHUB_TOKEN", "token")
    monkeypatch.setenv("BRANCH_NAME", "main")
    monkeypatch.setenv("GITHUB_WORKSPACE", str(tmp_path))
    monkeypatch.delenv("SERVICES_TO_DEPLOY", raising=False)
    monkeypatch.delenv("GITHUB_ACTIONS", raising=False)
    monkeypatch.chdir(tmp_path)


def test_main_without_target_file_exits_cleanly(monkeypatch: pytest.MonkeyPatch) -> None:
    """Return normally without running a batch when no target file exists.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate the no-op path.

    Raises:
        AssertionError: Raised when a batch is started.
    """

    batch_calls: list[object] = []

    async def _fake_run_batch(*args: object) -> BatchVerdict:
        batch_calls.append(args)
        return BatchVerdict()

    monkeypatch.setattr(main_module, "main_run_batch", _fake_run_batch)

    main_module.main([])

    assert batch_calls == []


def test_main_passes_lines_and_services_override(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Forward target lines and the `--services` allow-list to the batch runner."""

    (tmp_path / "failed-charts.csv").write_text("fdw,1\nreports,2\n", encoding="utf-8")
    batch_calls: list[tuple[object, ...]] = []

    async def _fake_run_batch(settings: object, target_lines: list[str], requested_services: tuple[str, ...]) -> BatchVerdict:
        batch_calls.append((target_lines, requested_services))
        return BatchVerdict()

    monkeypatch.setattr(main_module, "main_run_batch", _fake_run_batch)

    main_module.main(["--services", "fdw"])

    assert batch_calls == [(["fdw,1", "reports,2"], ("fdw",))]


def test_main_batch_failure_exits_non_zero(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Exit with code 1 when the batch reports failures.

    Args:
        monkeypatch: Pytest monkeypatch fixture.
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate exit status.

    Raises:
        AssertionError: Raised when failures do not produce a non-zero exit.
    """

    targets_path = tmp_path / "custom.csv"
    targets_path.write_text("fdw,1\n", encoding="utf-8")

    async def _fake_run_batch(*args: object) -> BatchVerdict:
        _ = args
        raise BatchFailedError([TargetOutcome(target="fdw", kind=OutcomeKind.TIMED_OUT, detail="timed out")])

    monkeypatch.setattr(main_module, "main_run_batch", _fake_run_batch)

    with pytest.raises(SystemExit) as exit_info:
        main_module.main(["--targets-file", str(targets_path)])

    assert exit_info.value.code == 1


def test_main_invalid_settings_exit_non_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)

    with pytest.raises(SystemExit) as exit_info:
        main_module.main([])

    assert exit_info.value.code == 1
