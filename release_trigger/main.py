"""Main module entrypoint for release workflow triggering.

This module validates startup configuration, reads the target list and runs one
orchestration batch, exiting non-zero when any target failed.
"""

import argparse
import asyncio
from pathlib import Path
from typing import Sequence

from release_trigger.bootstrap import bootstrap_create_github_adapter, bootstrap_create_orchestrator
from release_trigger.config import (
    SettingsLoadError,
    TriggerSettings,
    config_load_settings,
    config_parse_service_list,
)
from release_trigger.domain import BatchVerdict
from release_trigger.jobs import BatchFailedError, job_raise_for_failures
from release_trigger.log import configure_logging, get_logger
from release_trigger.sources import source_load_target_lines, source_resolve_targets_path

logger = get_logger(__name__)


async def main_run_batch(
    settings: TriggerSettings,
    target_lines: Sequence[str],
    requested_services: Sequence[str],
) -> BatchVerdict:
    """Run one orchestration batch with a pooled adapter and raise on failures.

    Args:
        settings: Validated runtime settings.
        target_lines: Raw target lines.
        requested_services: Optional allow-list of service names.

    Returns:
        BatchVerdict: Verdict of a fully successful or skipped batch.

    Raises:
        BatchFailedError: Raised when at least one target failed.
    """

    async with bootstrap_create_github_adapter(settings) as adapter:
        orchestrator = bootstrap_create_orchestrator(settings=settings, adapter=adapter)
        verdict = await orchestrator.job_execute(
            target_lines=target_lines,
            requested_services=requested_services,
        )
    job_raise_for_failures(verdict)
    return verdict


def main(argv: Sequence[str] | None = None) -> None:
    """Run one release-trigger batch with validated startup configuration.

    Args:
        argv: Optional argument list; defaults to `sys.argv[1:]`.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SystemExit: Raised with code 1 when configuration is invalid or any target failed.
    """

    argument_parser = argparse.ArgumentParser(description="Trigger and track release workflows for failed charts")
    argument_parser.add_argument(
        "--targets-file",
        dest="targets_file",
        type=str,
        help="Target CSV path; defaults to TARGETS_FILE_NAME under GITHUB_WORKSPACE",
    )
    argument_parser.add_argument(
        "--services",
        dest="services",
        type=str,
        help="Comma-separated allow-list overriding SERVICES_TO_DEPLOY",
    )
    argument_parser.add_argument(
        "--verbosity",
        dest="verbosity",
        choices=("info", "verbose", "debug"),
        type=str,
        help="Console log verbosity overriding LOG_LEVEL",
    )
    parsed_arguments = argument_parser.parse_args(argv)

    try:
        settings = config_load_settings()
    except SettingsLoadError as error:
        logger.error("Critical error: %s", error)
        raise SystemExit(1) from error

    configure_logging(
        verbosity=parsed_arguments.verbosity or settings.log_level,
        github_actions=settings.github_actions,
    )

    if parsed_arguments.services is not None:
        requested_services = config_parse_service_list(parsed_arguments.services)
    else:
        requested_services = settings.settings_requested_services()

    if parsed_arguments.targets_file:
        targets_path = Path(parsed_arguments.targets_file)
    else:
        targets_path = source_resolve_targets_path(settings.github_workspace, settings.targets_file_name)

    target_lines = source_load_target_lines(targets_path)
    if not target_lines:
        logger.info("No failed charts to process")
        return
    logger.info("Found %d failed chart(s)", len(target_lines))

    try:
        asyncio.run(main_run_batch(settings, target_lines, requested_services))
    except BatchFailedError as error:
        logger.error("Critical error: %s", error)
        raise SystemExit(1) from error
    except Exception as error:
        logger.exception("Unhandled error: %s", error)
        raise SystemExit(1) from error


if __name__ == "__main__":
    main()
