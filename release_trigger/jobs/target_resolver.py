"""Target resolution: allow-list filtering, routing and deduplication."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from release_trigger.config import TriggerConfig
from release_trigger.log import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TargetResolution:
    """Result payload for target resolution.

    Attributes:
        targets: Unique repositories to dispatch, in first-seen order.
        skipped_services: Service names filtered out by the allow-list.
        unknown_services: Service names with no routing table entry.
        unknown_requested_services: Allow-listed names absent from the routing table.
    """

    targets: tuple[str, ...]
    skipped_services: tuple[str, ...] = ()
    unknown_services: tuple[str, ...] = ()
    unknown_requested_services: tuple[str, ...] = ()


def job_parse_service_name(target_line: str) -> str:
    """Return the logical service name from one comma-separated target line."""

    return target_line.split(",", 1)[0].strip()


def job_find_unknown_requested_services(
    requested_services: Sequence[str],
    config: TriggerConfig,
) -> tuple[str, ...]:
    """Warn about allow-listed names that the routing table does not know.

    Args:
        requested_services: Allow-list of logical service names.
        config: Routing configuration.

    Returns:
        tuple[str, ...]: Requested names without a routing entry.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    unknown_requested = tuple(name for name in requested_services if name not in config.workflow_map)
    if unknown_requested:
        logger.warning("Unknown services requested: %s", ", ".join(unknown_requested))
        logger.info("Valid services are: %s", ", ".join(config.config_valid_service_names()))
    return unknown_requested


def job_resolve_targets(
    target_lines: Sequence[str],
    requested_services: Sequence[str],
    config: TriggerConfig,
) -> TargetResolution:
    """Resolve raw target lines into the unique set of repositories to dispatch.

    Args:
        target_lines: Raw comma-separated lines; only the first field is used.
        requested_services: Optional allow-list; empty means every service is processed.
        config: Routing configuration.

    Returns:
        TargetResolution: Unique targets plus diagnostics about dropped names.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    allow_list = frozenset(requested_services)
    unknown_requested = job_find_unknown_requested_services(requested_services, config)

    targets: dict[str, None] = {}
    skipped: list[str] = []
    unknown: list[str] = []
    for target_line in target_lines:
        service_name = job_parse_service_name(target_line)
        if not service_name:
            continue
        if allow_list and service_name not in allow_list:
            logger.info("Skipping %s (not in deployment list)", service_name)
            skipped.append(service_name)
            continue
        repository = config.workflow_map.get(service_name)
        if repository is None:
            logger.info("Skipping %s (no workflow mapping)", service_name)
            unknown.append(service_name)
            continue
        targets.setdefault(repository, None)

    return TargetResolution(
        targets=tuple(targets),
        skipped_services=tuple(skipped),
        unknown_services=tuple(unknown),
        unknown_requested_services=unknown_requested,
    )
