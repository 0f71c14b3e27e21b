"""Runtime bootstrap wiring for settings, adapter and orchestrator assembly."""

from release_trigger.adapters import GitHubActionsAdapter
from release_trigger.config import TriggerConfig, TriggerSettings
from release_trigger.jobs import ClockPort, ReleaseWorkflowOrchestrator


def bootstrap_create_trigger_config(settings: TriggerSettings) -> TriggerConfig:
    """Build the immutable orchestration config from validated settings.

    Args:
        settings: Validated runtime settings.

    Returns:
        TriggerConfig: Routing and polling configuration with the default routing table.

    Raises:
        ValueError: Raised when settings produce an invalid configuration.
    """

    return TriggerConfig(
        branch_name=settings.branch_name,
        poll_interval_seconds=settings.poll_interval_seconds,
        max_wait_seconds=settings.max_wait_seconds,
        discovery_attempts=settings.discovery_attempts,
        discovery_backoff_seconds=settings.discovery_backoff_seconds,
        discovery_page_size=settings.discovery_page_size,
    )


def bootstrap_create_github_adapter(settings: TriggerSettings) -> GitHubActionsAdapter:
    """Build the GitHub Actions adapter with one pooled HTTP client.

    Args:
        settings: Validated runtime settings.

    Returns:
        GitHubActionsAdapter: Adapter that must be closed by the caller.

    Raises:
        ValueError: Raised when adapter settings are invalid.
    """

    return GitHubActionsAdapter(
        token=settings.github_token,
        base_url=settings.github_api_url,
        request_timeout_seconds=settings.request_timeout_seconds,
        max_in_flight_requests=settings.max_in_flight_requests,
    )


def bootstrap_create_orchestrator(
    settings: TriggerSettings,
    adapter: GitHubActionsAdapter,
    clock: ClockPort | None = None,
) -> ReleaseWorkflowOrchestrator:
    """Build the release orchestrator for the CLI trigger surface.

    Args:
        settings: Validated runtime settings.
        adapter: Remote workflow API adapter.
        clock: Optional time source override.

    Returns:
        ReleaseWorkflowOrchestrator: Fully wired orchestrator instance.

    Raises:
        ValueError: Raised when settings produce an invalid configuration.
    """

    return ReleaseWorkflowOrchestrator(
        api=adapter,
        config=bootstrap_create_trigger_config(settings),
        clock=clock,
    )
