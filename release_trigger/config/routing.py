"""Static routing table and fixed orchestration constants."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final, Mapping

ORG_NAME: Final[str] = "Alaffia-Technology-Solutions"
WORKFLOW_FILE: Final[str] = "rc-next-release.yaml"
WORKFLOW_DIRECTORY: Final[str] = ".github/workflows"
POLL_INTERVAL_SECONDS: Final[float] = 30.0
MAX_WAIT_SECONDS: Final[float] = 3600.0
DISCOVERY_ATTEMPTS: Final[int] = 10
DISCOVERY_BACKOFF_SECONDS: Final[float] = 10.0
DISCOVERY_PAGE_SIZE: Final[int] = 5
DISPATCH_EVENT: Final[str] = "workflow_dispatch"

# Several logical services deploy from the same repository.
DEFAULT_WORKFLOW_MAP: Final[Mapping[str, str]] = MappingProxyType(
    {
        "alaffia": "alaffia-apps",
        "ask-autodor": "alaffia-apps",
        "fdw": "fdw",
        "reports": "reports",
        "gpt-search": "gpt-search",
        "document-api": "document-api",
        "autodor-py": "autodor-py",
        "file-api": "file-api",
        "graphql": "graphql_api",
        "agent-flows": "gpt-search",
    }
)


@dataclass(frozen=True)
class TriggerConfig:
    """Immutable process-wide configuration consumed by the orchestration core.

    Attributes:
        owner: GitHub organization that owns every target repository.
        workflow_file: Workflow definition file dispatched in each repository.
        branch_name: Ref the workflow is dispatched against and passed as `branch` input.
        workflow_map: Logical service name to repository routing table.
        poll_interval_seconds: Delay between completion polls for one run.
        max_wait_seconds: Wall-clock budget for monitoring one run.
        discovery_attempts: Number of run discovery attempts per dispatch.
        discovery_backoff_seconds: Delay between run discovery attempts.
        discovery_page_size: Number of recent runs listed per discovery attempt.
    """

    branch_name: str
    owner: str = ORG_NAME
    workflow_file: str = WORKFLOW_FILE
    workflow_map: Mapping[str, str] = field(default_factory=lambda: DEFAULT_WORKFLOW_MAP)
    poll_interval_seconds: float = POLL_INTERVAL_SECONDS
    max_wait_seconds: float = MAX_WAIT_SECONDS
    discovery_attempts: int = DISCOVERY_ATTEMPTS
    discovery_backoff_seconds: float = DISCOVERY_BACKOFF_SECONDS
    discovery_page_size: int = DISCOVERY_PAGE_SIZE

    def __post_init__(self) -> None:
        if not self.branch_name.strip():
            raise ValueError("branch_name must not be blank")
        if not self.owner.strip():
            raise ValueError("owner must not be blank")
        if not self.workflow_file.strip():
            raise ValueError("workflow_file must not be blank")
        if self.discovery_attempts < 1:
            raise ValueError("discovery_attempts must be >= 1")
        if self.max_wait_seconds <= 0:
            raise ValueError("max_wait_seconds must be > 0")
        if self.poll_interval_seconds < 0 or self.discovery_backoff_seconds < 0:
            raise ValueError("poll and backoff intervals must be >= 0")
        if not isinstance(self.workflow_map, MappingProxyType):
            object.__setattr__(self, "workflow_map", MappingProxyType(dict(self.workflow_map)))

    @property
    def expected_workflow_path(self) -> str:
        """Return the repository-relative path every validated run must come from."""

        return f"{WORKFLOW_DIRECTORY}/{self.workflow_file}"

    def config_valid_service_names(self) -> tuple[str, ...]:
        """Return routable logical service names in table order."""

        return tuple(self.workflow_map.keys())
