"""Typed runtime settings with dotenv support and startup validation."""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class TriggerSettings(BaseSettings):
    """Runtime settings for one release-trigger batch execution.

    Environment variable names map directly to field names in uppercase.
    Example: `github_token` reads from `GITHUB_TOKEN`.

    Attributes:
        github_token: Token used to authenticate against the GitHub REST API.
        branch_name: Branch/ref every dispatched workflow runs against.
        services_to_deploy: Optional comma-separated allow-list of logical service names.
        github_workspace: Workspace root that holds the target source file.
        targets_file_name: Target source file name relative to the workspace.
        github_api_url: Base URL of the GitHub REST API.
        github_actions: Whether the process runs inside a GitHub Actions job.
        log_level: Console log verbosity (`info`, `verbose`, `debug`).
        request_timeout_seconds: HTTP request timeout in seconds.
        max_in_flight_requests: Upper bound on concurrent GitHub API calls.
        poll_interval_seconds: Delay between completion polls for one run.
        max_wait_seconds: Wall-clock budget for monitoring one run.
        discovery_attempts: Number of run discovery attempts per dispatch.
        discovery_backoff_seconds: Delay between run discovery attempts.
        discovery_page_size: Number of recent runs listed per discovery attempt.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    github_token: str = Field(min_length=1)
    branch_name: str = Field(min_length=1)
    services_to_deploy: str = Field(default="")
    github_workspace: str = Field(default="")
    targets_file_name: str = Field(default="failed-charts.csv", min_length=1)
    github_api_url: str = Field(default="https://api.github.com", min_length=1)
    github_actions: bool = Field(default=False)
    log_level: str = Field(default="info")
    request_timeout_seconds: float = Field(default=30.0, gt=0)
    max_in_flight_requests: int = Field(default=10, ge=1)
    poll_interval_seconds: float = Field(default=30.0, ge=0)
    max_wait_seconds: float = Field(default=3600.0, gt=0)
    discovery_attempts: int = Field(default=10, ge=1)
    discovery_backoff_seconds: float = Field(default=10.0, ge=0)
    discovery_page_size: int = Field(default=5, ge=1, le=100)

    @field_validator("github_token", "branch_name")
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().lower()
        if normalized_value not in {"info", "verbose", "debug"}:
            raise ValueError("log_level must be one of: info, verbose, debug")
        return normalized_value

    def settings_requested_services(self) -> tuple[str, ...]:
        """Return the parsed allow-list of requested logical service names.

        Returns:
            tuple[str, ...]: Trimmed, non-empty names in input order.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return config_parse_service_list(self.services_to_deploy)


def config_parse_service_list(raw_value: str | None) -> tuple[str, ...]:
    """Split a comma-separated service list into trimmed non-empty names.

    Args:
        raw_value: Raw comma-separated value, possibly blank or None.

    Returns:
        tuple[str, ...]: Parsed service names in input order.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if not raw_value:
        return ()
    return tuple(name.strip() for name in raw_value.split(",") if name.strip())


def config_load_settings() -> TriggerSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        TriggerSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when required settings are missing or invalid.
    """

    try:
        return TriggerSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
