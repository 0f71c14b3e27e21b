"""Adapter layer package for the GitHub Actions integration boundary."""

from .github_actions import GitHubActionsAdapter, adapter_parse_timestamp
from .github_errors import (
	GitHubAdapterConnectionError,
	GitHubAdapterError,
	GitHubAdapterTimeoutError,
	GitHubAuthError,
	GitHubNotFoundError,
	GitHubRequestError,
	GitHubResponseError,
)
from .github_status_codes import github_error_is_transient
from .interfaces import WorkflowApiPort, WorkflowDefinition, WorkflowRun

__all__ = [
	"GitHubActionsAdapter",
	"GitHubAdapterConnectionError",
	"GitHubAdapterError",
	"GitHubAdapterTimeoutError",
	"GitHubAuthError",
	"GitHubNotFoundError",
	"GitHubRequestError",
	"GitHubResponseError",
	"WorkflowApiPort",
	"WorkflowDefinition",
	"WorkflowRun",
	"adapter_parse_timestamp",
	"github_error_is_transient",
]
