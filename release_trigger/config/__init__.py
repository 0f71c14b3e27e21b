"""Configuration package for runtime settings and the static routing table."""

from .routing import DEFAULT_WORKFLOW_MAP, ORG_NAME, WORKFLOW_FILE, TriggerConfig
from .settings import SettingsLoadError, TriggerSettings, config_load_settings, config_parse_service_list

__all__ = [
	"DEFAULT_WORKFLOW_MAP",
	"ORG_NAME",
	"WORKFLOW_FILE",
	"SettingsLoadError",
	"TriggerConfig",
	"TriggerSettings",
	"config_load_settings",
	"config_parse_service_list",
]
