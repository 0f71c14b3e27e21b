"""Logging helpers for release-trigger."""

from __future__ import annotations

import logging

_LOGGING_INITIALIZED = False
_CONSOLE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class GitHubActionsAnnotationFormatter(logging.Formatter):
    """Render warnings and errors as GitHub Actions workflow commands.

    Records at WARNING or above become `::warning::` / `::error::` lines so the
    Actions UI raises them as annotations. Lower levels keep the plain format.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno >= logging.ERROR:
            return f"::error::{_escape_workflow_command(message)}"
        if record.levelno >= logging.WARNING:
            return f"::warning::{_escape_workflow_command(message)}"
        return message


def _escape_workflow_command(message: str) -> str:
    # Workflow command payloads are single-line; these escapes are defined by the runner.
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def configure_logging(verbosity: str = "info", github_actions: bool = False) -> None:
    """Configure global console logging.

    Args:
        verbosity: Logging verbosity for stdout (info, verbose, debug).
        github_actions: Emit warnings/errors as GitHub Actions annotations.
    """
    global _LOGGING_INITIALIZED

    level_map = {"info": logging.INFO, "verbose": logging.DEBUG, "debug": logging.DEBUG}
    console_level = level_map.get(verbosity.lower(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(console_level)
    root.handlers.clear()

    formatter: logging.Formatter
    if github_actions:
        formatter = GitHubActionsAnnotationFormatter("%(message)s")
    else:
        formatter = logging.Formatter(_CONSOLE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    _LOGGING_INITIALIZED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger for *name*, configuring logging if nothing else has."""
    if not _LOGGING_INITIALIZED and not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)
