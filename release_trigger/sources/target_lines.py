"""Target line source backed by the failed-charts CSV file."""

from __future__ import annotations

from pathlib import Path


def source_resolve_targets_path(workspace: str, file_name: str) -> Path:
    """Return the target file path relative to the workspace root.

    Args:
        workspace: Workspace root; blank means the current directory.
        file_name: File name or path relative to the workspace.

    Returns:
        Path: Target file path.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return Path(workspace or ".") / file_name


def source_load_target_lines(path: Path) -> list[str]:
    """Read non-blank target lines from the target file.

    Args:
        path: Target file path.

    Returns:
        list[str]: Raw lines with surrounding whitespace removed; empty when the file is absent.

    Raises:
        OSError: Raised for read failures other than a missing file.
    """

    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    return [line.strip() for line in content.splitlines() if line.strip()]
