"""Input sources for the list of targets to process."""

from .target_lines import source_load_target_lines, source_resolve_targets_path

__all__ = ["source_load_target_lines", "source_resolve_targets_path"]
