"""Shared helpers for rawport."""

from rawport.core.subprocess_utils import resolve_tool_path, run_command

__all__ = [
    "resolve_tool_path",
    "run_command",
]
