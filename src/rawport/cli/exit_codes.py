"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Validation errors (template, config)
    20-29: Source/destination errors
    30-39: Tool/dependency errors
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for rawport CLI commands.

    Failures of individual files do not produce a non-zero exit code; only
    conditions that stop a batch before it starts do.
    """

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1
    INTERRUPTED = 2  # Ctrl+C / SIGINT

    # Validation errors (10-19)
    TEMPLATE_ERROR = 10
    CONFIG_ERROR = 11

    # Source/destination errors (20-29)
    SOURCE_NOT_FOUND = 20
    DESTINATION_ERROR = 21
    NO_INPUT_FILES = 22

    # Tool/dependency errors (30-39)
    TOOL_NOT_AVAILABLE = 30
