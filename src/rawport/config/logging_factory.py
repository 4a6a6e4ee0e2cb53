"""Logging setup driven by the config file plus command-line overrides."""

from __future__ import annotations

import dataclasses
from pathlib import Path

from rawport.config.models import LoggingConfig


def build_logging_config(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
    include_stderr: bool | None = None,
) -> LoggingConfig:
    """Return ``base`` with every non-None override applied.

    Raises:
        ValueError: If an override is not a valid level or format.
    """
    overrides = {
        "level": level,
        "file": file,
        "format": format,
        "include_stderr": include_stderr,
    }
    # replace() re-runs __post_init__, so overrides are validated too
    return dataclasses.replace(
        base, **{name: value for name, value in overrides.items() if value is not None}
    )


def configure_logging_from_cli(
    *,
    config_path: Path | None = None,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
    include_stderr: bool | None = None,
) -> None:
    """Load the config file, apply overrides and install log handlers.

    Raises:
        ValueError: If the configuration or an override is invalid.
    """
    from rawport.config.loader import get_config
    from rawport.logging import configure_logging

    logging_config = get_config(config_path=config_path).logging
    configure_logging(
        build_logging_config(
            logging_config,
            level=level,
            file=file,
            format=format,
            include_stderr=include_stderr,
        )
    )
