"""CLI module for rawport."""

import logging
from pathlib import Path

import click

from rawport.cli.exit_codes import ExitCode
from rawport.cli.output import error_exit

_logging_configured: bool = False

logger = logging.getLogger(__name__)


def _resolve_log_level(
    log_level: str | None, quiet: bool, verbose: int
) -> str | None:
    """Pick the effective log level override from the CLI flags.

    --log-level wins over -q and -v. Returning None keeps the configured
    level.
    """
    if log_level:
        return log_level
    if quiet:
        return "error"
    if verbose:
        return "debug"
    return None


def _configure_logging(
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from CLI options.

    Args:
        log_level: Override log level (debug, info, warning, error).
        log_file: Override log file path.
        log_json: Use JSON log format.
    """
    global _logging_configured
    if _logging_configured:
        return

    from rawport.config.logging_factory import configure_logging_from_cli

    try:
        configure_logging_from_cli(
            level=log_level,
            file=log_file,
            format="json" if log_json else None,
        )
    except ValueError as e:
        error_exit(f"Invalid configuration: {e}", ExitCode.CONFIG_ERROR)
    _logging_configured = True


@click.group()
@click.version_option(package_name="rawport")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Quiet output, only emit errors.",
)
@click.option(
    "-v",
    "verbose",
    count=True,
    help="Increase log verbosity.",
)
@click.pass_context
def main(
    ctx: click.Context,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
    quiet: bool,
    verbose: int,
) -> None:
    """rawport - Convert camera RAW images to DNG with templated filenames."""
    if quiet and verbose:
        raise click.UsageError("--quiet and -v are mutually exclusive")

    ctx.ensure_object(dict)
    level = _resolve_log_level(log_level, quiet, verbose)
    _configure_logging(level, log_file, log_json)


# Defer import to avoid circular dependency
def _register_commands():
    from rawport.cli.convert import convert_command
    from rawport.cli.template import template_group

    main.add_command(convert_command)
    main.add_command(template_group)


_register_commands()
