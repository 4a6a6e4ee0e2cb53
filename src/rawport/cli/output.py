"""Error and warning output shared by CLI commands."""

from __future__ import annotations

import json
import sys
from typing import NoReturn

import click

from rawport.cli.exit_codes import ExitCode


def _code_name(code: ExitCode | int) -> str:
    if isinstance(code, ExitCode):
        return code.name
    return "UNKNOWN_ERROR"


def error_exit(
    message: str,
    code: ExitCode | int,
    json_output: bool = False,
) -> NoReturn:
    """Report an error on stderr and exit with ``code``.

    In JSON mode the report is ``{"status": "failed", "error": {"code":
    <ExitCode name>, "message": ...}}`` so scripts can tell failures apart
    without parsing text.
    """
    if json_output:
        payload = {
            "status": "failed",
            "error": {"code": _code_name(code), "message": message},
        }
        click.echo(json.dumps(payload), err=True)
    else:
        click.echo(f"Error: {message}", err=True)
    sys.exit(int(code))


def warning_output(message: str, json_output: bool = False) -> None:
    """Print a warning on stderr unless JSON output was requested."""
    if not json_output:
        click.echo(f"Warning: {message}", err=True)
