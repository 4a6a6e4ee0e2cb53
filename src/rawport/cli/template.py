"""CLI commands for inspecting filename templates."""

import json

import click

from rawport.cli.exit_codes import ExitCode
from rawport.cli.output import error_exit
from rawport.naming import (
    KEYWORDS,
    UNWIRED_TAGS,
    DateTimeSegment,
    LiteralSegment,
    MetadataSegment,
    Segment,
    TemplateParseError,
    compile_template,
)
from rawport.naming.segments import keys_for_tag


def _describe_segment(segment: Segment) -> tuple[str, str]:
    """Return a (kind, value) pair describing one segment."""
    if isinstance(segment, LiteralSegment):
        return "literal", segment.text
    if isinstance(segment, DateTimeSegment):
        return "datetime", segment.token
    if isinstance(segment, MetadataSegment):
        return "metadata", keys_for_tag(segment.tag)[-1]
    raise TypeError(f"Unknown segment type: {type(segment).__name__}")


@click.group("template")
def template_group() -> None:
    """Inspect filename templates."""


@template_group.command("check")
@click.argument("format_str", metavar="FORMAT")
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output in JSON format.",
)
def check_command(format_str: str, json_output: bool) -> None:
    """Compile FORMAT and show its segments.

    An original-filename reference is appended when FORMAT has none.
    """
    try:
        template = compile_template(format_str)
    except TemplateParseError as e:
        message = str(e) if json_output else e.format_error()
        error_exit(message, ExitCode.TEMPLATE_ERROR, json_output)

    segments = [_describe_segment(segment) for segment in template]
    unwired = [keys_for_tag(tag)[-1] for tag in template.unwired_tags]

    if json_output:
        click.echo(
            json.dumps(
                {
                    "status": "completed",
                    "source": template.source,
                    "segments": [
                        {"kind": kind, "value": value} for kind, value in segments
                    ],
                    "unwired": unwired,
                },
                indent=2,
            )
        )
        return

    click.echo(f"Template: {template.source}")
    for kind, value in segments:
        click.echo(f"  {kind:<9} {value!r}")
    for key in unwired:
        click.echo(f"Note: {{{key}}} is not available yet and renders empty")


@template_group.command("keys")
def keys_command() -> None:
    """List the metadata keys usable in {key} expansions."""
    for key, tag in KEYWORDS.items():
        note = "  (not available yet)" if tag in UNWIRED_TAGS else ""
        click.echo(f"{{{key}}}{note}")
