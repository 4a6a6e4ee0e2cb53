"""CLI command for converting RAW files to DNG."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from rawport.cli.exit_codes import ExitCode
from rawport.cli.output import error_exit, warning_output
from rawport.codec import (
    CodecUnavailableError,
    DnglabEncoder,
    ExiftoolDecoder,
    RawDecoder,
    RawEncoder,
)
from rawport.config import RawportConfig, get_config
from rawport.jobs import (
    BatchConverter,
    BatchResult,
    DestinationError,
    JobConfig,
    JobOutcome,
    ProgressTracker,
    resolve_worker_count,
)
from rawport.naming import TemplateParseError, compile_template

logger = logging.getLogger(__name__)

# Camera RAW formats picked up when scanning --in-dir
RAW_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".3fr",
        ".ari",
        ".arw",
        ".cr2",
        ".cr3",
        ".crw",
        ".dcr",
        ".dcs",
        ".erf",
        ".fff",
        ".iiq",
        ".kdc",
        ".mef",
        ".mos",
        ".mrw",
        ".nef",
        ".nrw",
        ".orf",
        ".pef",
        ".raf",
        ".raw",
        ".rw2",
        ".rwl",
        ".sr2",
        ".srf",
        ".srw",
        ".x3f",
    }
)

# Used when no --format is given: keep the original filename
DEFAULT_FORMAT = "{image.original_filename}"


def _validate_jobs(
    ctx: click.Context, param: click.Parameter, value: int | None
) -> int | None:
    """Validate --jobs option value.

    Raises:
        click.BadParameter: If value is less than 1.
    """
    if value is not None and value < 1:
        raise click.BadParameter("must be at least 1")
    return value


def _discover_files(
    in_dir: Path | None, files: tuple[Path, ...], json_output: bool
) -> list[Path]:
    """Collect the RAW files to convert.

    Args:
        in_dir: Directory whose immediate entries are scanned for RAW files.
        files: Explicitly named files; entries that are not files are
            skipped with a warning.
        json_output: Suppress warnings on stdout-oriented JSON runs.

    Returns:
        Sorted list of files.
    """
    if in_dir is not None:
        if not in_dir.is_dir():
            error_exit(
                f"source directory doesn't exist: {in_dir}",
                ExitCode.SOURCE_NOT_FOUND,
                json_output,
            )
        try:
            entries = list(in_dir.iterdir())
        except OSError as e:
            error_exit(
                f"couldn't read directory {in_dir}: {e}",
                ExitCode.SOURCE_NOT_FOUND,
                json_output,
            )
        return sorted(
            entry
            for entry in entries
            if entry.is_file() and entry.suffix.casefold() in RAW_EXTENSIONS
        )

    found = []
    for path in files:
        if path.is_file():
            found.append(path)
        else:
            warning_output(f"skipping {path}: not a file", json_output)
    return sorted(set(found))


def _create_decoder(config: RawportConfig) -> RawDecoder:
    return ExiftoolDecoder(config.tools.exiftool)


def _create_encoder(config: RawportConfig) -> RawEncoder:
    return DnglabEncoder(config.tools.dnglab)


def _format_outcome_json(outcome: JobOutcome) -> dict:
    return {
        "job_id": outcome.job_id,
        "input": str(outcome.input_path),
        "output": str(outcome.output_path) if outcome.output_path else None,
        "success": outcome.success,
        "failure_kind": outcome.failure_kind.value if outcome.failure_kind else None,
        "message": outcome.message,
        "duration_seconds": round(outcome.duration_seconds, 2),
    }


def _format_result_json(result: BatchResult, dry_run: bool) -> str:
    outcomes = sorted(result.outcomes, key=lambda o: o.job_id)
    return json.dumps(
        {
            "status": "completed",
            "dry_run": dry_run,
            "total": result.total,
            "converted": result.success_count,
            "failed": result.failure_count,
            "duration_seconds": round(result.duration_seconds, 2),
            "files": [_format_outcome_json(o) for o in outcomes],
        },
        indent=2,
    )


def _print_summary(result: BatchResult, dry_run: bool) -> None:
    for outcome in sorted(result.outcomes, key=lambda o: o.job_id):
        if outcome.success:
            arrow = "would write" if dry_run else "->"
            click.echo(f"[OK] {outcome.input_path.name} {arrow} {outcome.output_path}")
        else:
            click.echo(f"[FAILED] {outcome.input_path.name}: {outcome.message}")

    verb = "Would convert" if dry_run else "Converted"
    click.echo("")
    click.echo(
        f"{verb} {result.success_count}/{result.total} file(s), "
        f"{result.failure_count} failed ({result.duration_seconds:.1f}s)"
    )


@click.command("convert")
@click.option(
    "--in-dir",
    "-i",
    "in_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory containing RAW files to convert.",
)
@click.option(
    "--out-dir",
    "-o",
    "out_dir",
    type=click.Path(path_type=Path),
    required=True,
    help="Directory to write converted DNGs.",
)
@click.option(
    "--format",
    "-F",
    "format_str",
    default=None,
    help="Filename format of converted DNGs, e.g. '%Y%m%d_{camera.model}'.",
)
@click.option(
    "--artist",
    "-a",
    default=None,
    help='Value of the "artist" field in converted DNGs.',
)
@click.option(
    "--embed-original",
    is_flag=True,
    default=False,
    help="Embed the original RAW image in the DNG (slower).",
)
@click.option(
    "--force",
    "-f",
    is_flag=True,
    default=False,
    help="Overwrite existing files.",
)
@click.option(
    "--jobs",
    "-j",
    "jobs",
    type=int,
    default=None,
    callback=_validate_jobs,
    help="Number of files converted in parallel (default: number of CPUs).",
)
@click.option(
    "--dry-run",
    "-n",
    is_flag=True,
    default=False,
    help="Show output filenames without writing anything.",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output in JSON format.",
)
@click.argument(
    "files",
    nargs=-1,
    type=click.Path(path_type=Path),
)
def convert_command(
    in_dir: Path | None,
    out_dir: Path,
    format_str: str | None,
    artist: str | None,
    embed_original: bool,
    force: bool,
    jobs: int | None,
    dry_run: bool,
    json_output: bool,
    files: tuple[Path, ...],
) -> None:
    """Convert camera RAW files to DNG.

    Give either --in-dir or one or more FILES. Failures of individual files
    are reported but do not stop the batch.

    Examples:

        rawport convert -i /media/card/DCIM -o ~/photos

        rawport convert -o ~/photos -F '%Y-%m-%d_{camera.model}' IMG_0001.CR2

        rawport convert -i ./raw -o ./dng --dry-run
    """
    if in_dir is not None and files:
        raise click.UsageError("--in-dir cannot be combined with FILES")
    if in_dir is None and not files:
        raise click.UsageError("give either --in-dir or one or more FILES")

    try:
        config = get_config()
    except ValueError as e:
        error_exit(f"Invalid configuration: {e}", ExitCode.CONFIG_ERROR, json_output)

    template_source = format_str or config.import_.format or DEFAULT_FORMAT
    try:
        template = compile_template(template_source)
    except TemplateParseError as e:
        error_exit(e.format_error(), ExitCode.TEMPLATE_ERROR, json_output)

    input_paths = _discover_files(in_dir, files, json_output)
    if not input_paths:
        error_exit("No RAW files to convert.", ExitCode.NO_INPUT_FILES, json_output)

    job_config = JobConfig(
        output_dir=out_dir.expanduser(),
        template=template,
        force=force or config.import_.force,
        artist=artist or config.import_.artist,
        embed_original=embed_original or config.import_.embed_original,
        dry_run=dry_run,
    )

    try:
        decoder = _create_decoder(config)
        encoder = None if dry_run else _create_encoder(config)
    except CodecUnavailableError as e:
        error_exit(str(e), ExitCode.TOOL_NOT_AVAILABLE, json_output)

    workers = resolve_worker_count(jobs, config.processing.workers)
    progress = ProgressTracker(total=len(input_paths), enabled=not json_output)
    converter = BatchConverter(decoder, encoder, workers=workers, progress=progress)

    try:
        result = converter.run(input_paths, job_config)
    except DestinationError as e:
        error_exit(str(e), ExitCode.DESTINATION_ERROR, json_output)
    except KeyboardInterrupt:
        error_exit("Interrupted", ExitCode.INTERRUPTED, json_output)
    finally:
        progress.finish()

    if json_output:
        click.echo(_format_result_json(result, dry_run))
    else:
        _print_summary(result, dry_run)
