"""Single-file conversion: RAW in, DNG out.

ConversionRunner drives one ConversionJob through its states:

    PENDING -> READING -> DECODING -> PATH_RESOLVED -> OVERWRITE_CHECK
            -> CONVERTING -> WRITING -> COMPLETED

Any failure moves the job to FAILED with a FailureKind. Failures never
propagate out of run(); they are logged and recorded in the JobOutcome.
"""

from __future__ import annotations

import io
import logging
import shutil
import time
from pathlib import Path

from rawport.codec.interface import (
    ConvertOptions,
    DecodedMetadata,
    DecodeError,
    EncodeError,
    RawDecoder,
    RawEncoder,
)
from rawport.jobs.exceptions import (
    AlreadyExistsError,
    ConversionError,
    JobDecodeError,
    JobEncodeError,
    JobIOError,
    OtherConversionError,
)
from rawport.jobs.models import ConversionJob, JobOutcome, JobState
from rawport.naming.renderer import render_filename

logger = logging.getLogger(__name__)


class ConversionRunner:
    """Runs conversion jobs against a decoder and an optional encoder.

    The runner holds no per-job state, so one instance can be shared by
    every worker thread of a batch.
    """

    def __init__(self, decoder: RawDecoder, encoder: RawEncoder | None = None) -> None:
        """Initialize the runner.

        Args:
            decoder: Metadata decoder.
            encoder: DNG encoder. Only dry-run jobs may run without one.
        """
        self.decoder = decoder
        self.encoder = encoder

    def run(self, job: ConversionJob) -> JobOutcome:
        """Run a job to a terminal state.

        Args:
            job: Job in the PENDING state.

        Returns:
            The job's outcome, also stored on ``job.outcome``.
        """
        start = time.monotonic()
        try:
            self._convert(job)
        except ConversionError as e:
            return self._fail(job, e, start)
        except Exception as e:
            logger.exception("Unexpected error converting %s", job.input_path)
            wrapped = OtherConversionError(f"{type(e).__name__}: {e}")
            wrapped.__cause__ = e
            return self._fail(job, wrapped, start)

        job.transition(JobState.COMPLETED)
        outcome = JobOutcome(
            job_id=job.job_id,
            input_path=job.input_path,
            output_path=job.output_path,
            state=job.state,
            dry_run=job.config.dry_run,
            duration_seconds=time.monotonic() - start,
        )
        job.outcome = outcome
        return outcome

    def _convert(self, job: ConversionJob) -> None:
        config = job.config

        job.transition(JobState.READING)
        self._check_readable(job.input_path)

        job.transition(JobState.DECODING)
        metadata = self._decode(job.input_path)

        job.transition(JobState.PATH_RESOLVED)
        filename = render_filename(config.template, metadata, job.input_path.stem)
        job.output_path = config.output_dir / filename
        logger.debug("%s -> %s", job.input_path, job.output_path)

        if config.dry_run:
            logger.info("dry run: would've written DNG to %s", job.output_path)
            return

        job.transition(JobState.OVERWRITE_CHECK)
        self._check_overwrite(job.output_path, config.force)

        job.transition(JobState.CONVERTING)
        options = ConvertOptions(
            embed_original=config.embed_original,
            artist=config.artist or metadata.artist,
        )
        buffer = self._encode(job.input_path, options)

        job.transition(JobState.WRITING)
        self._write(job.output_path, buffer)
        logger.info("Wrote %s", job.output_path)

    def _check_readable(self, path: Path) -> None:
        try:
            with path.open("rb"):
                pass
        except OSError as e:
            raise JobIOError(f"couldn't open {path} for reading: {e}") from e

    def _decode(self, path: Path) -> DecodedMetadata:
        try:
            return self.decoder.decode(path)
        except DecodeError as e:
            raise JobDecodeError(str(e)) from e

    def _check_overwrite(self, output_path: Path, force: bool) -> None:
        """Apply the overwrite policy to the computed output path.

        Without ``force`` any existing path is rejected. With ``force`` an
        existing regular file is removed, but a directory never is.
        """
        if not output_path.exists():
            return
        if not force:
            raise AlreadyExistsError(output_path)
        if output_path.is_dir():
            raise AlreadyExistsError(output_path, is_directory=True)

        logger.debug("Removing existing file %s", output_path)
        try:
            output_path.unlink()
        except OSError as e:
            raise JobIOError(f"couldn't remove {output_path}: {e}") from e

    def _encode(self, path: Path, options: ConvertOptions) -> io.BytesIO:
        if self.encoder is None:
            raise OtherConversionError("no encoder configured")
        buffer = io.BytesIO()
        try:
            self.encoder.encode(path, options, buffer)
        except EncodeError as e:
            raise JobEncodeError(str(e)) from e
        buffer.seek(0)
        return buffer

    def _write(self, output_path: Path, buffer: io.BytesIO) -> None:
        # "xb" fails rather than clobbering a file that appeared after the
        # overwrite check
        try:
            with output_path.open("xb") as out:
                shutil.copyfileobj(buffer, out)
        except FileExistsError as e:
            raise AlreadyExistsError(output_path) from e
        except OSError as e:
            raise JobIOError(f"couldn't write {output_path}: {e}") from e

    def _fail(
        self, job: ConversionJob, error: ConversionError, start: float
    ) -> JobOutcome:
        logger.warning('while processing "%s": %s', job.input_path, error)
        if error.__cause__ is not None:
            logger.debug("caused by: %r", error.__cause__)

        job.transition(JobState.FAILED)
        outcome = JobOutcome(
            job_id=job.job_id,
            input_path=job.input_path,
            output_path=job.output_path,
            state=job.state,
            failure_kind=error.kind,
            message=str(error),
            dry_run=job.config.dry_run,
            duration_seconds=time.monotonic() - start,
        )
        job.outcome = outcome
        return outcome
