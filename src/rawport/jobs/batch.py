"""Parallel batch conversion.

BatchConverter fans a list of RAW files out over a thread pool, one
ConversionJob per file, and joins on every job reaching a terminal state.
Per-file failures are isolated in their outcomes; only the pre-flight
checks abort a batch, and they do so before any job is dispatched.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from rawport.codec.interface import RawDecoder, RawEncoder
from rawport.jobs.exceptions import DestinationError
from rawport.jobs.models import (
    BatchResult,
    ConversionJob,
    FailureKind,
    JobConfig,
    JobOutcome,
    JobState,
)
from rawport.jobs.progress import ProgressTracker
from rawport.jobs.runner import ConversionRunner
from rawport.logging import job_context
from rawport.naming.segments import keys_for_tag

logger = logging.getLogger(__name__)


def resolve_worker_count(requested: int | None, config_default: int | None) -> int:
    """Resolve the effective worker count.

    Args:
        requested: Worker count from the CLI (None if not specified).
        config_default: Worker count from configuration (None if unset).

    Returns:
        The first value given of requested, config_default and the CPU
        count, never less than 1.
    """
    if requested is not None:
        effective = requested
    elif config_default is not None:
        effective = config_default
    else:
        effective = os.cpu_count() or 1
    return max(1, effective)


def prepare_destination(output_dir: Path, create: bool = True) -> None:
    """Check that ``output_dir`` can receive output files.

    Args:
        output_dir: Destination directory.
        create: Create the directory (and parents) when missing. Dry runs
            pass False so nothing is created.

    Raises:
        DestinationError: If the path exists but is not a directory, or
            cannot be created.
    """
    if output_dir.exists():
        if not output_dir.is_dir():
            raise DestinationError(
                f"destination {output_dir} exists but is not a directory"
            )
        return

    if not create:
        logger.info("Destination %s does not exist yet", output_dir)
        return

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DestinationError(
            f"couldn't create destination directory {output_dir}: {e}"
        ) from e
    logger.debug("Created destination directory %s", output_dir)


class BatchConverter:
    """Converts many RAW files concurrently.

    Example:
        converter = BatchConverter(ExiftoolDecoder(), DnglabEncoder(), workers=4)
        result = converter.run(paths, JobConfig(output_dir, template))
    """

    def __init__(
        self,
        decoder: RawDecoder,
        encoder: RawEncoder | None = None,
        workers: int | None = None,
        progress: ProgressTracker | None = None,
    ) -> None:
        """Initialize the converter.

        Args:
            decoder: Metadata decoder shared by all workers.
            encoder: DNG encoder shared by all workers. May be None only for
                dry runs.
            workers: Number of worker threads (default: CPU count).
            progress: Optional progress display, updated as files finish.
        """
        self.runner = ConversionRunner(decoder, encoder)
        self.workers = resolve_worker_count(workers, None)
        self.progress = progress

    def run(self, input_paths: Iterable[Path], config: JobConfig) -> BatchResult:
        """Convert every file in ``input_paths``.

        Args:
            input_paths: RAW files to convert.
            config: Settings shared by every job.

        Returns:
            BatchResult with exactly one outcome per input path.

        Raises:
            DestinationError: If the output directory is unusable.
            ValueError: If a live run has no encoder.
        """
        if self.runner.encoder is None and not config.dry_run:
            raise ValueError("an encoder is required unless dry_run is set")

        prepare_destination(config.output_dir, create=not config.dry_run)
        self._warn_unwired(config)

        paths = list(input_paths)
        start = time.monotonic()
        outcomes: list[JobOutcome] = []

        if not paths:
            return BatchResult(outcomes, time.monotonic() - start)

        # e.g. 50 files -> J01-J50, 5000 files -> J0001-J5000
        id_width = len(str(len(paths)))

        logger.info(
            "Converting %d file(s) with %d worker(s)%s",
            len(paths),
            self.workers,
            " (dry run)" if config.dry_run else "",
        )

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = {}
            for idx, path in enumerate(paths, start=1):
                # Worker ID is a logical slot, not the executing thread
                worker_id = f"{((idx - 1) % self.workers) + 1:02d}"
                job = ConversionJob(
                    job_id=f"J{idx:0{id_width}d}", input_path=path, config=config
                )
                futures[executor.submit(self._run_job, job, worker_id)] = job

            try:
                for future in as_completed(futures):
                    job = futures[future]
                    try:
                        outcomes.append(future.result())
                    except Exception as e:
                        logger.exception(
                            "Unexpected error for %s: %s", job.input_path, e
                        )
                        outcomes.append(
                            JobOutcome(
                                job_id=job.job_id,
                                input_path=job.input_path,
                                output_path=job.output_path,
                                state=JobState.FAILED,
                                failure_kind=FailureKind.OTHER,
                                message=str(e),
                                dry_run=config.dry_run,
                            )
                        )
            except KeyboardInterrupt:
                logger.warning(
                    "Interrupted, waiting for active conversions to finish"
                )
                # Queued jobs are dropped; running ones finish their file
                executor.shutdown(wait=True, cancel_futures=True)
                raise

        result = BatchResult(outcomes, time.monotonic() - start)
        logger.info(
            "Batch finished: %d converted, %d failed in %.1fs",
            result.success_count,
            result.failure_count,
            result.duration_seconds,
        )
        return result

    def _run_job(self, job: ConversionJob, worker_id: str) -> JobOutcome:
        if self.progress is not None:
            self.progress.start_file()
        outcome = None
        try:
            with job_context(worker_id, job.job_id, job.input_path):
                logger.debug("=== JOB %s: %s", job.job_id, job.input_path)
                outcome = self.runner.run(job)
                return outcome
        finally:
            if self.progress is not None:
                self.progress.complete_file(
                    failed=outcome is None or not outcome.success
                )

    def _warn_unwired(self, config: JobConfig) -> None:
        unwired = config.template.unwired_tags
        if not unwired:
            return
        keys = ", ".join(keys_for_tag(tag)[-1] for tag in unwired)
        logger.warning(
            "Template references metadata that is not available yet and will "
            "be left empty: %s",
            keys,
        )
