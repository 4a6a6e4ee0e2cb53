"""Job context for structured logging.

Provides context propagation for worker threads using contextvars, so every
log record emitted while a job runs carries its worker and job identifiers.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

# LogRecord attributes set by JobContextFilter
CONTEXT_FIELDS: tuple[str, ...] = ("worker_id", "job_id", "input_path")

_worker_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "worker_id", default=None
)
_job_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "job_id", default=None
)
_input_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "input_path", default=None
)


def set_job_context(
    worker_id: str,
    job_id: str | None = None,
    input_path: Path | str | None = None,
) -> None:
    """Set the current job context.

    Args:
        worker_id: Worker identifier (e.g., "01", "02").
        job_id: Job identifier (e.g., "J001", "J002").
        input_path: Full path to the RAW file being converted, or None.
    """
    _worker_id.set(worker_id)
    _job_id.set(job_id)
    _input_path.set(str(input_path) if input_path is not None else None)


def clear_job_context() -> None:
    """Clear the current job context."""
    _worker_id.set(None)
    _job_id.set(None)
    _input_path.set(None)


@contextmanager
def job_context(
    worker_id: str,
    job_id: str | None = None,
    input_path: Path | str | None = None,
) -> Generator[None, None, None]:
    """Context manager for per-job logging context.

    Sets the context on entry and restores the previous one on exit.

    Example:
        with job_context("01", "J001", "/photos/IMG_0001.CR2"):
            logger.info("Converting")  # logged as [W01:J001] Converting
    """
    old_worker_id = _worker_id.get()
    old_job_id = _job_id.get()
    old_input_path = _input_path.get()
    try:
        set_job_context(worker_id, job_id, input_path)
        yield
    finally:
        _worker_id.set(old_worker_id)
        _job_id.set(old_job_id)
        _input_path.set(old_input_path)


def get_job_context() -> tuple[str | None, str | None, str | None]:
    """Get current job context.

    Returns:
        Tuple of (worker_id, job_id, input_path), any may be None.
    """
    return _worker_id.get(), _job_id.get(), _input_path.get()


class JobContextFilter(logging.Filter):
    """Logging filter that injects job context into log records.

    Adds worker_id, job_id and input_path attributes to each LogRecord, plus
    a compact job_tag like "[W01:J001] " for the text format.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        worker_id, job_id, input_path = get_job_context()

        record.worker_id = worker_id
        record.job_id = job_id
        record.input_path = input_path

        if worker_id:
            if job_id:
                record.job_tag = f"[W{worker_id}:{job_id}] "
            else:
                record.job_tag = f"[W{worker_id}] "
        else:
            record.job_tag = ""

        return True
