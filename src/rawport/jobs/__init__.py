"""Conversion jobs and the parallel batch pipeline."""

from rawport.jobs.batch import BatchConverter, prepare_destination, resolve_worker_count
from rawport.jobs.exceptions import (
    AlreadyExistsError,
    ConversionError,
    DestinationError,
    JobDecodeError,
    JobEncodeError,
    JobIOError,
    OtherConversionError,
)
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

__all__ = [
    "AlreadyExistsError",
    "BatchConverter",
    "BatchResult",
    "ConversionError",
    "ConversionJob",
    "ConversionRunner",
    "DestinationError",
    "FailureKind",
    "JobConfig",
    "JobDecodeError",
    "JobEncodeError",
    "JobIOError",
    "JobOutcome",
    "JobState",
    "OtherConversionError",
    "ProgressTracker",
    "prepare_destination",
    "resolve_worker_count",
]
