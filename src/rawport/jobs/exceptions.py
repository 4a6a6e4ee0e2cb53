"""Exceptions raised while converting a single file.

Each exception carries the FailureKind recorded in the job outcome, so the
runner can turn any of them into a failed outcome with one except clause.
"""

from __future__ import annotations

from pathlib import Path

from rawport.jobs.models import FailureKind


class ConversionError(Exception):
    """Base exception for per-file conversion failures.

    Attributes:
        kind: Failure classification recorded in the job outcome.
    """

    kind: FailureKind = FailureKind.OTHER


class JobIOError(ConversionError):
    """Raised when a source or output file cannot be read, written or removed."""

    kind = FailureKind.IO


class JobDecodeError(ConversionError):
    """Raised when metadata cannot be decoded from the source file."""

    kind = FailureKind.DECODE


class JobEncodeError(ConversionError):
    """Raised when the source file cannot be converted to DNG."""

    kind = FailureKind.ENCODE


class AlreadyExistsError(ConversionError):
    """Raised when the computed output path is already taken.

    Attributes:
        path: The conflicting output path.
        is_directory: True when the path exists as a directory.
    """

    kind = FailureKind.ALREADY_EXISTS

    def __init__(self, path: Path, is_directory: bool = False) -> None:
        """Initialize the exception.

        Args:
            path: The conflicting output path.
            is_directory: True when the path exists as a directory.
        """
        self.path = path
        self.is_directory = is_directory
        if is_directory:
            message = f"computed filepath already exists as a directory: {path}"
        else:
            message = f"won't overwrite existing file: {path}"
        super().__init__(message)


class OtherConversionError(ConversionError):
    """Wraps an unexpected exception raised inside a job."""

    kind = FailureKind.OTHER


class DestinationError(Exception):
    """Raised when the output directory is unusable for the whole batch."""
