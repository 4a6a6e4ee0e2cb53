"""Data models for conversion jobs and batch results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path

from rawport.naming.segments import FormatTemplate


class JobState(Enum):
    """Lifecycle states of a single conversion job."""

    PENDING = auto()
    READING = auto()
    DECODING = auto()
    PATH_RESOLVED = auto()
    OVERWRITE_CHECK = auto()
    CONVERTING = auto()
    WRITING = auto()
    COMPLETED = auto()
    FAILED = auto()

    @property
    def is_terminal(self) -> bool:
        """True for COMPLETED and FAILED."""
        return self in (JobState.COMPLETED, JobState.FAILED)


class FailureKind(Enum):
    """Classification of a failed job."""

    IO = "io"
    DECODE = "decode"
    ENCODE = "encode"
    ALREADY_EXISTS = "already_exists"
    OTHER = "other"


@dataclass(frozen=True)
class JobConfig:
    """Settings shared by every job of a batch.

    Attributes:
        output_dir: Directory receiving the DNG files.
        template: Compiled filename template, shared read-only.
        force: Replace existing output files.
        artist: Artist override; None falls back to the file's own Artist.
        embed_original: Embed the original RAW data in each DNG.
        dry_run: Resolve output paths without writing anything.
    """

    output_dir: Path
    template: FormatTemplate
    force: bool = False
    artist: str | None = None
    embed_original: bool = False
    dry_run: bool = False


@dataclass(frozen=True)
class JobOutcome:
    """Terminal result of one conversion job."""

    job_id: str
    input_path: Path
    output_path: Path | None
    state: JobState
    failure_kind: FailureKind | None = None
    message: str | None = None
    dry_run: bool = False
    duration_seconds: float = 0.0

    @property
    def success(self) -> bool:
        """True if the job completed."""
        return self.state == JobState.COMPLETED


@dataclass
class ConversionJob:
    """One unit of work, owned by a single worker for its whole lifetime."""

    job_id: str
    input_path: Path
    config: JobConfig
    state: JobState = JobState.PENDING
    output_path: Path | None = None
    outcome: JobOutcome | None = None

    def transition(self, state: JobState) -> None:
        """Move the job to ``state``.

        Raises:
            ValueError: If the job has already reached a terminal state.
        """
        if self.state.is_terminal:
            raise ValueError(
                f"Job {self.job_id} is {self.state.name}, cannot move to {state.name}"
            )
        self.state = state


@dataclass
class BatchResult:
    """Outcomes of a batch, one per submitted input path."""

    outcomes: list[JobOutcome] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def completed(self) -> list[JobOutcome]:
        return [o for o in self.outcomes if o.success]

    @property
    def failed(self) -> list[JobOutcome]:
        return [o for o in self.outcomes if not o.success]

    @property
    def success_count(self) -> int:
        return len(self.completed)

    @property
    def failure_count(self) -> int:
        return len(self.failed)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    def failures_of(self, kind: FailureKind) -> list[JobOutcome]:
        """Return the failed outcomes of the given kind."""
        return [o for o in self.outcomes if o.failure_kind == kind]
