"""Progress display for batch conversion."""

import sys
import threading
from typing import TextIO


class ProgressTracker:
    """Counts finished files and redraws a one-line status on a stream.

    Safe to call from any worker thread. The line is rewritten in place
    with a carriage return, e.g. ``Converting: 7/20 (1 failed) [4 active]``.
    """

    def __init__(
        self, total: int, enabled: bool = True, stream: TextIO | None = None
    ) -> None:
        """Initialize progress tracker.

        Args:
            total: Number of files in the batch.
            enabled: If False, nothing is written (JSON mode).
            stream: Output stream (default: stderr).
        """
        self.total = total
        self.enabled = enabled
        self.done = 0
        self.failed = 0
        self.active = 0
        self._stream = stream
        self._lock = threading.Lock()

    def start_file(self) -> None:
        """Record that a worker picked up a file."""
        with self._lock:
            self.active += 1
            line = self._status_line()
        self._draw(line)

    def complete_file(self, failed: bool = False) -> None:
        """Record that a worker finished a file."""
        with self._lock:
            self.active = max(0, self.active - 1)
            self.done += 1
            if failed:
                self.failed += 1
            line = self._status_line()
        self._draw(line)

    def finish(self) -> None:
        """End the status line."""
        if self.enabled:
            self._write("\n")

    def _status_line(self) -> str:
        failed = f" ({self.failed} failed)" if self.failed else ""
        return f"Converting: {self.done}/{self.total}{failed} [{self.active} active]"

    def _draw(self, line: str) -> None:
        # Written outside the lock; a slow terminal must not stall workers
        if self.enabled:
            self._write(f"\r{line}")

    def _write(self, text: str) -> None:
        stream = self._stream if self._stream is not None else sys.stderr
        stream.write(text)
        stream.flush()
