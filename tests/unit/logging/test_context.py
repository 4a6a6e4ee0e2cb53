"""Tests for job logging context."""

import logging
import threading

from rawport.logging import (
    JobContextFilter,
    clear_job_context,
    get_job_context,
    job_context,
    set_job_context,
)


def _record() -> logging.LogRecord:
    return logging.LogRecord("test", logging.INFO, __file__, 1, "msg", (), None)


class TestJobContext:
    """Tests for job context management."""

    def test_default_context_is_empty(self) -> None:
        clear_job_context()
        assert get_job_context() == (None, None, None)

    def test_set_and_clear(self) -> None:
        set_job_context("01", "J001", "/photos/a.CR2")
        assert get_job_context() == ("01", "J001", "/photos/a.CR2")
        clear_job_context()
        assert get_job_context() == (None, None, None)

    def test_context_manager_restores_previous(self) -> None:
        clear_job_context()
        with job_context("01", "J001", "/photos/a.CR2"):
            with job_context("02", "J002"):
                assert get_job_context() == ("02", "J002", None)
            assert get_job_context() == ("01", "J001", "/photos/a.CR2")
        assert get_job_context() == (None, None, None)

    def test_context_restored_after_exception(self) -> None:
        clear_job_context()
        try:
            with job_context("01", "J001"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert get_job_context() == (None, None, None)

    def test_threads_have_independent_context(self) -> None:
        seen: dict[str, tuple] = {}

        def worker(worker_id: str) -> None:
            with job_context(worker_id, f"J{worker_id}"):
                seen[worker_id] = get_job_context()

        threads = [threading.Thread(target=worker, args=(w,)) for w in ("01", "02")]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert seen["01"][:2] == ("01", "J01")
        assert seen["02"][:2] == ("02", "J02")


class TestJobContextFilter:
    """Tests for JobContextFilter."""

    def test_adds_tag_with_job(self) -> None:
        record = _record()
        with job_context("03", "J007", "/photos/b.NEF"):
            assert JobContextFilter().filter(record)
        assert record.job_tag == "[W03:J007] "
        assert record.worker_id == "03"
        assert record.job_id == "J007"
        assert record.input_path == "/photos/b.NEF"

    def test_worker_only_tag(self) -> None:
        record = _record()
        with job_context("03"):
            JobContextFilter().filter(record)
        assert record.job_tag == "[W03] "

    def test_empty_tag_outside_job(self) -> None:
        clear_job_context()
        record = _record()
        JobContextFilter().filter(record)
        assert record.job_tag == ""
        assert record.worker_id is None
