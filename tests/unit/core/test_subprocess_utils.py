"""Tests for core/subprocess_utils.py."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from rawport.core import resolve_tool_path, run_command


class TestResolveToolPath:
    """Tests for resolve_tool_path()."""

    def test_configured_path_used(self, temp_dir: Path) -> None:
        tool = temp_dir / "exiftool"
        tool.touch()
        assert resolve_tool_path("exiftool", tool) == tool

    def test_missing_configured_path(
        self, temp_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with patch("shutil.which", return_value="/usr/bin/exiftool"):
            assert resolve_tool_path("exiftool", temp_dir / "nope") is None
        assert "does not exist" in caplog.text

    def test_path_lookup(self) -> None:
        with patch("shutil.which", return_value="/usr/bin/dnglab"):
            assert resolve_tool_path("dnglab") == Path("/usr/bin/dnglab")

    def test_not_found(self) -> None:
        with patch("shutil.which", return_value=None):
            assert resolve_tool_path("dnglab") is None


class TestRunCommand:
    """Tests for run_command()."""

    def test_returns_output_and_code(self) -> None:
        completed = MagicMock(stdout="out", stderr="err", returncode=3)
        with patch("subprocess.run", return_value=completed) as mock_run:
            result = run_command([Path("/usr/bin/exiftool"), "-j", Path("a.CR2")])

        assert result == ("out", "err", 3)
        args, kwargs = mock_run.call_args
        assert args[0] == ["/usr/bin/exiftool", "-j", "a.CR2"]
        assert kwargs["timeout"] == 120
        assert kwargs["capture_output"] is True

    def test_none_output_becomes_empty(self) -> None:
        completed = MagicMock(stdout=None, stderr=None, returncode=0)
        with patch("subprocess.run", return_value=completed):
            assert run_command(["true"]) == ("", "", 0)

    def test_timeout_reraised(self, caplog: pytest.LogCaptureFixture) -> None:
        with patch(
            "subprocess.run", side_effect=subprocess.TimeoutExpired("dnglab", 5)
        ):
            with pytest.raises(subprocess.TimeoutExpired):
                run_command(["dnglab", "convert"], timeout=5)
        assert "dnglab did not finish within 5s" in caplog.text
