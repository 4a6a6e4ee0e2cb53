"""Subprocess utilities for external tool invocation.

Wraps subprocess.run with the conventions shared by the exiftool and dnglab
adapters: UTF-8 text with replacement, a timeout, and debug logging of the
command and its duration.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess  # nosec B404 - external codec tools run as subprocesses
import time
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def resolve_tool_path(name: str, configured: Path | None = None) -> Path | None:
    """Locate an external tool.

    Args:
        name: Executable name looked up on PATH.
        configured: Explicit path from configuration, checked first.

    Returns:
        Path to the executable, or None if it cannot be found.
    """
    if configured is not None:
        configured = configured.expanduser()
        if configured.is_file():
            return configured
        logger.warning("Configured %s path does not exist: %s", name, configured)
        return None

    found = shutil.which(name)
    return Path(found) if found else None


def run_command(
    args: list[str | Path],
    timeout: int = 120,
    **kwargs: Any,
) -> tuple[str, str, int]:
    """Run ``args`` and return ``(stdout, stderr, returncode)``.

    Output is decoded as UTF-8 with undecodable bytes replaced. Extra keyword
    arguments go straight to subprocess.run.

    Raises:
        subprocess.TimeoutExpired: After ``timeout`` seconds; the child has
            already been killed.
        OSError: If the executable cannot be started.
    """
    argv = [str(arg) for arg in args]
    tool = Path(argv[0]).name if argv else "?"
    logger.debug("Running %s", shlex.join(argv), extra={"command": tool})

    started = time.monotonic()
    try:
        proc = subprocess.run(  # nosec B603 - tool path resolved by caller
            argv,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            **kwargs,
        )
    except subprocess.TimeoutExpired:
        logger.warning(
            "%s did not finish within %ds",
            tool,
            timeout,
            extra={"command": tool, "timeout_seconds": timeout},
        )
        raise

    logger.debug(
        "%s exited with %d after %.2fs",
        tool,
        proc.returncode,
        time.monotonic() - started,
        extra={"command": tool, "returncode": proc.returncode},
    )
    return proc.stdout or "", proc.stderr or "", proc.returncode
