"""dnglab-based implementation of the RawEncoder protocol."""

from __future__ import annotations

import logging
import shutil
import subprocess  # nosec B404 - for TimeoutExpired
import tempfile
from pathlib import Path
from typing import BinaryIO

from rawport.codec.interface import CodecUnavailableError, ConvertOptions, EncodeError
from rawport.core.subprocess_utils import resolve_tool_path, run_command

logger = logging.getLogger(__name__)


class DnglabEncoder:
    """Converts RAW files to DNG by running ``dnglab convert``.

    dnglab writes to a path, so each conversion goes to a private temporary
    directory and the finished file is streamed into the caller's sink.
    dnglab stamps its own Software tag; ``ConvertOptions.software`` is not
    forwarded.
    """

    def __init__(self, dnglab_path: Path | None = None, timeout: int = 600) -> None:
        """Initialize the encoder.

        Args:
            dnglab_path: Optional explicit path to dnglab. If not provided,
                dnglab is looked up on PATH.
            timeout: Per-file timeout in seconds.

        Raises:
            CodecUnavailableError: If dnglab cannot be found.
        """
        resolved = resolve_tool_path("dnglab", dnglab_path)
        if resolved is None:
            raise CodecUnavailableError(
                "dnglab is not installed or not in PATH. "
                "Install dnglab or configure its location via the "
                "RAWPORT_DNGLAB_PATH environment variable or "
                "~/.rawport/config.toml"
            )
        self._dnglab_path = resolved
        self._timeout = timeout

    def build_command(
        self, path: Path, options: ConvertOptions, output: Path
    ) -> list[str | Path]:
        """Build the dnglab command line for one conversion."""
        args: list[str | Path] = [
            self._dnglab_path,
            "convert",
            "--embed-raw",
            "true" if options.embed_original else "false",
        ]
        if options.artist:
            args.extend(["--artist", options.artist])
        # Absolute so a name like "-x.CR2" is never read as an option
        args.extend([path.absolute(), output])
        return args

    def encode(self, path: Path, options: ConvertOptions, sink: BinaryIO) -> None:
        """Convert a RAW file to DNG and stream the result into ``sink``.

        Args:
            path: Path to the RAW file.
            options: Conversion options.
            sink: Writable binary stream receiving the DNG bytes.

        Raises:
            EncodeError: If dnglab fails, times out, or produces no output.
        """
        with tempfile.TemporaryDirectory(prefix="rawport-") as tmp_dir:
            output = Path(tmp_dir) / f"{path.stem}.dng"
            args = self.build_command(path, options, output)

            try:
                _, stderr, returncode = run_command(args, timeout=self._timeout)
            except subprocess.TimeoutExpired as e:
                raise EncodeError(
                    f"dnglab timed out for {path} after {e.timeout}s"
                ) from e
            except OSError as e:
                raise EncodeError(f"Could not run dnglab for {path}: {e}") from e

            if returncode != 0:
                raise EncodeError(
                    f"dnglab failed for {path} (exit {returncode}): "
                    f"{stderr.strip() or 'no error output'}"
                )
            if not output.is_file():
                raise EncodeError(f"dnglab produced no output for {path}")

            logger.debug("Streaming %s bytes of DNG data", output.stat().st_size)
            with output.open("rb") as converted:
                shutil.copyfileobj(converted, sink)
