"""exiftool-based implementation of the RawDecoder protocol."""

import subprocess  # nosec B404 - for TimeoutExpired
from pathlib import Path

from rawport.codec.interface import CodecUnavailableError, DecodedMetadata, DecodeError
from rawport.codec.parsers import EXIFTOOL_TAGS, parse_exiftool_output
from rawport.core.subprocess_utils import resolve_tool_path, run_command


class ExiftoolDecoder:
    """Reads RAW metadata by running ``exiftool -j``.

    exiftool understands every common RAW container, so no per-vendor
    handling is needed here.
    """

    def __init__(self, exiftool_path: Path | None = None, timeout: int = 60) -> None:
        """Initialize the decoder.

        Args:
            exiftool_path: Optional explicit path to exiftool. If not provided,
                exiftool is looked up on PATH.
            timeout: Per-file timeout in seconds.

        Raises:
            CodecUnavailableError: If exiftool cannot be found.
        """
        resolved = resolve_tool_path("exiftool", exiftool_path)
        if resolved is None:
            raise CodecUnavailableError(
                "exiftool is not installed or not in PATH. "
                "Install exiftool or configure its location via the "
                "RAWPORT_EXIFTOOL_PATH environment variable or "
                "~/.rawport/config.toml"
            )
        self._exiftool_path = resolved
        self._timeout = timeout

    def decode(self, path: Path) -> DecodedMetadata:
        """Extract metadata from a RAW file.

        Args:
            path: Path to the RAW file.

        Returns:
            DecodedMetadata for the file.

        Raises:
            DecodeError: If exiftool fails or reports an error for the file.
        """
        args: list[str | Path] = [self._exiftool_path, "-j"]
        args.extend(f"-{tag}" for tag in EXIFTOOL_TAGS)
        # Absolute so a name like "-x.CR2" is never read as an option
        args.append(path.absolute())

        try:
            stdout, stderr, returncode = run_command(args, timeout=self._timeout)
        except subprocess.TimeoutExpired as e:
            raise DecodeError(
                f"exiftool timed out for {path} after {e.timeout}s"
            ) from e
        except OSError as e:
            raise DecodeError(f"Could not run exiftool for {path}: {e}") from e

        # exiftool exits non-zero for unreadable files but still prints a
        # JSON record carrying the error text
        if returncode != 0 and not stdout.strip():
            raise DecodeError(
                f"exiftool failed for {path}: {stderr.strip() or returncode}"
            )

        return parse_exiftool_output(stdout, str(path))
