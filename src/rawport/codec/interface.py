"""Decoder and encoder interfaces for camera RAW files."""

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Protocol

SOFTWARE_TAG = "rawport"


class CodecError(Exception):
    """Base exception for codec failures."""


class DecodeError(CodecError):
    """Raised when metadata cannot be read from a RAW file."""


class EncodeError(CodecError):
    """Raised when a RAW file cannot be converted to DNG."""


class CodecUnavailableError(CodecError):
    """Raised when the external tool behind a codec cannot be found."""


@dataclass(frozen=True)
class DecodedMetadata:
    """Metadata extracted from a RAW file.

    Every field is optional; cameras populate different subsets.
    """

    make: str | None = None
    model: str | None = None
    artist: str | None = None
    iso: int | None = None
    shutter_speed: str | None = None
    """Exposure time as a ratio string, e.g. "1/250"."""

    lens_make: str | None = None
    lens_model: str | None = None
    focal_length: str | None = None
    """Focal length in millimetres, e.g. "35" or "24.5"."""

    date_time_original: str | None = None
    """Capture time in EXIF layout, e.g. "2024:05:17 14:03:59"."""


@dataclass(frozen=True)
class ConvertOptions:
    """Options passed to the encoder for one conversion."""

    embed_original: bool = False
    """Embed the original RAW file inside the DNG."""

    artist: str | None = None
    """Value of the DNG Artist tag, or None to leave it unset."""

    software: str = SOFTWARE_TAG


class RawDecoder(Protocol):
    """Protocol for RAW metadata extraction implementations."""

    def decode(self, path: Path) -> DecodedMetadata:
        """Extract metadata from a RAW file.

        Args:
            path: Path to the RAW file.

        Returns:
            DecodedMetadata for the file.

        Raises:
            DecodeError: If the file cannot be decoded.
        """
        ...


class RawEncoder(Protocol):
    """Protocol for RAW to DNG conversion implementations."""

    def encode(self, path: Path, options: ConvertOptions, sink: BinaryIO) -> None:
        """Convert a RAW file to DNG, writing the result to ``sink``.

        Args:
            path: Path to the RAW file.
            options: Conversion options.
            sink: Writable binary stream receiving the DNG bytes.

        Raises:
            EncodeError: If the conversion fails.
        """
        ...
