"""Parsing of exiftool JSON output into DecodedMetadata."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from rawport.codec.interface import DecodedMetadata, DecodeError

# Tags requested from exiftool. A trailing "#" asks for the numeric value
# instead of the print conversion ("50" rather than "50.0 mm").
EXIFTOOL_TAGS: tuple[str, ...] = (
    "Make",
    "Model",
    "Artist",
    "ISO",
    "ExposureTime",
    "LensMake",
    "LensModel",
    "FocalLength#",
    "DateTimeOriginal",
)


class ExiftoolRecord(BaseModel):
    """Pydantic model for one entry of ``exiftool -j`` output."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    source_file: str = Field(alias="SourceFile")
    error: str | None = Field(default=None, alias="Error")
    make: str | None = Field(default=None, alias="Make")
    model: str | None = Field(default=None, alias="Model")
    artist: str | None = Field(default=None, alias="Artist")
    iso: int | None = Field(default=None, alias="ISO")
    exposure_time: str | None = Field(default=None, alias="ExposureTime")
    lens_make: str | None = Field(default=None, alias="LensMake")
    lens_model: str | None = Field(default=None, alias="LensModel")
    focal_length: str | None = Field(default=None, alias="FocalLength")
    date_time_original: str | None = Field(default=None, alias="DateTimeOriginal")

    @field_validator(
        "make",
        "model",
        "artist",
        "exposure_time",
        "lens_make",
        "lens_model",
        "date_time_original",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        """Stringify numeric values and drop blank ones."""
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    @field_validator("iso", mode="before")
    @classmethod
    def coerce_iso(cls, v: Any) -> int | None:
        """Accept numeric or numeric-string ISO values, ignore the rest."""
        if isinstance(v, bool):
            return None
        if isinstance(v, int):
            return v
        if isinstance(v, float):
            return int(v)
        if isinstance(v, str) and v.strip().isdigit():
            return int(v.strip())
        return None

    @field_validator("focal_length", mode="before")
    @classmethod
    def coerce_focal_length(cls, v: Any) -> str | None:
        """Render whole-millimetre focal lengths without a decimal part."""
        if v is None or isinstance(v, bool):
            return None
        if isinstance(v, float) and v.is_integer():
            return str(int(v))
        text = str(v).strip()
        return text or None

    def to_metadata(self) -> DecodedMetadata:
        """Convert to the codec-neutral metadata type."""
        return DecodedMetadata(
            make=self.make,
            model=self.model,
            artist=self.artist,
            iso=self.iso,
            shutter_speed=self.exposure_time,
            lens_make=self.lens_make,
            lens_model=self.lens_model,
            focal_length=self.focal_length,
            date_time_original=self.date_time_original,
        )


def parse_exiftool_output(output: str, source: str) -> DecodedMetadata:
    """Parse ``exiftool -j`` output for a single file.

    Args:
        output: Raw JSON text printed by exiftool.
        source: Path of the file, used in error messages.

    Returns:
        DecodedMetadata for the file.

    Raises:
        DecodeError: If the output is not valid JSON, holds no record, fails
            validation, or reports an exiftool error for the file.
    """
    try:
        data = json.loads(output)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Invalid exiftool output for {source}: {e}") from e

    if not isinstance(data, list) or not data:
        raise DecodeError(f"exiftool returned no metadata for {source}")

    try:
        record = ExiftoolRecord.model_validate(data[0])
    except ValidationError as e:
        raise DecodeError(f"Unexpected exiftool output for {source}: {e}") from e

    if record.error:
        raise DecodeError(f"exiftool could not read {source}: {record.error}")

    return record.to_metadata()
