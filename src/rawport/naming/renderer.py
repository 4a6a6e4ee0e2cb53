"""Filename rendering from a compiled template."""

from __future__ import annotations

import logging
from datetime import datetime

from rawport.codec.interface import DecodedMetadata
from rawport.naming.expander import expand_tag
from rawport.naming.segments import (
    DateTimeSegment,
    FormatTemplate,
    LiteralSegment,
    MetadataSegment,
)

logger = logging.getLogger(__name__)

# EXIF DateTimeOriginal layout, e.g. "2024:05:17 14:03:59"
EXIF_DATETIME_FORMAT = "%Y:%m:%d %H:%M:%S"

# Every converted file is written as a DNG
OUTPUT_EXTENSION = ".dng"


def parse_exif_datetime(value: str | None) -> datetime | None:
    """Parse an EXIF date string, returning None when absent or malformed."""
    if not value:
        return None
    try:
        return datetime.strptime(value.strip(), EXIF_DATETIME_FORMAT)
    except ValueError:
        logger.debug("Unparsable capture date: %r", value)
        return None


def render_filename(
    template: FormatTemplate,
    metadata: DecodedMetadata,
    original_stem: str,
) -> str:
    """Render the output filename for one source image.

    The capture date is parsed at most once per call. When it is missing or
    malformed every date/time segment renders as an empty string.

    Args:
        template: Compiled filename template.
        metadata: Metadata decoded from the source image.
        original_stem: Source filename without its extension.

    Returns:
        Filename including the output extension.
    """
    parts: list[str] = []
    capture_date: datetime | None = None
    date_parsed = False

    for segment in template:
        if isinstance(segment, LiteralSegment):
            parts.append(segment.text)
        elif isinstance(segment, DateTimeSegment):
            if not date_parsed:
                capture_date = parse_exif_datetime(metadata.date_time_original)
                date_parsed = True
            if capture_date is not None:
                parts.append(capture_date.strftime(segment.token))
        elif isinstance(segment, MetadataSegment):
            parts.append(expand_tag(segment.tag, metadata, original_stem))
        else:
            raise TypeError(f"Unknown segment type: {type(segment).__name__}")

    return "".join(parts) + OUTPUT_EXTENSION
