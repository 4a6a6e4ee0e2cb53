"""Expansion of metadata references into filename text."""

from __future__ import annotations

from rawport.codec.interface import DecodedMetadata
from rawport.naming.segments import MetadataTag

# Tags with no metadata field behind them yet. They compile, but always
# expand to an empty string, the same as a field the camera left unset.
UNWIRED_TAGS: frozenset[MetadataTag] = frozenset(
    {
        MetadataTag.CAMERA_EXPOSURE_COMPENSATION,
        MetadataTag.CAMERA_FLASH,
        MetadataTag.LENS_FSTOP,
        MetadataTag.LENS_FOCUS_DISTANCE,
        MetadataTag.IMAGE_COLOR_SPACE,
        MetadataTag.IMAGE_SEQUENCE_NUMBER,
        MetadataTag.IMAGE_HEIGHT,
        MetadataTag.IMAGE_WIDTH,
        MetadataTag.IMAGE_BIT_DEPTH,
    }
)


def expand_tag(
    tag: MetadataTag,
    metadata: DecodedMetadata,
    original_stem: str,
) -> str:
    """Resolve one metadata reference to the text placed in a filename.

    Never fails: a missing field or an unwired tag yields "". Ratio values
    such as "1/250" have their slashes replaced ("1_250") so the result is
    a single path component.

    Args:
        tag: The referenced metadata tag.
        metadata: Metadata decoded from the source image.
        original_stem: Source filename without its extension.

    Returns:
        The expanded text.
    """
    if tag is MetadataTag.IMAGE_ORIGINAL_FILENAME:
        return original_stem

    value: object | None
    if tag is MetadataTag.CAMERA_MAKE:
        value = metadata.make
    elif tag is MetadataTag.CAMERA_MODEL:
        value = metadata.model
    elif tag is MetadataTag.CAMERA_ISO:
        value = metadata.iso
    elif tag is MetadataTag.CAMERA_SHUTTER_SPEED:
        value = metadata.shutter_speed
    elif tag is MetadataTag.LENS_MAKE:
        value = metadata.lens_make
    elif tag is MetadataTag.LENS_MODEL:
        value = metadata.lens_model
    elif tag is MetadataTag.LENS_FOCAL_LENGTH:
        value = metadata.focal_length
    elif tag in UNWIRED_TAGS:
        value = None
    else:
        raise TypeError(f"Unknown metadata tag: {tag!r}")

    if value is None:
        return ""
    return make_path_safe(str(value))


def make_path_safe(value: str) -> str:
    """Replace path separators so a value stays within one path component."""
    return value.replace("/", "_")
