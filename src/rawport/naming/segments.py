"""Segment types and the keyword table for filename templates."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType


class MetadataTag(Enum):
    """Metadata fields a template can reference with {key} syntax."""

    CAMERA_MAKE = auto()
    CAMERA_MODEL = auto()
    CAMERA_SHUTTER_SPEED = auto()
    CAMERA_EXPOSURE_COMPENSATION = auto()
    CAMERA_ISO = auto()
    CAMERA_FLASH = auto()
    LENS_FSTOP = auto()
    LENS_MAKE = auto()
    LENS_MODEL = auto()
    LENS_FOCAL_LENGTH = auto()
    LENS_FOCUS_DISTANCE = auto()
    IMAGE_COLOR_SPACE = auto()
    IMAGE_SEQUENCE_NUMBER = auto()
    IMAGE_HEIGHT = auto()
    IMAGE_WIDTH = auto()
    IMAGE_BIT_DEPTH = auto()
    IMAGE_ORIGINAL_FILENAME = auto()


# Keys are case-sensitive. "camea.flash" is the historical spelling and stays
# accepted so existing templates keep compiling; "camera.flash" is an alias.
KEYWORDS: MappingProxyType[str, MetadataTag] = MappingProxyType(
    {
        "camera.make": MetadataTag.CAMERA_MAKE,
        "camera.model": MetadataTag.CAMERA_MODEL,
        "camera.shutter_speed": MetadataTag.CAMERA_SHUTTER_SPEED,
        "camera.iso": MetadataTag.CAMERA_ISO,
        "camera.exposure_compensation": MetadataTag.CAMERA_EXPOSURE_COMPENSATION,
        "camea.flash": MetadataTag.CAMERA_FLASH,
        "camera.flash": MetadataTag.CAMERA_FLASH,
        "lens.make": MetadataTag.LENS_MAKE,
        "lens.model": MetadataTag.LENS_MODEL,
        "lens.focal_length": MetadataTag.LENS_FOCAL_LENGTH,
        "lens.focus_distance": MetadataTag.LENS_FOCUS_DISTANCE,
        "lens.fstop": MetadataTag.LENS_FSTOP,
        "image.width": MetadataTag.IMAGE_WIDTH,
        "image.height": MetadataTag.IMAGE_HEIGHT,
        "image.bit_depth": MetadataTag.IMAGE_BIT_DEPTH,
        "image.color_space": MetadataTag.IMAGE_COLOR_SPACE,
        "image.sequence_number": MetadataTag.IMAGE_SEQUENCE_NUMBER,
        "image.original_filename": MetadataTag.IMAGE_ORIGINAL_FILENAME,
    }
)


@dataclass(frozen=True)
class LiteralSegment:
    """Text copied verbatim into the rendered filename."""

    text: str


@dataclass(frozen=True)
class DateTimeSegment:
    """A two-character strftime directive such as %Y."""

    token: str


@dataclass(frozen=True)
class MetadataSegment:
    """A reference to one metadata field."""

    tag: MetadataTag


# Type alias for union of all segment types
Segment = LiteralSegment | DateTimeSegment | MetadataSegment

ORIGINAL_FILENAME_SEGMENT = MetadataSegment(MetadataTag.IMAGE_ORIGINAL_FILENAME)


@dataclass(frozen=True)
class FormatTemplate:
    """A compiled filename template.

    Immutable once built, so a single instance is shared by every worker
    in a batch. Always holds exactly one original-filename reference.
    """

    source: str
    segments: tuple[Segment, ...]

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __getitem__(self, index: int) -> Segment:
        return self.segments[index]

    @property
    def tags(self) -> tuple[MetadataTag, ...]:
        """Metadata tags referenced by this template, in template order."""
        return tuple(
            segment.tag
            for segment in self.segments
            if isinstance(segment, MetadataSegment)
        )

    @property
    def unwired_tags(self) -> tuple[MetadataTag, ...]:
        """Referenced tags that always expand to an empty string."""
        from rawport.naming.expander import UNWIRED_TAGS

        return tuple(dict.fromkeys(tag for tag in self.tags if tag in UNWIRED_TAGS))


def keys_for_tag(tag: MetadataTag) -> list[str]:
    """Return every keyword that maps to the given tag."""
    return [key for key, value in KEYWORDS.items() if value is tag]
