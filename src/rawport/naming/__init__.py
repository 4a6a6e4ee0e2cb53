"""Filename template language for rawport.

Provides compile_template() to turn strings like '%Y%m%d_{camera.model}'
into an immutable FormatTemplate, and render_filename() to produce the
output filename for one decoded image.
"""

from rawport.naming.compiler import compile_template
from rawport.naming.errors import ParseErrorKind, TemplateParseError
from rawport.naming.expander import UNWIRED_TAGS, expand_tag
from rawport.naming.renderer import OUTPUT_EXTENSION, render_filename
from rawport.naming.segments import (
    KEYWORDS,
    DateTimeSegment,
    FormatTemplate,
    LiteralSegment,
    MetadataSegment,
    MetadataTag,
    Segment,
)

__all__ = [
    "KEYWORDS",
    "OUTPUT_EXTENSION",
    "UNWIRED_TAGS",
    "DateTimeSegment",
    "FormatTemplate",
    "LiteralSegment",
    "MetadataSegment",
    "MetadataTag",
    "ParseErrorKind",
    "Segment",
    "TemplateParseError",
    "compile_template",
    "expand_tag",
    "render_filename",
]
