"""Compiler for the filename template language.

Converts a template string such as ``"%Y-%m-%d_{camera.make}"`` into a
FormatTemplate via a single-pass character scanner. Three constructs are
recognized:

- ``%X``: a two-character date/time directive, rendered with strftime
- ``{key}``: a metadata reference looked up in the keyword table
- ``{{``: an escaped literal ``{``

Everything else is literal text.
"""

from __future__ import annotations

from enum import Enum, auto

from rawport.naming.errors import ParseErrorKind, TemplateParseError
from rawport.naming.segments import (
    KEYWORDS,
    ORIGINAL_FILENAME_SEGMENT,
    DateTimeSegment,
    FormatTemplate,
    LiteralSegment,
    MetadataSegment,
    Segment,
)

DATETIME_MARKER = "%"
OPEN_EXPANSION = "{"
CLOSE_EXPANSION = "}"
ESCAPED_OPEN_EXPANSION = OPEN_EXPANSION * 2

# A date/time segment is the marker plus exactly one directive character
_DATETIME_LENGTH = 2


class _ScanState(Enum):
    START = auto()
    LITERAL = auto()
    DATETIME = auto()
    EXPANSION_START = auto()
    EXPANSION_BODY = auto()


def compile_template(template: str) -> FormatTemplate:
    """Compile a filename template string.

    An original-filename reference is appended when the template does not
    contain one, so every rendered name carries the source file's stem.

    Args:
        template: The template string to compile.

    Returns:
        The compiled FormatTemplate.

    Raises:
        TemplateParseError: On a malformed date/time directive, an unknown or
            repeated expansion key, or an expansion missing its closing brace.
    """
    segments: list[Segment] = []
    consumed = 0

    while consumed < len(template):
        state, end = _scan_segment(template, consumed)
        chunk = template[consumed:end]
        if not chunk:
            raise TemplateParseError(
                ParseErrorKind.UNKNOWN,
                consumed,
                len(template) - consumed,
                template,
            )

        segment = _build_segment(state, chunk, consumed, template)
        if segment == ORIGINAL_FILENAME_SEGMENT and segment in segments:
            raise TemplateParseError.invalid_expansion(
                consumed,
                len(chunk),
                template,
                "the original filename may only be referenced once",
            )
        segments.append(segment)
        consumed = end

    if ORIGINAL_FILENAME_SEGMENT not in segments:
        segments.append(ORIGINAL_FILENAME_SEGMENT)

    return FormatTemplate(source=template, segments=tuple(segments))


def _scan_segment(source: str, start: int) -> tuple[_ScanState, int]:
    """Scan one segment beginning at ``start``.

    Returns:
        Tuple of (state the segment closed in, end offset exclusive).
    """
    state = _ScanState.START
    pos = start

    while pos < len(source):
        ch = source[pos]

        if state is _ScanState.START:
            if ch == DATETIME_MARKER:
                state = _ScanState.DATETIME
            elif ch == OPEN_EXPANSION:
                state = _ScanState.EXPANSION_START
            else:
                state = _ScanState.LITERAL
        elif state is _ScanState.DATETIME:
            return state, pos + 1
        elif state is _ScanState.EXPANSION_START:
            if ch == OPEN_EXPANSION:
                return state, pos + 1
            # The first character after "{" always belongs to the body
            state = _ScanState.EXPANSION_BODY
        elif state is _ScanState.EXPANSION_BODY:
            if ch == CLOSE_EXPANSION:
                return state, pos + 1
        elif ch in (DATETIME_MARKER, OPEN_EXPANSION):
            # Literal text stops before the next directive or expansion
            return state, pos

        pos += 1

    return state, pos


def _build_segment(
    state: _ScanState, chunk: str, offset: int, source: str
) -> Segment:
    """Turn a scanned chunk into a Segment, validating it for its state."""
    if state is _ScanState.LITERAL:
        return LiteralSegment(chunk)

    if state is _ScanState.DATETIME:
        if len(chunk) != _DATETIME_LENGTH:
            raise TemplateParseError.invalid_expansion(
                offset,
                len(chunk),
                source,
                f"'{DATETIME_MARKER}' must be followed by a format character",
            )
        return DateTimeSegment(chunk)

    if state is _ScanState.EXPANSION_START:
        if chunk == ESCAPED_OPEN_EXPANSION:
            return LiteralSegment(OPEN_EXPANSION)
        raise TemplateParseError.unterminated_expansion(offset, len(chunk), source)

    if state is _ScanState.EXPANSION_BODY:
        if not chunk.endswith(CLOSE_EXPANSION):
            raise TemplateParseError.unterminated_expansion(
                offset, len(chunk), source
            )
        key = chunk[1:-1]
        tag = KEYWORDS.get(key)
        if tag is None:
            raise TemplateParseError.invalid_expansion(
                offset, len(chunk), source, f"unknown key {key!r}"
            )
        return MetadataSegment(tag)

    raise TemplateParseError(ParseErrorKind.UNKNOWN, offset, len(chunk), source)
