"""Error types for filename template compilation."""

from __future__ import annotations

from enum import Enum


class ParseErrorKind(Enum):
    """Why a template failed to compile."""

    INVALID_EXPANSION = "invalid expansion"
    UNTERMINATED_EXPANSION = "unterminated expansion"
    UNKNOWN = "unknown error"


class TemplateParseError(Exception):
    """Raised when a filename template cannot be compiled.

    Attributes:
        kind: Category of the failure.
        offset: Character offset of the offending slice in ``source``.
        length: Length of the offending slice.
        source: The full template string.
    """

    def __init__(
        self,
        kind: ParseErrorKind,
        offset: int,
        length: int,
        source: str,
        detail: str | None = None,
    ) -> None:
        self.kind = kind
        self.offset = offset
        self.length = length
        self.source = source
        fragment = source[offset : offset + length]
        message = f"{kind.value} at offset {offset}: {fragment!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)

    @classmethod
    def invalid_expansion(
        cls, offset: int, length: int, source: str, detail: str | None = None
    ) -> TemplateParseError:
        return cls(ParseErrorKind.INVALID_EXPANSION, offset, length, source, detail)

    @classmethod
    def unterminated_expansion(
        cls, offset: int, length: int, source: str
    ) -> TemplateParseError:
        return cls(
            ParseErrorKind.UNTERMINATED_EXPANSION,
            offset,
            length,
            source,
            "missing closing '}'",
        )

    def format_error(self) -> str:
        """Format error with carets under the offending slice."""
        caret = " " * self.offset + "^" * max(self.length, 1)
        return f"{self}\n  {self.source}\n  {caret}"
