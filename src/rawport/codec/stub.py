"""Stub codec for development and testing."""

from __future__ import annotations

import json
from pathlib import Path
from typing import BinaryIO

from rawport.codec.interface import (
    ConvertOptions,
    DecodedMetadata,
    DecodeError,
    EncodeError,
)

# Written at the start of every stub "DNG" so output is recognizable
STUB_HEADER = b"RAWPORT-STUB-DNG\n"


class StubCodec:
    """In-process decoder and encoder that never calls external tools.

    Metadata is looked up by file name in ``metadata``; unknown files decode
    to empty metadata. Files named in ``fail_decode`` or ``fail_encode``
    raise the matching codec error, which lets tests exercise failure paths.
    The encoder writes a short header, the options as JSON, and the source
    bytes.
    """

    def __init__(
        self,
        metadata: dict[str, DecodedMetadata] | None = None,
        fail_decode: set[str] | None = None,
        fail_encode: set[str] | None = None,
    ) -> None:
        self._metadata = dict(metadata or {})
        self._fail_decode = set(fail_decode or ())
        self._fail_encode = set(fail_encode or ())

    def decode(self, path: Path) -> DecodedMetadata:
        """Return the configured metadata for ``path``.

        Raises:
            DecodeError: If the file is missing or configured to fail.
        """
        if not path.is_file():
            raise DecodeError(f"File not found: {path}")
        if path.name in self._fail_decode:
            raise DecodeError(f"no compatible RAW decoder for {path}")
        return self._metadata.get(path.name, DecodedMetadata())

    def encode(self, path: Path, options: ConvertOptions, sink: BinaryIO) -> None:
        """Write a placeholder DNG for ``path`` into ``sink``.

        Raises:
            EncodeError: If the file is configured to fail or unreadable.
        """
        if path.name in self._fail_encode:
            raise EncodeError(f"couldn't convert {path} to DNG")
        try:
            payload = path.read_bytes()
        except OSError as e:
            raise EncodeError(f"couldn't read {path}: {e}") from e

        header = {
            "embed_original": options.embed_original,
            "artist": options.artist,
            "software": options.software,
        }
        sink.write(STUB_HEADER)
        sink.write(json.dumps(header).encode("utf-8") + b"\n")
        sink.write(payload)
