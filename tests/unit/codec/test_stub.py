"""Tests for the stub codec."""

import io
import json
from pathlib import Path

import pytest

from rawport.codec import (
    SOFTWARE_TAG,
    ConvertOptions,
    DecodedMetadata,
    DecodeError,
    EncodeError,
    StubCodec,
)
from rawport.codec.stub import STUB_HEADER


@pytest.fixture
def raw_file(temp_dir: Path) -> Path:
    path = temp_dir / "IMG_0001.CR2"
    path.write_bytes(b"payload")
    return path


class TestStubDecode:
    def test_returns_configured_metadata(self, raw_file: Path) -> None:
        metadata = DecodedMetadata(make="Canon")
        codec = StubCodec(metadata={"IMG_0001.CR2": metadata})
        assert codec.decode(raw_file) is metadata

    def test_unknown_file_decodes_empty(self, raw_file: Path) -> None:
        assert StubCodec().decode(raw_file) == DecodedMetadata()

    def test_missing_file(self, temp_dir: Path) -> None:
        with pytest.raises(DecodeError, match="not found"):
            StubCodec().decode(temp_dir / "nope.CR2")

    def test_configured_failure(self, raw_file: Path) -> None:
        with pytest.raises(DecodeError):
            StubCodec(fail_decode={"IMG_0001.CR2"}).decode(raw_file)


class TestStubEncode:
    def test_writes_header_options_and_payload(self, raw_file: Path) -> None:
        sink = io.BytesIO()
        StubCodec().encode(raw_file, ConvertOptions(artist="Jane"), sink)

        header, options_line, payload = sink.getvalue().split(b"\n", 2)
        assert header + b"\n" == STUB_HEADER
        assert json.loads(options_line) == {
            "embed_original": False,
            "artist": "Jane",
            "software": SOFTWARE_TAG,
        }
        assert payload == b"payload"

    def test_configured_failure(self, raw_file: Path) -> None:
        with pytest.raises(EncodeError):
            StubCodec(fail_encode={"IMG_0001.CR2"}).encode(
                raw_file, ConvertOptions(), io.BytesIO()
            )
