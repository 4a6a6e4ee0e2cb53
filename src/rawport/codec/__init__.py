"""RAW codec adapters.

The pipeline depends only on the RawDecoder and RawEncoder protocols:
- ExiftoolDecoder: metadata via exiftool
- DnglabEncoder: DNG conversion via dnglab
- StubCodec: in-process stand-in for both, used in tests
"""

from rawport.codec.dnglab import DnglabEncoder
from rawport.codec.exiftool import ExiftoolDecoder
from rawport.codec.interface import (
    SOFTWARE_TAG,
    CodecError,
    CodecUnavailableError,
    ConvertOptions,
    DecodedMetadata,
    DecodeError,
    EncodeError,
    RawDecoder,
    RawEncoder,
)
from rawport.codec.stub import StubCodec

__all__ = [
    "SOFTWARE_TAG",
    "CodecError",
    "CodecUnavailableError",
    "ConvertOptions",
    "DecodedMetadata",
    "DecodeError",
    "DnglabEncoder",
    "EncodeError",
    "ExiftoolDecoder",
    "RawDecoder",
    "RawEncoder",
    "StubCodec",
]
