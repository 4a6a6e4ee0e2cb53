"""Tests for exiftool output parsing."""

import json

import pytest
from pydantic import ValidationError

from rawport.codec import DecodedMetadata, DecodeError
from rawport.codec.parsers import ExiftoolRecord, parse_exiftool_output


def _output(**fields) -> str:
    record = {"SourceFile": "/photos/DSCF0001.RAF", **fields}
    return json.dumps([record])


class TestParseExiftoolOutput:
    """Tests for parse_exiftool_output()."""

    def test_full_record(self) -> None:
        output = _output(
            Make="FUJIFILM",
            Model="X-T5",
            Artist="Jane Doe",
            ISO=400,
            ExposureTime="1/250",
            LensMake="FUJIFILM",
            LensModel="XF33mmF1.4 R LM WR",
            FocalLength=33.0,
            DateTimeOriginal="2024:05:17 14:03:59",
        )
        assert parse_exiftool_output(output, "DSCF0001.RAF") == DecodedMetadata(
            make="FUJIFILM",
            model="X-T5",
            artist="Jane Doe",
            iso=400,
            shutter_speed="1/250",
            lens_make="FUJIFILM",
            lens_model="XF33mmF1.4 R LM WR",
            focal_length="33",
            date_time_original="2024:05:17 14:03:59",
        )

    def test_missing_fields_are_none(self) -> None:
        metadata = parse_exiftool_output(_output(Make="Canon"), "x")
        assert metadata.make == "Canon"
        assert metadata.model is None
        assert metadata.iso is None

    def test_fractional_focal_length_kept(self) -> None:
        metadata = parse_exiftool_output(_output(FocalLength=24.5), "x")
        assert metadata.focal_length == "24.5"

    def test_numeric_exposure_time_stringified(self) -> None:
        metadata = parse_exiftool_output(_output(ExposureTime=2), "x")
        assert metadata.shutter_speed == "2"

    def test_string_iso_coerced(self) -> None:
        metadata = parse_exiftool_output(_output(ISO="800"), "x")
        assert metadata.iso == 800

    def test_unparsable_iso_ignored(self) -> None:
        metadata = parse_exiftool_output(_output(ISO="Auto"), "x")
        assert metadata.iso is None

    def test_blank_strings_become_none(self) -> None:
        metadata = parse_exiftool_output(_output(Artist="   "), "x")
        assert metadata.artist is None

    def test_unknown_keys_ignored(self) -> None:
        metadata = parse_exiftool_output(_output(Make="Nikon", Orientation=1), "x")
        assert metadata.make == "Nikon"

    def test_error_field_raises(self) -> None:
        output = _output(Error="File format error")
        with pytest.raises(DecodeError, match="File format error"):
            parse_exiftool_output(output, "bad.RAF")

    def test_invalid_json_raises(self) -> None:
        with pytest.raises(DecodeError, match="Invalid exiftool output"):
            parse_exiftool_output("not json", "x")

    def test_empty_list_raises(self) -> None:
        with pytest.raises(DecodeError, match="no metadata"):
            parse_exiftool_output("[]", "x")

    def test_record_without_source_file_raises(self) -> None:
        with pytest.raises(DecodeError, match="Unexpected exiftool output"):
            parse_exiftool_output(json.dumps([{"Make": "Sony"}]), "x")


class TestExiftoolRecord:
    """Tests for the ExiftoolRecord model."""

    def test_record_is_frozen(self) -> None:
        record = ExiftoolRecord.model_validate({"SourceFile": "a.NEF"})
        with pytest.raises(ValidationError):
            record.make = "Nikon"  # type: ignore[misc]

    def test_whole_focal_length_has_no_decimal(self) -> None:
        record = ExiftoolRecord.model_validate(
            {"SourceFile": "a.NEF", "FocalLength": 50.0}
        )
        assert record.focal_length == "50"
