"""Tests for filename rendering."""

from datetime import datetime

from rawport.codec import DecodedMetadata
from rawport.naming import OUTPUT_EXTENSION, compile_template, render_filename
from rawport.naming.renderer import parse_exif_datetime


class TestRenderFilename:
    """Tests for render_filename()."""

    def test_literal_template_is_reproduced(self) -> None:
        template = compile_template("holiday-2024_")
        result = render_filename(template, DecodedMetadata(), "IMG_0001")
        assert result == "holiday-2024_IMG_0001.dng"

    def test_extension_is_dng(self) -> None:
        assert OUTPUT_EXTENSION == ".dng"

    def test_date_and_metadata(self, sample_metadata: DecodedMetadata) -> None:
        template = compile_template("%Y%m%d_%H%M%S_{camera.model}_")
        result = render_filename(template, sample_metadata, "DSCF0001")
        assert result == "20240517_140359_X-T5_DSCF0001.dng"

    def test_shutter_speed_slash_replaced(
        self, sample_metadata: DecodedMetadata
    ) -> None:
        template = compile_template("{camera.shutter_speed}s_")
        result = render_filename(template, sample_metadata, "DSCF0001")
        assert result == "1_250s_DSCF0001.dng"

    def test_missing_date_renders_empty(self) -> None:
        template = compile_template("%Y-%m-%d_")
        result = render_filename(template, DecodedMetadata(), "IMG_0001")
        assert result == "--_IMG_0001.dng"

    def test_malformed_date_renders_empty(self) -> None:
        template = compile_template("%Y_")
        metadata = DecodedMetadata(date_time_original="not a date")
        assert render_filename(template, metadata, "IMG") == "_IMG.dng"

    def test_escaped_brace_renders_literal(self) -> None:
        template = compile_template("{{x_")
        assert render_filename(template, DecodedMetadata(), "IMG") == "{x_IMG.dng"

    def test_unwired_tag_renders_empty(
        self, sample_metadata: DecodedMetadata
    ) -> None:
        template = compile_template("{lens.fstop}f_")
        assert render_filename(template, sample_metadata, "IMG") == "f_IMG.dng"

    def test_template_reused_across_files(
        self, sample_metadata: DecodedMetadata
    ) -> None:
        template = compile_template("{camera.make}_")
        first = render_filename(template, sample_metadata, "A")
        second = render_filename(template, DecodedMetadata(make="Canon"), "B")
        assert first == "FUJIFILM_A.dng"
        assert second == "Canon_B.dng"


class TestParseExifDatetime:
    """Tests for parse_exif_datetime()."""

    def test_parses_exif_layout(self) -> None:
        assert parse_exif_datetime("2024:05:17 14:03:59") == datetime(
            2024, 5, 17, 14, 3, 59
        )

    def test_none_and_empty(self) -> None:
        assert parse_exif_datetime(None) is None
        assert parse_exif_datetime("") is None

    def test_invalid(self) -> None:
        assert parse_exif_datetime("2024-05-17T14:03:59") is None
        assert parse_exif_datetime("0000:00:00 00:00:00") is None
