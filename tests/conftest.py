"""Shared test fixtures for rawport."""

import os
import shutil
import tempfile
from pathlib import Path

import pytest

from rawport.codec import DecodedMetadata, StubCodec
from rawport.jobs import JobConfig
from rawport.naming import compile_template


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


@pytest.fixture
def sample_metadata() -> DecodedMetadata:
    """Metadata as decoded from a typical mirrorless RAW file."""
    return DecodedMetadata(
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


@pytest.fixture
def raw_dir(temp_dir: Path) -> Path:
    """Create a directory with three fake RAW files and one sidecar."""
    source = temp_dir / "raw"
    source.mkdir()
    for name in ("DSCF0001.RAF", "DSCF0002.RAF", "DSCF0003.RAF"):
        (source / name).write_bytes(b"RAW:" + name.encode())
    (source / "DSCF0001.xmp").write_text("<xmp/>")
    return source


@pytest.fixture
def out_dir(temp_dir: Path) -> Path:
    """Return a not-yet-created output directory path."""
    return temp_dir / "out"


@pytest.fixture
def stub_codec() -> StubCodec:
    """Stub codec that decodes every file to empty metadata."""
    return StubCodec()


@pytest.fixture
def make_job_config(out_dir: Path):
    """Factory for JobConfig with a default template."""

    def _make(template: str = "{image.original_filename}", **kwargs) -> JobConfig:
        return JobConfig(
            output_dir=kwargs.pop("output_dir", out_dir),
            template=compile_template(template),
            **kwargs,
        )

    return _make


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Keep tests away from the user's config file and RAWPORT_* variables.

    Returns the path RAWPORT_CONFIG_PATH points at; it does not exist until
    a test writes it.
    """
    for name in list(os.environ):
        if name.startswith("RAWPORT_"):
            monkeypatch.delenv(name)
    config_path = tmp_path / "rawport-config.toml"
    monkeypatch.setenv("RAWPORT_CONFIG_PATH", str(config_path))
    return config_path
