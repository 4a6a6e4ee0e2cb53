"""Tests for config models and the config loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from rawport.config import (
    LoggingConfig,
    ProcessingConfig,
    build_logging_config,
    get_config,
    get_default_config_path,
    load_config_file,
)


class TestModels:
    """Tests for config dataclass validation."""

    def test_processing_workers_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="workers"):
            ProcessingConfig(workers=0)

    def test_processing_workers_default_unset(self) -> None:
        assert ProcessingConfig().workers is None

    def test_logging_rejects_unknown_level(self) -> None:
        with pytest.raises(ValueError, match="level"):
            LoggingConfig(level="verbose")

    def test_logging_rejects_unknown_format(self) -> None:
        with pytest.raises(ValueError, match="format"):
            LoggingConfig(format="xml")


class TestGetDefaultConfigPath:
    """Tests for get_default_config_path function."""

    def test_returns_default_when_env_not_set(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("RAWPORT_CONFIG_PATH", raising=False)
        assert get_default_config_path() == Path.home() / ".rawport" / "config.toml"

    def test_returns_env_path_when_set(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RAWPORT_CONFIG_PATH", "/custom/config.toml")
        assert get_default_config_path() == Path("/custom/config.toml")


class TestLoadConfigFile:
    """Tests for load_config_file function."""

    def test_missing_file_is_empty(self, temp_dir: Path) -> None:
        assert load_config_file(temp_dir / "nope.toml") == {}

    def test_parses_toml(self, temp_dir: Path) -> None:
        path = temp_dir / "config.toml"
        path.write_text('[import]\nformat = "%Y_"\n')
        assert load_config_file(path) == {"import": {"format": "%Y_"}}

    def test_invalid_toml_is_ignored(
        self, temp_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        path = temp_dir / "config.toml"
        path.write_text("[import\nformat = ")
        assert load_config_file(path) == {}
        assert "Failed to load config file" in caplog.text


class TestGetConfig:
    """Tests for get_config precedence handling."""

    def test_defaults(self) -> None:
        config = get_config()
        assert config.processing.workers is None
        assert config.import_.format is None
        assert config.import_.force is False
        assert config.logging.level == "info"
        assert config.tools.exiftool is None

    def test_reads_file(self, isolated_config: Path, temp_dir: Path) -> None:
        exiftool = temp_dir / "exiftool"
        exiftool.touch()
        isolated_config.write_text(
            "[import]\n"
            'format = "%Y%m%d_"\n'
            'artist = "Jane Doe"\n'
            "embed_original = true\n"
            "[processing]\n"
            "workers = 3\n"
            "[tools]\n"
            f'exiftool = "{exiftool}"\n'
            "[logging]\n"
            'level = "debug"\n'
            'format = "json"\n'
        )

        config = get_config()

        assert config.import_.format == "%Y%m%d_"
        assert config.import_.artist == "Jane Doe"
        assert config.import_.embed_original is True
        assert config.processing.workers == 3
        assert config.tools.exiftool == exiftool
        assert config.logging.level == "debug"
        assert config.logging.format == "json"

    def test_env_overrides_file(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        isolated_config.write_text(
            '[import]\nformat = "file_"\nforce = false\n[processing]\nworkers = 3\n'
        )
        monkeypatch.setenv("RAWPORT_FORMAT", "env_")
        monkeypatch.setenv("RAWPORT_FORCE", "yes")
        monkeypatch.setenv("RAWPORT_WORKERS", "6")

        config = get_config()

        assert config.import_.format == "env_"
        assert config.import_.force is True
        assert config.processing.workers == 6

    def test_invalid_env_int_falls_back(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setenv("RAWPORT_WORKERS", "many")
        assert get_config().processing.workers is None
        assert "Invalid integer value for RAWPORT_WORKERS" in caplog.text

    def test_env_tool_path_must_exist(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setenv("RAWPORT_DNGLAB_PATH", "/does/not/exist/dnglab")
        assert get_config().tools.dnglab is None
        assert "non-existent path" in caplog.text

    def test_invalid_value_raises(self, isolated_config: Path) -> None:
        isolated_config.write_text("[processing]\nworkers = 0\n")
        with pytest.raises(ValueError, match="workers"):
            get_config()

    def test_explicit_path_wins(self, temp_dir: Path) -> None:
        path = temp_dir / "other.toml"
        path.write_text('[import]\nartist = "Other"\n')
        assert get_config(path).import_.artist == "Other"


class TestBuildLoggingConfig:
    """Tests for build_logging_config function."""

    def test_overrides_applied(self) -> None:
        base = LoggingConfig(level="info", format="text", max_bytes=1024)
        result = build_logging_config(base, level="debug", format="json")
        assert result.level == "debug"
        assert result.format == "json"
        assert result.max_bytes == 1024

    def test_none_keeps_base(self) -> None:
        base = LoggingConfig(level="warning", file=Path("/var/log/rawport.log"))
        result = build_logging_config(base)
        assert result == base
