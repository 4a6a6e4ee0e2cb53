"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (applied by the commands themselves)
2. Environment variables (RAWPORT_*)
3. Config file (~/.rawport/config.toml)
4. Default values

Environment variables:
- RAWPORT_CONFIG_PATH: Path to config file (overrides default location)
- RAWPORT_EXIFTOOL_PATH: Path to exiftool executable
- RAWPORT_DNGLAB_PATH: Path to dnglab executable
- RAWPORT_WORKERS: Number of parallel conversion workers
- RAWPORT_FORMAT: Default filename template
- RAWPORT_ARTIST: Default artist
- RAWPORT_EMBED_ORIGINAL: Embed original RAW data (true/false)
- RAWPORT_FORCE: Overwrite existing output files (true/false)
- RAWPORT_LOG_LEVEL, RAWPORT_LOG_FILE, RAWPORT_LOG_FORMAT: Logging settings
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from rawport.config.models import (
    ImportConfig,
    LoggingConfig,
    ProcessingConfig,
    RawportConfig,
    ToolPathsConfig,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".rawport"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"


def get_default_config_path() -> Path:
    """Get the config file path.

    Can be overridden by the RAWPORT_CONFIG_PATH environment variable.

    Returns:
        Path to config file.
    """
    env_path = os.environ.get("RAWPORT_CONFIG_PATH")
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_FILE


def load_config_file(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from a TOML file.

    Args:
        path: Path to config file. If None, uses default location.

    Returns:
        Parsed configuration dict. Empty dict if the file doesn't exist or
        cannot be parsed.
    """
    if path is None:
        path = get_default_config_path()

    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        with path.open("rb") as f:
            config = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to load config file %s: %s", path, e)
        return {}

    logger.debug("Loaded config from %s", path)
    return config


def _get_env_path(var_name: str) -> Path | None:
    """Get a path from environment variable.

    Returns:
        Path if set and existing, None otherwise.
    """
    value = os.environ.get(var_name)
    if value:
        path = Path(value).expanduser()
        if path.exists():
            return path
        logger.warning(
            "Environment variable %s points to non-existent path: %s",
            var_name,
            value,
        )
    return None


def _get_env_bool(var_name: str, default: bool) -> bool:
    value = os.environ.get(var_name)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


def _get_env_int(var_name: str, default: int | None) -> int | None:
    value = os.environ.get(var_name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("Invalid integer value for %s: %s", var_name, value)
        return default


def _get_env_str(var_name: str, default: str | None) -> str | None:
    return os.environ.get(var_name) or default


def _file_path(section: dict[str, Any], key: str) -> Path | None:
    value = section.get(key)
    return Path(value).expanduser() if value else None


def get_config(config_path: Path | None = None) -> RawportConfig:
    """Get rawport configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides RAWPORT_CONFIG_PATH).

    Returns:
        RawportConfig with merged configuration.

    Raises:
        ValueError: If a merged value fails model validation.
    """
    file_config = load_config_file(config_path)

    tools_file = file_config.get("tools", {})
    tools = ToolPathsConfig(
        exiftool=(
            _get_env_path("RAWPORT_EXIFTOOL_PATH")
            or _file_path(tools_file, "exiftool")
        ),
        dnglab=(
            _get_env_path("RAWPORT_DNGLAB_PATH") or _file_path(tools_file, "dnglab")
        ),
    )

    processing_file = file_config.get("processing", {})
    processing = ProcessingConfig(
        workers=_get_env_int("RAWPORT_WORKERS", processing_file.get("workers")),
    )

    import_file = file_config.get("import", {})
    import_ = ImportConfig(
        format=_get_env_str("RAWPORT_FORMAT", import_file.get("format")),
        artist=_get_env_str("RAWPORT_ARTIST", import_file.get("artist")),
        embed_original=_get_env_bool(
            "RAWPORT_EMBED_ORIGINAL",
            import_file.get("embed_original", False),
        ),
        force=_get_env_bool("RAWPORT_FORCE", import_file.get("force", False)),
    )

    logging_file = file_config.get("logging", {})
    env_log_file = os.environ.get("RAWPORT_LOG_FILE")
    logging_config = LoggingConfig(
        level=_get_env_str("RAWPORT_LOG_LEVEL", logging_file.get("level")) or "info",
        file=(
            Path(env_log_file).expanduser()
            if env_log_file
            else _file_path(logging_file, "file")
        ),
        format=(
            _get_env_str("RAWPORT_LOG_FORMAT", logging_file.get("format")) or "text"
        ),
        include_stderr=_get_env_bool(
            "RAWPORT_LOG_INCLUDE_STDERR",
            logging_file.get("include_stderr", False),
        ),
        max_bytes=logging_file.get("max_bytes", 10_485_760),
        backup_count=logging_file.get("backup_count", 5),
    )

    return RawportConfig(
        tools=tools,
        processing=processing,
        import_=import_,
        logging=logging_config,
    )
