"""Configuration management for rawport.

Configuration is loaded with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (RAWPORT_*)
3. Config file (~/.rawport/config.toml)
4. Default values (lowest priority)
"""

from rawport.config.loader import (
    get_config,
    get_default_config_path,
    load_config_file,
)
from rawport.config.logging_factory import (
    build_logging_config,
    configure_logging_from_cli,
)
from rawport.config.models import (
    ImportConfig,
    LoggingConfig,
    ProcessingConfig,
    RawportConfig,
    ToolPathsConfig,
)

__all__ = [
    # Models
    "ImportConfig",
    "LoggingConfig",
    "ProcessingConfig",
    "RawportConfig",
    "ToolPathsConfig",
    # Loader
    "get_config",
    "get_default_config_path",
    "load_config_file",
    # Logging
    "build_logging_config",
    "configure_logging_from_cli",
]
