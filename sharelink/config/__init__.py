# Sharelink Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from sharelink.config.defaults import DEFAULT_CONFIG, generate_default_config
from sharelink.config.loader import (
    ensure_config_exists,
    get_config_path,
    load_config,
    validate_config_file,
)
from sharelink.config.schema import AccountConfig, MetadataConfig, OutputConfig, SharelinkConfig

__all__ = [
    # Schema
    "SharelinkConfig",
    "AccountConfig",
    "MetadataConfig",
    "OutputConfig",
    # Loader
    "load_config",
    "get_config_path",
    "ensure_config_exists",
    "validate_config_file",
    # Defaults
    "DEFAULT_CONFIG",
    "generate_default_config",
]
