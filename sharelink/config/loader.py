# Sharelink Configuration Loader
# Locate, read and validate the YAML configuration file

import copy
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from sharelink.config.defaults import DEFAULT_CONFIG, generate_default_config
from sharelink.config.schema import SharelinkConfig

SECTIONS = ("account", "metadata", "output")


def get_config_path() -> Path:
    """Path of the configuration file: $SHARELINK_CONFIG or ~/.config/sharelink/config.yaml."""
    env_path = os.environ.get("SHARELINK_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".config" / "sharelink" / "config.yaml"


def _read_yaml(config_path: Path) -> Any:
    """Parse the file; an empty file reads as an empty mapping."""
    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return {} if data is None else data


def load_config(config_path: Optional[Path] = None) -> SharelinkConfig:
    """
    Load configuration from YAML file.

    Missing sections and keys take their default values.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        SharelinkConfig: Validated configuration object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        yaml.YAMLError: If the file is not valid YAML.
        ValidationError: If config file is invalid.
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\nRun 'sharelink config init' to create one."
        )

    return SharelinkConfig.model_validate(_merge_with_defaults(_read_yaml(config_path)))


def ensure_config_exists(config_path: Optional[Path] = None) -> tuple[Path, bool]:
    """
    Ensure configuration file exists, creating default if needed.

    Returns:
        Tuple of (config_path, was_created).
    """
    if config_path is None:
        config_path = get_config_path()

    if config_path.exists():
        return config_path, False

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(generate_default_config(), encoding="utf-8")
    return config_path, True


def validate_config_file(config_path: Path) -> tuple[bool, list[str]]:
    """
    Validate a configuration file and collect every problem.

    Args:
        config_path: Path to config file to validate.

    Returns:
        Tuple of (is_valid, error_messages).
    """
    if not config_path.exists():
        return False, [f"Configuration file not found: {config_path}"]

    try:
        data = _read_yaml(config_path)
    except yaml.YAMLError as e:
        return False, [f"Invalid YAML syntax: {e}"]

    try:
        SharelinkConfig.model_validate(_merge_with_defaults(data))
    except ValidationError as e:
        errors: list[str] = []
        for error in e.errors():
            loc = " -> ".join(str(part) for part in error["loc"]) or "config"
            errors.append(f"{loc}: {error['msg']}")
        return False, errors

    return True, []


def _merge_with_defaults(data: Any) -> Any:
    """
    Fill in defaults for missing keys.

    Values of the wrong shape are passed through untouched so that
    validation reports them.
    """
    if not isinstance(data, dict):
        return data

    result = copy.deepcopy(DEFAULT_CONFIG)
    for section in SECTIONS:
        value = data.get(section)
        if value is None:
            continue
        result[section] = {**result[section], **value} if isinstance(value, dict) else value

    if "marker" in data:
        result["marker"] = data["marker"]

    return result
