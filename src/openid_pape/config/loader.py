"""
PAPE Configuration Loader

Loads configuration from YAML files with environment variable interpolation.

Environment Variable Interpolation:
- ${VAR_NAME} - Required variable, raises error if not set
- ${VAR_NAME:-default} - Optional variable with default value
"""

import os
import re
from pathlib import Path
from typing import Any, Iterator, Optional, Union
import logging

import yaml

from ..core.errors import ConfigError
from .schema import PapeConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "pape.yaml"
CONFIG_SUBDIRS = ("", "config")

# ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r'\$\{([^}:]+)(?::-([^}]*))?\}')


def _substitute(match) -> str:
    var_name, default_value = match.group(1), match.group(2)
    env_value = os.environ.get(var_name, default_value)
    if env_value is None:
        raise ConfigError(
            f"Environment variable '{var_name}' is required but not set. "
            f"Set it or provide a default: ${{{var_name}:-default}}"
        )
    return env_value


def interpolate_env_vars(value: Any) -> Any:
    """
    Substitute environment variables in strings, list items, and both keys
    and values of mappings (reserved alias tables are keyed by type URI).

    Raises:
        ConfigError: A required variable is not set
    """
    if isinstance(value, str):
        return ENV_VAR_PATTERN.sub(_substitute, value)
    if isinstance(value, dict):
        return {interpolate_env_vars(k): interpolate_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [interpolate_env_vars(item) for item in value]
    return value


def load_config_from_file(config_path: Union[str, Path]) -> PapeConfig:
    """
    Load PAPE configuration from a YAML file.

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigError: If the YAML is malformed, a required environment
            variable is not set, or values are invalid
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    logger.info(f"Loading configuration from {config_path}")

    try:
        raw_config = yaml.safe_load(config_path.read_text()) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed configuration file {config_path}: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Configuration file {config_path} must contain a mapping")

    try:
        return PapeConfig.from_dict(interpolate_env_vars(raw_config))
    except ConfigError as e:
        logger.error(f"Configuration error in {config_path}: {e}")
        raise


def _search_paths(working_dir: Optional[Path]) -> Iterator[Path]:
    roots = [working_dir] if working_dir else []
    roots.append(Path.cwd())
    for root in roots:
        for subdir in CONFIG_SUBDIRS:
            yield root / subdir / CONFIG_FILENAME


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    working_dir: Optional[Union[str, Path]] = None,
) -> PapeConfig:
    """
    Load PAPE configuration.

    Uses config_path when given, otherwise the first pape.yaml or
    config/pape.yaml found in working_dir and then the current directory.
    Falls back to defaults.
    """
    if config_path:
        return load_config_from_file(config_path)

    for path in _search_paths(Path(working_dir) if working_dir else None):
        if path.exists():
            return load_config_from_file(path)

    logger.info(f"No {CONFIG_FILENAME} found, using default configuration")
    return PapeConfig()
