"""
Configuration loader for openskills.

Loads and merges configuration from multiple sources:
1. Default values
2. Global config (~/.openskills/config.yaml)
3. Environment variables (OPENSKILLS_<SECTION>_<KEY>)
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from openskills.config.merger import deep_merge, set_nested_value
from openskills.config.schema import Config
from openskills.storage.paths import get_global_config_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "OPENSKILLS_"


class ConfigurationError(Exception):
    """Raised when configuration loading or validation fails."""

    pass


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed configuration dictionary.

    Raises:
        ConfigurationError: If the file cannot be read or parsed.
    """
    try:
        with open(path, encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(f"Configuration in {path} must be a YAML mapping")
    return content


def apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Variables follow the pattern OPENSKILLS_<SECTION>_<KEY>=<value>. The
    first underscore separates the section, the rest is the key, so
    OPENSKILLS_SKILLS_OUTPUT_FILE sets skills.output_file.

    Args:
        config: Configuration dictionary to modify.

    Returns:
        Configuration with environment overrides applied.
    """
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX) or key == "OPENSKILLS_HOME":
            continue

        section, _, field = key[len(ENV_PREFIX) :].lower().partition("_")
        if not section or not field:
            continue

        config = set_nested_value(config, f"{section}.{field}", _parse_env_value(value))

    return config


def _parse_env_value(value: str) -> Any:
    """
    Parse an environment variable value to the appropriate type.

    Args:
        value: String value from environment.

    Returns:
        Parsed value (bool, int, list, or string).
    """
    if value.lower() in ("true", "yes", "on"):
        return True
    if value.lower() in ("false", "no", "off"):
        return False

    if re.match(r"^-?\d+$", value):
        return int(value)

    if "," in value:
        return [item.strip() for item in value.split(",")]

    return value


def load_config(config_path: Path | None = None, skip_env: bool = False) -> Config:
    """
    Load and merge configuration from all sources.

    Args:
        config_path: Config file to read, defaults to ~/.openskills/config.yaml.
        skip_env: Skip environment variable overrides.

    Returns:
        Merged and validated Config object.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    config_dict = Config().model_dump()

    path = config_path or get_global_config_path()
    if path.exists():
        logger.debug("Loading configuration from %s", path)
        config_dict = deep_merge(config_dict, load_yaml_file(path))

    if not skip_env:
        config_dict = apply_env_overrides(config_dict)

    try:
        return Config.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e


# Singleton for cached config
_cached_config: Config | None = None


def get_config(reload: bool = False) -> Config:
    """
    Get the global configuration instance.

    Uses a cached instance. Use reload=True to force refresh.

    Args:
        reload: Force reload configuration from disk.

    Returns:
        Config instance.
    """
    global _cached_config

    if _cached_config is None or reload:
        _cached_config = load_config()

    return _cached_config


def clear_config_cache() -> None:
    """Clear the cached configuration."""
    global _cached_config
    _cached_config = None
