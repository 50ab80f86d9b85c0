"""Configuration for openskills."""

from openskills.config.loader import (
    ConfigurationError,
    clear_config_cache,
    get_config,
    load_config,
)
from openskills.config.schema import Config, PromptConfig, SkillsConfig

__all__ = [
    "Config",
    "ConfigurationError",
    "PromptConfig",
    "SkillsConfig",
    "clear_config_cache",
    "get_config",
    "load_config",
]
