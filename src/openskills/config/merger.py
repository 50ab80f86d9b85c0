"""
Configuration merger for openskills.

Implements deep merge of configuration dictionaries.
"""

from typing import Any


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Merge rules:
    - Scalar values and lists: override replaces base
    - Dicts: recursive deep merge
    - null/None value: remove key from result

    Args:
        base: Base configuration dictionary.
        override: Override configuration dictionary.

    Returns:
        Merged configuration dictionary.

    Examples:
        >>> deep_merge({"skills": {"output_file": "AGENTS.md"}}, {"skills": {"universal": True}})
        {'skills': {'output_file': 'AGENTS.md', 'universal': True}}
    """
    result = base.copy()

    for key, value in override.items():
        if value is None:
            result.pop(key, None)
        elif isinstance(value, dict) and key in result and isinstance(result[key], dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def set_nested_value(config: dict[str, Any], key_path: str, value: Any) -> dict[str, Any]:
    """
    Set a nested value in a configuration dictionary.

    Creates intermediate dictionaries as needed.

    Args:
        config: Configuration dictionary.
        key_path: Dot-separated key path (e.g., "skills.output_file").
        value: Value to set.

    Returns:
        Modified configuration dictionary.
    """
    keys = key_path.split(".")
    current = config

    for key in keys[:-1]:
        if key not in current or not isinstance(current[key], dict):
            current[key] = {}
        current = current[key]

    current[keys[-1]] = value
    return config
