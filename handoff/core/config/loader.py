"""YAML configuration loading.

Expands ${VAR} references from the environment and deep-merges optional
override mappings before validating into a Config.
"""

import copy
import os
import re
from pathlib import Path
from typing import Any

import yaml

from handoff.core.config.models import Config

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def expand_env_vars(value: str) -> str:
    """Replace ${VAR} patterns in a string with environment values.

    Unknown variables are left in place so check_unexpanded_vars can report them.

    Examples:
        >>> os.environ['QUEUE_NAME'] = 'jobs'
        >>> expand_env_vars('name: ${QUEUE_NAME}')
        'name: jobs'
    """
    return _ENV_VAR_PATTERN.sub(lambda m: os.environ.get(m.group(1), m.group(0)), value)


def expand_env_vars_recursive(obj: Any) -> Any:
    """Expand ${VAR} patterns in every string nested inside dicts and lists."""
    if isinstance(obj, dict):
        return {key: expand_env_vars_recursive(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [expand_env_vars_recursive(item) for item in obj]
    if isinstance(obj, str):
        return expand_env_vars(obj)
    return obj


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge override values over a base mapping.

    Args:
        base: Default configuration.
        override: Values taking precedence. Nested dicts merge recursively.

    Returns:
        A new merged dictionary; neither input is modified.

    Examples:
        >>> merge_configs({'queue': {'name': 'a', 'default_timeout_ms': 50}}, {'queue': {'name': 'b'}})
        {'queue': {'name': 'b', 'default_timeout_ms': 50}}
    """
    result = copy.deepcopy(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result


def check_unexpanded_vars(data: Any, source: str) -> None:
    """Fail if any ${VAR} pattern survived expansion.

    Args:
        data: Expanded configuration data.
        source: Label for the error message, usually the file path.

    Raises:
        ValueError: Listing every unresolved variable.
    """
    unresolved: set[str] = set()
    _collect_unexpanded_vars(data, unresolved)
    if unresolved:
        raise ValueError(
            f"Unresolved environment variable(s) in {source}: {', '.join(sorted(unresolved))}. "
            f"Set these variables or remove the ${{VAR}} references."
        )


def _collect_unexpanded_vars(obj: Any, found: set[str]) -> None:
    if isinstance(obj, dict):
        for value in obj.values():
            _collect_unexpanded_vars(value, found)
    elif isinstance(obj, list):
        for item in obj:
            _collect_unexpanded_vars(item, found)
    elif isinstance(obj, str):
        for match in _ENV_VAR_PATTERN.finditer(obj):
            found.add(f"${{{match.group(1)}}}")


def load_config(path: Path | str, overrides: dict[str, Any] | None = None) -> Config:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.
        overrides: Optional mapping merged over the file contents.

    Returns:
        Validated Config with environment variables expanded.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ValueError: If a ${VAR} reference cannot be resolved.
        yaml.YAMLError: If the YAML is malformed.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open() as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}

    if overrides:
        data = merge_configs(data, overrides)

    data = expand_env_vars_recursive(data)
    check_unexpanded_vars(data, source=str(config_path))

    return Config(**data)
