"""Configuration package for handoff.

Pydantic models and YAML loading utilities, re-exported at package level.
"""

from handoff.core.config.loader import (
    check_unexpanded_vars,
    expand_env_vars,
    expand_env_vars_recursive,
    load_config,
    merge_configs,
)
from handoff.core.config.models import Config, LoggingConfig, QueueConfig

__all__ = [
    # Models
    "Config",
    "LoggingConfig",
    "QueueConfig",
    # Loaders
    "check_unexpanded_vars",
    "expand_env_vars",
    "expand_env_vars_recursive",
    "load_config",
    "merge_configs",
]
