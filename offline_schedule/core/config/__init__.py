"""Configuration package for offline-schedule.

This package provides Pydantic configuration models and loading utilities.
"""

from offline_schedule.core.config.loader import (
    check_unexpanded_vars,
    expand_env_vars,
    expand_env_vars_recursive,
    load_config,
    merge_configs,
)
from offline_schedule.core.config.models import (
    InvokeConfig,
    LoggingConfig,
    SchedulerConfig,
)

__all__ = [
    # Models
    "InvokeConfig",
    "LoggingConfig",
    "SchedulerConfig",
    # Loaders
    "check_unexpanded_vars",
    "expand_env_vars",
    "expand_env_vars_recursive",
    "load_config",
    "merge_configs",
]
