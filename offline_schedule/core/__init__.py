"""Core functionality for offline-schedule."""

from offline_schedule.core.config import SchedulerConfig, load_config
from offline_schedule.core.errors import InvocationError

__all__ = [
    "SchedulerConfig",
    "load_config",
    "InvocationError",
]
