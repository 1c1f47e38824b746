"""Runtime services for offline-schedule.

This package provides scheduling and process lifecycle handling.
"""

from offline_schedule.runtime.lifecycle import TerminationListener
from offline_schedule.runtime.scheduling import OfflineScheduler

__all__ = [
    "OfflineScheduler",
    "TerminationListener",
]
