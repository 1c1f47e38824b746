"""offline-schedule domain models.

Pure data types describing schedule events and the per-function
configurations derived from them.
"""

from offline_schedule.domain.schedule import FunctionConfiguration, ScheduleEvent

__all__ = [
    "FunctionConfiguration",
    "ScheduleEvent",
]
