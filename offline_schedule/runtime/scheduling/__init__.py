"""Scheduling subsystem for offline-schedule.

Provides expression conversion, configuration extraction, invocation
dispatch, and the APScheduler-backed scheduler.
"""

from offline_schedule.runtime.scheduling.dispatcher import InvocationDispatcher
from offline_schedule.runtime.scheduling.expressions import convert_expression_to_cron, convert_rate_to_cron
from offline_schedule.runtime.scheduling.extractor import extract_configurations
from offline_schedule.runtime.scheduling.scheduler import OfflineScheduler
from offline_schedule.runtime.scheduling.triggers import build_trigger

__all__ = [
    "InvocationDispatcher",
    "OfflineScheduler",
    "build_trigger",
    "convert_expression_to_cron",
    "convert_rate_to_cron",
    "extract_configurations",
]
