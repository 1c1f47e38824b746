"""Extraction of schedule configurations from function definitions."""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from offline_schedule.domain.schedule import FunctionConfiguration, ScheduleEvent
from offline_schedule.runtime.scheduling.expressions import convert_expression_to_cron

logger = logging.getLogger(__name__)

FunctionProvider = Callable[[], Mapping[str, Any]]


def extract_configurations(function_provider: FunctionProvider) -> list[FunctionConfiguration]:
    """Build one FunctionConfiguration per schedule event of every function.

    The provider is called once. Events without a ``schedule`` key (http,
    sqs, ...) are ignored. Every rate of an event is converted to cron and
    kept on a single configuration sharing the event's input.

    Args:
        function_provider: Zero-argument callable returning a mapping of
            function name to function definition.

    Returns:
        Flat list of configurations, in function order then event order.

    Raises:
        pydantic.ValidationError: If a schedule event is malformed (e.g. no rate).
    """
    functions = function_provider()
    configurations: list[FunctionConfiguration] = []

    for function_name, function_config in functions.items():
        events = (function_config or {}).get("events") or []
        schedule_events = [
            event for event in events if isinstance(event, Mapping) and "schedule" in event
        ]

        for event in schedule_events:
            schedule = ScheduleEvent.model_validate(event["schedule"])
            if not schedule.enabled:
                logger.debug(f"Skipping disabled schedule for {function_name}: {schedule.rate}")
                continue

            configurations.append(
                FunctionConfiguration(
                    function_name=function_name,
                    cron=[convert_expression_to_cron(rate) for rate in schedule.rate],
                    input=schedule.input,
                )
            )

    return configurations
