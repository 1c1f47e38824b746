"""APScheduler-based emulation of serverless schedule events."""

import asyncio
import json
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

from apscheduler.job import Job
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.base import BaseTrigger

from offline_schedule.domain.schedule import FunctionConfiguration
from offline_schedule.runtime.lifecycle import TerminationListener
from offline_schedule.runtime.scheduling.dispatcher import InvocationDispatcher, Invoker
from offline_schedule.runtime.scheduling.extractor import FunctionProvider, extract_configurations
from offline_schedule.runtime.scheduling.triggers import build_trigger

logger = logging.getLogger(__name__)


class OfflineScheduler:
    """Registers a timer for every schedule event and invokes functions on fire.

    Schedule jobs:
    - One APScheduler job per cron expression per configuration
    - Fire callbacks go through the InvocationDispatcher, which never raises
    - Jobs live until the process exits (standalone) or stop() is called
    """

    def __init__(
        self,
        function_provider: FunctionProvider,
        invoker: Invoker,
        log: Callable[[str], None] | None = None,
        timezone: str = "UTC",
        termination: TerminationListener | None = None,
    ):
        """Initialize the scheduler.

        Args:
            function_provider: Callable returning the function definitions to schedule.
            invoker: Callable taking (function_name, input) that runs a function.
            log: Message sink for scheduling and invocation messages. Defaults to
                this module's logger.
            timezone: IANA timezone string for cron triggers (e.g., "America/New_York").
            termination: Listener awaited in standalone mode. Defaults to one
                sharing this scheduler's log sink.
        """
        self.function_provider = function_provider
        self._log = log or logger.info
        self._timezone = timezone
        self._tz = ZoneInfo(timezone)
        self._dispatcher = InvocationDispatcher(invoker, log=self._log)
        self._termination = termination or TerminationListener(log=self._log)
        self._scheduler: AsyncIOScheduler | None = None
        self.jobs: list[Job] = []

    async def schedule_events_standalone(self) -> None:
        """Schedule all events and run until SIGINT or SIGTERM."""
        self._log("Starting offline-schedule in standalone process. Press CTRL+C to stop.")
        await self.schedule_events()
        await self._termination.await_termination()

    async def schedule_events(self) -> None:
        """Register a job for every cron expression of every schedule event.

        Returns once all jobs are registered. Extraction and cron parsing
        errors propagate before any job is added.

        Raises:
            ValueError: If a schedule event or cron expression is invalid.
        """
        configurations = extract_configurations(self.function_provider)

        registrations: list[tuple[FunctionConfiguration, list[BaseTrigger]]] = [
            (configuration, [self._build_trigger(configuration.function_name, cron) for cron in configuration.cron])
            for configuration in configurations
        ]

        if self._scheduler is None:
            self._scheduler = AsyncIOScheduler(timezone=self._tz)

        for configuration, triggers in registrations:
            function_name = configuration.function_name
            self._log(
                f"Scheduling [{function_name}] cron: [{', '.join(configuration.cron)}] "
                f"input: {json.dumps(configuration.input, default=str)}"
            )

            for trigger in triggers:
                job = self._scheduler.add_job(
                    func=self._execute_schedule,
                    trigger=trigger,
                    args=[function_name, configuration.input],
                    name=function_name,
                )
                self.jobs.append(job)

        if not self._scheduler.running:
            self._scheduler.start()
            logger.debug(f"Scheduler started with {len(self.jobs)} job(s)")

    async def stop(self) -> None:
        """Stop the scheduler without waiting for running invocations."""
        if self._scheduler and self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            # Newer APScheduler releases defer shutdown to the next loop iteration.
            while self._scheduler.running:
                await asyncio.sleep(0)
            logger.info("Offline scheduler stopped")

    def _build_trigger(self, function_name: str, cron: str) -> BaseTrigger:
        """Parse a cron expression into a trigger in the scheduler timezone."""
        try:
            return build_trigger(cron, self._tz)
        except ValueError as e:
            raise ValueError(f"Invalid schedule for function {function_name}: '{cron}': {e}") from e

    async def _execute_schedule(self, function_name: str, input: Any) -> None:
        """Fire callback for one job."""
        await self._dispatcher.dispatch(function_name, input, datetime.now(self._tz))
