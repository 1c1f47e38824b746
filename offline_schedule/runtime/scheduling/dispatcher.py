"""Invocation of scheduled functions when their timers fire."""

import inspect
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

logger = logging.getLogger(__name__)

Invoker = Callable[[str, Any], Any]


class InvocationDispatcher:
    """Runs one scheduled function invocation and contains its failures.

    The invoker may be a plain function or return an awaitable. Any exception
    it raises is logged with the function name and fire date and then
    suppressed, so one failing function never stops its timer or the process.
    """

    def __init__(self, invoker: Invoker, log: Callable[[str], None] | None = None):
        """Initialize the dispatcher.

        Args:
            invoker: Callable taking (function_name, input) that runs the function.
            log: Message sink. Defaults to this module's logger.
        """
        self._invoker = invoker
        self._log = log or logger.info

    async def dispatch(self, function_name: str, input: Any, fire_date: datetime) -> None:
        """Invoke ``function_name`` with ``input`` for the firing at ``fire_date``."""
        try:
            self._log(f"Attempting to invoke scheduled function: [{function_name}] on {fire_date}")
            result = self._invoker(function_name, input)
            if inspect.isawaitable(result):
                await result
            self._log(f"Successfully invoked scheduled function: [{function_name}] on {fire_date}")
        except Exception as e:
            self._log(f"Failed to execute scheduled function: [{function_name}] Error: {e} on {fire_date}")
            logger.debug(f"Traceback for failed invocation of {function_name}", exc_info=True)
