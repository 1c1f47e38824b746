"""Process lifecycle handling for standalone mode."""

import asyncio
import logging
import signal
import sys
from collections.abc import Callable

logger = logging.getLogger(__name__)

# SIGINT: usually sent when the user presses CTRL+C
# SIGTERM: default termination signal of most process managers
TERMINATION_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)


class TerminationListener:
    """Waits for the first termination signal and exits the process.

    Signal handlers are installed on the event loop only while ``wait()`` is
    pending and are removed as soon as the first signal is delivered.
    """

    def __init__(
        self,
        log: Callable[[str], None] | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
        exit: Callable[[int], object] = sys.exit,
        signals: tuple[signal.Signals, ...] = TERMINATION_SIGNALS,
    ):
        """Initialize the listener.

        Args:
            log: Message sink. Defaults to this module's logger.
            loop: Event loop to install handlers on. Defaults to the running loop.
            exit: Called with the exit code once a signal arrives.
            signals: Signals that end the process.
        """
        self._log = log or logger.info
        self._loop = loop
        self._exit = exit
        self._signals = signals

    async def wait(self) -> str:
        """Resolve with the name of the first termination signal received."""
        loop = self._loop or asyncio.get_running_loop()
        received: asyncio.Future[str] = loop.create_future()

        def signal_handler(sig: signal.Signals) -> None:
            if not received.done():
                received.set_result(sig.name)

        for sig in self._signals:
            loop.add_signal_handler(sig, signal_handler, sig)

        try:
            return await received
        finally:
            for sig in self._signals:
                loop.remove_signal_handler(sig)

    async def await_termination(self) -> None:
        """Block until SIGINT or SIGTERM, then exit with status 0."""
        signal_name = await self.wait()
        self._log(f"Got {signal_name} signal. Stopping offline-schedule...")
        self._exit(0)
