"""Tests for InvocationDispatcher failure isolation."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, Mock

import pytest

from offline_schedule.core.errors import InvocationError
from offline_schedule.runtime.scheduling.dispatcher import InvocationDispatcher

FIRE_DATE = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def log() -> Mock:
    """Create a mock log sink."""
    return Mock()


def logged(log: Mock) -> list[str]:
    """Messages passed to the mock log sink."""
    return [c.args[0] for c in log.call_args_list]


class TestInvocationDispatcher:
    """Test InvocationDispatcher.dispatch."""

    @pytest.mark.asyncio
    async def test_sync_invoker_success(self, log: Mock) -> None:
        """A synchronous invoker is called with name and input, success is logged."""
        invoker = Mock(return_value=None)
        dispatcher = InvocationDispatcher(invoker, log=log)

        await dispatcher.dispatch("fnA", {"x": 1}, FIRE_DATE)

        invoker.assert_called_once_with("fnA", {"x": 1})
        messages = logged(log)
        assert messages[0] == f"Attempting to invoke scheduled function: [fnA] on {FIRE_DATE}"
        assert messages[1] == f"Successfully invoked scheduled function: [fnA] on {FIRE_DATE}"

    @pytest.mark.asyncio
    async def test_async_invoker_awaited(self, log: Mock) -> None:
        """An async invoker's coroutine is awaited."""
        invoker = AsyncMock(return_value=None)
        dispatcher = InvocationDispatcher(invoker, log=log)

        await dispatcher.dispatch("fnA", {"x": 1}, FIRE_DATE)

        invoker.assert_awaited_once_with("fnA", {"x": 1})
        assert any("Successfully invoked" in m for m in logged(log))

    @pytest.mark.asyncio
    async def test_sync_failure_suppressed(self, log: Mock) -> None:
        """An exception raised synchronously is logged and not propagated."""
        invoker = Mock(side_effect=Exception("boom"))
        dispatcher = InvocationDispatcher(invoker, log=log)

        await dispatcher.dispatch("fnA", {"x": 1}, FIRE_DATE)

        messages = logged(log)
        assert len(messages) == 2
        assert "Failed to execute scheduled function: [fnA]" in messages[1]
        assert "boom" in messages[1]
        assert str(FIRE_DATE) in messages[1]
        assert not any("Successfully" in m for m in messages)

    @pytest.mark.asyncio
    async def test_async_failure_suppressed(self, log: Mock) -> None:
        """An exception from an awaited invocation is logged and not propagated."""
        invoker = AsyncMock(side_effect=InvocationError("fnB", "Invocation of fnB exited with code 1", returncode=1))
        dispatcher = InvocationDispatcher(invoker, log=log)

        await dispatcher.dispatch("fnB", {}, FIRE_DATE)

        assert "exited with code 1" in logged(log)[-1]

    @pytest.mark.asyncio
    async def test_failure_does_not_affect_next_dispatch(self, log: Mock) -> None:
        """A failed firing does not stop later firings."""
        invoker = Mock(side_effect=[RuntimeError("first"), None])
        dispatcher = InvocationDispatcher(invoker, log=log)

        await dispatcher.dispatch("fnA", {}, FIRE_DATE)
        await dispatcher.dispatch("fnA", {}, FIRE_DATE)

        assert invoker.call_count == 2
        assert logged(log)[-1].startswith("Successfully invoked")

    @pytest.mark.asyncio
    async def test_default_log_uses_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        """Without an injected sink, messages go to the module logger."""
        dispatcher = InvocationDispatcher(Mock())

        with caplog.at_level("INFO", logger="offline_schedule.runtime.scheduling.dispatcher"):
            await dispatcher.dispatch("fnA", {}, FIRE_DATE)

        assert "Successfully invoked scheduled function: [fnA]" in caplog.text
