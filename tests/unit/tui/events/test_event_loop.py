"""Unit tests for the event loop."""

from __future__ import annotations

import asyncio

import pytest

from dockside.tui.events import (
    CHANNEL_CAPACITY,
    TICK,
    ChannelClosedError,
    ErrorMessage,
    EventLoop,
    InputMessage,
    Key,
    Message,
    QueueKeyReader,
    TickMessage,
)


async def _next_non_tick(events: EventLoop) -> Message:
    while isinstance(message := await events.next(), TickMessage):
        pass
    return message


@pytest.mark.unit
class TestEventLoop:
    """Tests for EventLoop producers and ordering."""

    def test_default_capacity(self) -> None:
        assert CHANNEL_CAPACITY == 32

    @pytest.mark.asyncio
    async def test_ticks_arrive(self) -> None:
        events = EventLoop(QueueKeyReader(), tick_rate=0.01)
        events.start()
        try:
            message = await asyncio.wait_for(events.next(), 1)
            assert message == TICK
        finally:
            await events.stop()

    @pytest.mark.asyncio
    async def test_ticks_are_not_faster_than_the_rate(self) -> None:
        """Without input, at most one tick arrives per interval."""
        loop = asyncio.get_running_loop()
        events = EventLoop(QueueKeyReader(), tick_rate=0.05)
        events.start()
        arrivals: list[float] = []
        try:
            deadline = loop.time() + 0.3
            while (remaining := deadline - loop.time()) > 0:
                try:
                    message = await asyncio.wait_for(events.next(), remaining)
                except TimeoutError:
                    break
                assert message == TICK
                arrivals.append(loop.time())
        finally:
            await events.stop()

        assert 1 <= len(arrivals) <= 6
        gaps = [later - earlier for earlier, later in zip(arrivals, arrivals[1:], strict=False)]
        assert all(gap >= 0.04 for gap in gaps)

    @pytest.mark.asyncio
    async def test_stop_discards_buffered_messages(self) -> None:
        events = EventLoop(QueueKeyReader(), tick_rate=0.05)
        events.start()
        await events.get_sender().send(ErrorMessage("late"))
        await asyncio.wait_for(events.stop(), 1)
        with pytest.raises(ChannelClosedError):
            await events.next()

    @pytest.mark.asyncio
    async def test_keys_are_forwarded(self) -> None:
        reader = QueueKeyReader()
        events = EventLoop(reader, tick_rate=0.05)
        events.start()
        try:
            reader.feed(Key.char("j"))
            assert await asyncio.wait_for(_next_non_tick(events), 1) == InputMessage(Key.char("j"))
        finally:
            await events.stop()

    @pytest.mark.asyncio
    async def test_inbound_messages_are_relayed_in_order(self) -> None:
        events = EventLoop(QueueKeyReader(), tick_rate=0.05)
        events.start()
        sender = events.get_sender()
        try:
            await sender.send(ErrorMessage("first"))
            await sender.send(ErrorMessage("second"))
            received = [await asyncio.wait_for(_next_non_tick(events), 1) for _ in range(2)]
            assert received == [ErrorMessage("first"), ErrorMessage("second")]
        finally:
            await events.stop()

    @pytest.mark.asyncio
    async def test_stop_ends_producers(self) -> None:
        events = EventLoop(QueueKeyReader(), tick_rate=0.01)
        events.start()
        sender = events.get_sender()
        await asyncio.wait_for(events.stop(), 1)
        assert sender.closed
        with pytest.raises(ChannelClosedError):
            await events.next()

    @pytest.mark.asyncio
    async def test_sender_fails_after_stop(self) -> None:
        events = EventLoop(QueueKeyReader(), tick_rate=0.05)
        events.start()
        sender = events.get_sender()
        await events.stop()
        with pytest.raises(ChannelClosedError):
            await sender.send(TICK)


@pytest.mark.unit
class TestQueueKeyReader:
    """Tests for the textual-fed key reader."""

    @pytest.mark.asyncio
    async def test_timeout_returns_none(self) -> None:
        assert await QueueKeyReader().read_key(0.01) is None

    @pytest.mark.asyncio
    async def test_returns_fed_key(self) -> None:
        reader = QueueKeyReader()
        reader.feed(Key.ESC)
        assert await reader.read_key(1) == Key.ESC
