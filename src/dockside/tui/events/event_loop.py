"""Event loop unifying ticks, key presses and background results.

Three producer tasks feed one bounded outbound channel:

- a ticker emitting `Tick` every `tick_rate` seconds,
- an input reader forwarding decoded keys as `Input`,
- an inbound relay re-sending whatever background work reported.

The application consumes the outbound channel one message at a time
through `next()`; background work reports through `get_sender()`.

Usage:
    events = EventLoop(QueueKeyReader())
    events.start()
    try:
        message = await events.next()
    finally:
        await events.stop()
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

from dockside.tui.events.channel import Channel, ChannelClosedError
from dockside.tui.events.message import TICK, InputMessage

if TYPE_CHECKING:
    from dockside.tui.events.channel import Sender
    from dockside.tui.events.input import KeyReader
    from dockside.tui.events.message import Message

logger = structlog.get_logger()

TICK_RATE = 0.25  # seconds
CHANNEL_CAPACITY = 32


class EventLoop:
    """Owns the producer tasks and the outbound/inbound channel pair.

    Args:
        key_reader: Source of decoded key presses.
        tick_rate: Seconds between ticks; also the input poll interval.
        capacity: Capacity of each channel.
    """

    def __init__(
        self,
        key_reader: KeyReader,
        tick_rate: float = TICK_RATE,
        capacity: int = CHANNEL_CAPACITY,
    ) -> None:
        self._key_reader = key_reader
        self._tick_rate = tick_rate
        self._outbound: Channel[Message] = Channel(capacity)
        self._inbound: Channel[Message] = Channel(capacity)
        self._tasks: list[asyncio.Task[None]] = []

    def start(self) -> None:
        """Spawn the ticker, input reader and inbound relay."""
        if self._tasks:
            return
        self._tasks = [
            asyncio.create_task(self._tick(), name="event-loop-ticker"),
            asyncio.create_task(self._read_input(), name="event-loop-input"),
            asyncio.create_task(self._relay(), name="event-loop-relay"),
        ]
        logger.debug("event_loop_started", tick_rate=self._tick_rate)

    def get_sender(self) -> Sender[Message]:
        """Return the inbound sender handed to pages and callbacks."""
        return self._inbound.sender()

    async def next(self) -> Message:
        """Wait for and return the next message.

        Raises:
            ChannelClosedError: If the loop has been stopped.
        """
        return await self._outbound.recv()

    async def stop(self) -> None:
        """Close the channels and wait for the producers to observe it."""
        self._outbound.close()
        self._inbound.close()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        dropped = 0
        for channel in (self._outbound, self._inbound):
            while channel.try_recv() is not None:
                dropped += 1
        logger.debug("event_loop_stopped", dropped=dropped)

    # =========================================================================
    # Producers
    # =========================================================================

    async def _tick(self) -> None:
        while not self._outbound.closed:
            await asyncio.sleep(self._tick_rate)
            try:
                await self._outbound.send(TICK)
            except ChannelClosedError:
                break

    async def _read_input(self) -> None:
        while not self._outbound.closed:
            # Bounded wait so a closed channel is noticed within one tick
            key = await self._key_reader.read_key(self._tick_rate)
            if key is None:
                continue
            try:
                await self._outbound.send(InputMessage(key))
            except ChannelClosedError:
                break

    async def _relay(self) -> None:
        while True:
            try:
                message = await self._inbound.recv()
                await self._outbound.send(message)
            except ChannelClosedError:
                break
