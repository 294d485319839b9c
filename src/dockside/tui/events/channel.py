"""Bounded asyncio channel with close semantics.

`asyncio.Queue` has no notion of the other side going away, so a producer
blocked on a full queue would wait forever after the consumer stopped.
`Channel` pairs a bounded queue with a closed flag that wakes every
pending sender and receiver.
"""

from __future__ import annotations

import asyncio
from typing import Generic, TypeVar

T = TypeVar("T")


class ChannelClosedError(Exception):
    """Raised when sending to, or receiving from, a closed channel."""


class Channel(Generic[T]):
    """A bounded, closable FIFO channel.

    Args:
        capacity: Maximum number of buffered items.
    """

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._queue: asyncio.Queue[T] = asyncio.Queue(maxsize=capacity)
        self._closed = asyncio.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def close(self) -> None:
        """Close the channel; pending and future operations fail."""
        self._closed.set()

    def sender(self) -> Sender[T]:
        """Return a send-only handle to this channel."""
        return Sender(self)

    async def send(self, item: T) -> None:
        """Send an item, waiting for room if the channel is full.

        Raises:
            ChannelClosedError: If the channel is or becomes closed.
        """
        if self.closed:
            raise ChannelClosedError("send on closed channel")
        if not self._queue.full():
            self._queue.put_nowait(item)
            return

        put = asyncio.ensure_future(self._queue.put(item))
        if not await self._race(put):
            raise ChannelClosedError("send on closed channel")

    async def recv(self) -> T:
        """Receive the next item.

        Items buffered before a close are discarded with the channel.

        Raises:
            ChannelClosedError: If the channel is or becomes closed.
        """
        if self.closed:
            raise ChannelClosedError("receive on closed channel")
        if not self._queue.empty():
            return self._queue.get_nowait()

        get = asyncio.ensure_future(self._queue.get())
        if not await self._race(get):
            raise ChannelClosedError("receive on closed channel")
        return get.result()

    def try_recv(self) -> T | None:
        """Return the next buffered item without waiting, or None."""
        if self._queue.empty():
            return None
        return self._queue.get_nowait()

    async def _race(self, operation: asyncio.Future[T] | asyncio.Future[None]) -> bool:
        """Wait for an operation or the close signal, whichever comes first.

        Returns:
            True if the operation completed.
        """
        closed = asyncio.ensure_future(self._closed.wait())
        try:
            await asyncio.wait({operation, closed}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            closed.cancel()
            if not operation.done():
                operation.cancel()
        return operation.done() and not operation.cancelled()


class Sender(Generic[T]):
    """Send-only, freely shareable handle to a `Channel`."""

    def __init__(self, channel: Channel[T]) -> None:
        self._channel = channel

    @property
    def closed(self) -> bool:
        return self._channel.closed

    async def send(self, item: T) -> None:
        await self._channel.send(item)
