"""Key sources for the event loop's input reader."""

from __future__ import annotations

import asyncio
from typing import Protocol

from dockside.tui.events.key import Key


class KeyReader(Protocol):
    """Anything the input reader can pull keys from."""

    async def read_key(self, timeout: float) -> Key | None:
        """Wait up to `timeout` seconds for a key, returning None on timeout."""
        ...


class QueueKeyReader:
    """Key reader fed by the terminal host.

    The textual host calls `feed()` from its key handler; the event loop's
    input reader drains the queue.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[Key] = asyncio.Queue()

    def feed(self, key: Key) -> None:
        self._queue.put_nowait(key)

    async def read_key(self, timeout: float) -> Key | None:
        try:
            return await asyncio.wait_for(self._queue.get(), timeout)
        except TimeoutError:
            return None
