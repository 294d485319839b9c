"""Command line shown after pressing `:`.

Typed commands switch pages or quit; unknown text is discarded. Previous
commands are recalled with Up/Down, and two or more typed letters offer a
completion accepted with Tab.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

import structlog

from dockside.tui.apps.docker.context import AppContext
from dockside.tui.base import Component
from dockside.tui.components.text_input import Autocomplete, TextInput
from dockside.tui.events import Key, KeyCode, MessageResponse, Transition, send_transition

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.text import Text

    from dockside.tui.events import Message, Sender

logger = structlog.get_logger()

MAX_HISTORY_SIZE = 100

COMMANDS: dict[str, Callable[[], Transition]] = {
    "q": Transition.quit,
    "quit": Transition.quit,
    "image": lambda: Transition.to_image_page(AppContext()),
    "images": lambda: Transition.to_image_page(AppContext()),
    "container": lambda: Transition.to_container_page(AppContext()),
    "containers": lambda: Transition.to_container_page(AppContext()),
    "volume": lambda: Transition.to_volume_page(AppContext()),
    "volumes": lambda: Transition.to_volume_page(AppContext()),
    "network": lambda: Transition.to_network_page(AppContext()),
    "networks": lambda: Transition.to_network_page(AppContext()),
}


class History:
    """Most-recent-first command history.

    While browsing, the text typed before the first Up is kept as a working
    buffer and restored when browsing moves back past the newest entry.
    """

    def __init__(self, max_size: int = MAX_HISTORY_SIZE) -> None:
        self._values: deque[str] = deque(maxlen=max_size)
        self._working_buffer: str | None = None
        self._idx: int | None = None

    def __len__(self) -> int:
        return len(self._values)

    def add_value(self, value: str) -> None:
        if not value.strip():
            return
        self._values.appendleft(value)

    def reset_idx(self) -> None:
        self._idx = None
        self._working_buffer = None

    def next(self) -> str | None:
        """Move to an older entry, stopping at the oldest."""
        if not self._values:
            return None
        next_idx = 0 if self._idx is None else min(self._idx + 1, len(self._values) - 1)
        self._idx = next_idx
        return self._values[next_idx]

    def previous(self) -> str | None:
        """Move to a newer entry, or back to the working buffer."""
        if self._idx is None:
            return self._working_buffer
        if self._idx == 0:
            self._idx = None
            return self._working_buffer
        self._idx = min(self._idx - 1, len(self._values) - 1)
        return self._values[self._idx]

    def conditional_set_working_buffer(self, value: str) -> None:
        """Remember the in-progress text, unless already browsing history."""
        if self._working_buffer is not None and not self._working_buffer.strip():
            return
        if self._idx is not None:
            return
        self._working_buffer = value


class CommandInput(Component):
    """Prompted command line that turns commands into transitions."""

    def __init__(self, tx: Sender[Message], prompt: str) -> None:
        self._tx = tx
        self.history = History()
        self.text_input = TextInput(prompt, Autocomplete(list(COMMANDS)))

    @property
    def value(self) -> str:
        return self.text_input.value

    def initialise(self) -> None:
        self.text_input.reset()
        self.history.reset_idx()

    async def update(self, key: Key) -> MessageResponse:
        if key.is_char:
            self.history.reset_idx()
            self.text_input.update(key)
        elif key.code is KeyCode.UP:
            self.history.conditional_set_working_buffer(self.text_input.value)
            if (value := self.history.next()) is not None:
                self.text_input.set_value(value)
        elif key.code is KeyCode.DOWN:
            if (value := self.history.previous()) is not None:
                self.text_input.set_value(value)
        elif key.code is KeyCode.ENTER:
            self.history.add_value(self.text_input.value)
            self.history.reset_idx()
            await self.submit()
        else:
            return self.text_input.update(key)
        return MessageResponse.CONSUMED

    async def submit(self) -> None:
        """Send ToViewMode then the command's transition, and clear the input."""
        command = self.text_input.value.strip()
        factory = COMMANDS.get(command)
        if factory is not None:
            await send_transition(self._tx, Transition.to_view_mode())
            await send_transition(self._tx, factory())
        else:
            logger.debug("unknown_command", command=command)
        self.initialise()

    def draw(self) -> Text:
        return self.text_input.draw()
