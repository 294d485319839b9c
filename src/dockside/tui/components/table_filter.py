"""Filter box for list pages.

`/` starts editing; Enter keeps the filter and stops editing; Esc clears it.
"""

from __future__ import annotations

from rich.panel import Panel

from dockside.tui.base import Component
from dockside.tui.components.text_input import TextInput
from dockside.tui.events import Key, KeyCode, MessageResponse

FILTER_KEY = Key.char("/")


class TableFilter(Component):
    """Case-insensitive substring filter for table rows."""

    def __init__(self) -> None:
        self.is_filtering = False
        self.input = TextInput("Filter:")

    @property
    def text(self) -> str:
        return self.input.value.lower()

    @property
    def is_active(self) -> bool:
        return self.is_filtering or bool(self.input.value)

    def handle_input(self, key: Key) -> MessageResponse | None:
        """Offer a key to the filter.

        Returns:
            CONSUMED when the filter used the key, None to let the page
            handle it.
        """
        if self.is_filtering:
            if key.code is KeyCode.ESC:
                self.is_filtering = False
                self.input.reset()
            elif key.code is KeyCode.ENTER:
                self.is_filtering = False
            elif key.code is not KeyCode.NULL:
                self.input.update(key)
            return MessageResponse.CONSUMED

        if key == FILTER_KEY:
            self.is_filtering = True
            return MessageResponse.CONSUMED
        if key.code is KeyCode.ESC and self.input.value:
            self.input.reset()
            return MessageResponse.CONSUMED
        return None

    def matches(self, *values: str) -> bool:
        """True if any value contains the filter text."""
        needle = self.text
        if not needle:
            return True
        return any(needle in value.lower() for value in values)

    def draw(self) -> Panel | None:
        if not self.is_active:
            return None
        border = "bold" if self.is_filtering else "dim"
        return Panel(self.input.draw(), title="Filter", border_style=border, height=3)
