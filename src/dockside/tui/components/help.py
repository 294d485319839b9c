"""Help legends shown under each page.

Usage:
    help = (
        PageHelp.builder("Containers")
        .add_input(Key.ctrl("d"), "delete")
        .add_input(Key.char("l"), "logs")
        .build()
    )
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rich.text import Text

from dockside.tui.base import Component

if TYPE_CHECKING:
    from dockside.tui.events import Key
    from dockside.tui.theme import Styles


@dataclass
class PageHelp(Component):
    """A page's name and its key bindings."""

    name: str
    inputs: list[tuple[str, str]] = field(default_factory=list)
    styles: Styles | None = None

    @classmethod
    def builder(cls, name: str) -> PageHelpBuilder:
        return PageHelpBuilder(name)

    def entries(self) -> list[str]:
        """Return formatted entries, sorted by key."""
        return [f" <{key}> = {desc} " for key, desc in sorted(self.inputs)]

    def draw(self) -> Text:
        style = self.styles.help if self.styles else None
        text = Text(f"{self.name}:", style="bold")
        for entry in self.entries():
            text.append(entry, style=style)
        return text


class PageHelpBuilder:
    """Fluent builder for `PageHelp`."""

    def __init__(self, name: str) -> None:
        self._name = name
        self._inputs: list[tuple[str, str]] = []
        self._styles: Styles | None = None

    def add_input(self, key: Key | str, description: str) -> PageHelpBuilder:
        self._inputs.append((str(key), description))
        return self

    def with_styles(self, styles: Styles) -> PageHelpBuilder:
        self._styles = styles
        return self

    def build(self) -> PageHelp:
        return PageHelp(self._name, list(self._inputs), self._styles)
