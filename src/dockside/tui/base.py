"""Base classes for dashboard pages and components.

Components are plain objects: they hold state, react to keys, and return a
rich renderable from `draw()`. The terminal host is the only place textual
widgets exist.

Usage:
    from dockside.tui.base import Page

    class MyPage(Page):
        async def update(self, key: Key) -> MessageResponse: ...
        async def initialise(self, cx: AppContext) -> None: ...
        def get_help(self) -> PageHelp: ...
        def draw(self) -> RenderableType: ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rich.console import RenderableType

    from dockside.tui.apps.docker.context import AppContext
    from dockside.tui.components.help import PageHelp
    from dockside.tui.events import Key, MessageResponse


class Component(ABC):
    """Anything that renders into the dashboard frame."""

    @abstractmethod
    def draw(self) -> RenderableType | None:
        """Return the renderable for this component, or None to hide it."""


class Close:
    """Teardown hook run when a page is navigated away from.

    The default does nothing; pages owning background work override it.
    """

    async def close(self) -> None:
        return None


class Page(Close, Component):
    """A full-screen page managed by the page manager.

    Subclasses should define:
    - update(): Key handling, returning whether the key was consumed
    - initialise(): One-off activation with the incoming context
    - get_help(): The help legend shown under the page
    - draw(): The page body
    """

    @abstractmethod
    async def update(self, key: Key) -> MessageResponse:
        """Handle a key.

        Raises:
            Exception: Any failure; the dashboard shows it as an alert.
        """

    @abstractmethod
    async def initialise(self, cx: AppContext) -> None:
        """Activate the page with the context carried by the transition."""

    @abstractmethod
    def get_help(self) -> PageHelp:
        """Return the help legend for this page."""

    @abstractmethod
    def draw(self) -> RenderableType:
        """Return the page body."""
