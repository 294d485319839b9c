"""Application mode machine.

The dashboard sits between the runner and the page manager. In View mode
keys go to the current page first and only unclaimed keys reach the
global bindings; in TextInput mode keys go to the command line. Any error
raised while handling a key or a transition is logged and shown in an
app-level alert instead of ending the session.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog
from rich.console import Group
from rich.rule import Rule
from rich.text import Text

from dockside import __version__
from dockside.integrations.pypi import find_update
from dockside.tui.apps.docker.command_input import CommandInput
from dockside.tui.apps.docker.state import Mode, ModalType, Running
from dockside.tui.components.modal import AlertModal
from dockside.tui.events import TICK, Key, KeyCode, MessageResponse, TransitionKind
from dockside.tui.theme import Styles

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import RenderableType

    from dockside.core.config import Config
    from dockside.tui.apps.docker.page_manager import PageManager
    from dockside.tui.events import Message, Sender, Transition

logger = structlog.get_logger()

TITLE = "dockside"
FOOTER = "Press : to enter a command"

QUIT_KEYS = frozenset({Key.char("q"), Key.char("Q")})
COMMAND_KEYS = frozenset({Key.char(":"), Key.char("/")})


class Dashboard:
    """Top-level key and transition handling for the Docker dashboard.

    Attributes:
        mode: Whether keys drive pages or the command line.
        running: Set to DONE to end the main loop.
        page_manager: Owner of the current page.
        command_input: The `:` command line.
        alert: App-level error alert.
        update_to: Newer release found by the update check, if any.
    """

    def __init__(
        self,
        page_manager: PageManager,
        tx: Sender[Message],
        config: Config,
        endpoint: str | None = None,
    ) -> None:
        self.mode = Mode.VIEW
        self.running = Running.RUNNING
        self.page_manager = page_manager
        self._styles = Styles(config.theme)
        self._endpoint = endpoint
        self._tx = tx
        self.update_to: str | None = None
        self.command_input = CommandInput(tx, config.prompt)
        self.alert: AlertModal[ModalType] = AlertModal("Error", ModalType.ERROR, self._styles)

    @property
    def is_running(self) -> bool:
        return self.running is Running.RUNNING

    async def update(self, key: Key) -> MessageResponse:
        """Handle a key press (or the NULL key on a tick)."""
        if self.alert.is_open:
            return await self.alert.update(key)

        try:
            if self.mode is Mode.TEXT_INPUT:
                return await self._update_text_input(key)
            return await self._update_view(key)
        except Exception as e:
            logger.warning("key_handling_failed", key=str(key), mode=self.mode.value, error=str(e))
            self.show_error(str(e))
            return MessageResponse.CONSUMED

    async def _update_view(self, key: Key) -> MessageResponse:
        response = await self.page_manager.update(key)
        if response.is_consumed:
            return response

        if key in QUIT_KEYS:
            self.running = Running.DONE
        elif key in COMMAND_KEYS:
            self.mode = Mode.TEXT_INPUT
            self.command_input.initialise()
        else:
            return MessageResponse.NOT_CONSUMED
        return MessageResponse.CONSUMED

    async def _update_text_input(self, key: Key) -> MessageResponse:
        if key.code is KeyCode.ESC:
            self.mode = Mode.VIEW
            return MessageResponse.CONSUMED
        if key.code is KeyCode.NULL:
            return MessageResponse.NOT_CONSUMED
        return await self.command_input.update(key)

    async def transition(self, transition: Transition) -> MessageResponse:
        """Apply a transition.

        Quit and ToViewMode are handled here; navigation goes to the page
        manager.
        """
        if transition.kind is TransitionKind.QUIT:
            self.running = Running.DONE
            return MessageResponse.CONSUMED
        if transition.kind is TransitionKind.TO_VIEW_MODE:
            self.mode = Mode.VIEW
            return MessageResponse.CONSUMED

        try:
            return await self.page_manager.transition(transition)
        except Exception as e:
            logger.warning("transition_failed", transition=transition.kind.value, error=str(e))
            self.show_error(str(e))
            return MessageResponse.CONSUMED

    async def check_for_update(self, lookup: Callable[[str], str | None] | None = None) -> None:
        """Look for a newer release off the loop thread and redraw if found."""
        self.update_to = await asyncio.to_thread(lookup or find_update, __version__)
        if self.update_to:
            logger.info("update_available", current=__version__, latest=self.update_to)
            await self._tx.send(TICK)

    def show_error(self, message: str) -> None:
        """Open the app-level alert with `message`."""
        self.alert.initialise(message)

    def _header(self) -> Text:
        header = Text(TITLE, style=self._styles.title)
        if self.update_to:
            header.append(f" v{__version__}", style=self._styles.negative_highlight)
            header.append(" > ")
            header.append(f"v{self.update_to}", style=self._styles.positive_highlight)
        else:
            header.append(f" v{__version__}", style=self._styles.muted)
        if self._endpoint:
            header.append(f"  {self._endpoint}", style=self._styles.muted)
        return header

    def draw(self) -> RenderableType:
        parts: list[RenderableType] = [self._header()]
        if self.mode is Mode.TEXT_INPUT:
            parts.append(self.command_input.draw())
        parts.append(Rule(style=self._styles.muted))
        if (body := self.page_manager.draw()) is not None:
            parts.append(body)
        if (page_help := self.page_manager.get_help()) is not None:
            parts.append(page_help.draw())
        if (alert := self.alert.draw()) is not None:
            parts.append(alert)
        parts.append(Text(FOOTER, style=self._styles.footer))
        return Group(*parts)
