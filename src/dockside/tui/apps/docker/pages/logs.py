"""Logs page: follows one container's output.

The stream runs in a background task that appends each line to the page's
buffer and sends a Tick so the frame is redrawn. While auto-scroll is on
the view sticks to the newest line; any manual scroll turns it off and
Space turns it back on.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog
from rich.console import Group
from rich.text import Text

from dockside.integrations.docker import LogStreamOptions
from dockside.tui.apps.docker.context import AppContext
from dockside.tui.base import Page
from dockside.tui.components.help import PageHelp
from dockside.tui.events import TICK, Key, KeyCode, MessageResponse, Transition, send_transition
from dockside.tui.tasks import spawn
from dockside.tui.theme import Styles

if TYPE_CHECKING:
    from rich.console import RenderableType

    from dockside.core.config import Config
    from dockside.integrations.docker import DockerClient, DockerContainer
    from dockside.tui.events import Message, Sender

logger = structlog.get_logger()

NAME = "Logs"

ALL_KEY = Key.char("a")
AUTO_SCROLL_KEY = Key.char(" ")
TOP_KEY = Key.char("g")
BOTTOM_KEY = Key.char("G")
UP_KEYS = frozenset({Key.UP, Key.char("k")})
DOWN_KEYS = frozenset({Key.DOWN, Key.char("j")})

PAGE_SIZE = 20
VISIBLE_LINES = 40


class LogsPage(Page):
    def __init__(self, client: DockerClient, tx: Sender[Message], config: Config) -> None:
        self._client = client
        self._tx = tx
        self._styles = Styles(config.theme)
        self.container: DockerContainer | None = None
        self.then: Transition | None = None
        self.options = LogStreamOptions()
        self.lines: list[str] = []
        self.position = 0
        self.auto_scroll = True
        self._task: asyncio.Task[None] | None = None
        self._help = self._build_help()

    # =========================================================================
    # Streaming
    # =========================================================================

    def start_stream(self) -> None:
        """Start following the container's output in the background."""
        if self.container is None:
            raise ValueError("Unable to stream logs without a container")
        self.auto_scroll = True
        self._help = self._build_help()
        self._task = spawn(self._stream(self.container.id), name=f"logs-{self.container.short_id}")

    async def _stream(self, container_id: str) -> None:
        async for line in self._client.stream_logs(container_id, self.options):
            self.lines.append(line)
            await self._tx.send(TICK)
        logger.debug("log_stream_ended", container=container_id)

    def abort(self) -> None:
        """Cancel the stream and drop the buffer."""
        if self._task is not None:
            self._task.cancel()
        self._task = None
        self.lines = []
        self.position = 0

    # =========================================================================
    # Scrolling
    # =========================================================================

    def _set_auto_scroll(self, enabled: bool) -> None:
        if self.auto_scroll == enabled:
            return
        self.auto_scroll = enabled
        self._help = self._build_help()

    def scroll_down(self, amount: int) -> None:
        if not self.lines:
            self.position = 0
            return
        self.position = min(self.position + amount, len(self.lines) - 1)
        self._set_auto_scroll(False)

    def scroll_up(self, amount: int) -> None:
        self.position = max(self.position - amount, 0)
        self._set_auto_scroll(False)

    # =========================================================================
    # Page
    # =========================================================================

    async def initialise(self, cx: AppContext) -> None:
        if cx.docker_container is None:
            raise ValueError("No docker container to show logs for")
        self.container = cx.docker_container
        self.then = cx.then
        self.lines = []
        self.position = 0
        self.start_stream()

    def _return_transition(self) -> Transition:
        if self.then is not None:
            return self.then
        return Transition.to_container_page(AppContext(docker_container=self.container))

    async def update(self, key: Key) -> MessageResponse:
        response = MessageResponse.CONSUMED
        if key.code is KeyCode.ESC:
            await send_transition(self._tx, self._return_transition())
        elif key == TOP_KEY:
            self.position = 0
            self._set_auto_scroll(False)
        elif key == BOTTOM_KEY:
            self.position = max(len(self.lines) - 1, 0)
        elif key in DOWN_KEYS:
            self.scroll_down(1)
        elif key.code is KeyCode.PAGE_DOWN:
            self.scroll_down(PAGE_SIZE)
        elif key in UP_KEYS:
            self.scroll_up(1)
        elif key.code is KeyCode.PAGE_UP:
            self.scroll_up(PAGE_SIZE)
        elif key == AUTO_SCROLL_KEY:
            self._set_auto_scroll(True)
        elif key == ALL_KEY:
            self.abort()
            self.options = self.options.model_copy(update={"all": True})
            self.start_stream()
        else:
            response = MessageResponse.NOT_CONSUMED

        if self.auto_scroll:
            self.position = max(len(self.lines) - 1, 0)
        return response

    async def close(self) -> None:
        self.abort()
        self.container = None

    def _build_help(self) -> PageHelp:
        name = self.container.get_name() if self.container else ""
        builder = (
            PageHelp.builder(f"{NAME} ({name})")
            .with_styles(self._styles)
            .add_input(Key.ESC, "back")
            .add_input(TOP_KEY, "top")
            .add_input(BOTTOM_KEY, "bottom")
            .add_input(ALL_KEY, "<all>")
        )
        if not self.auto_scroll:
            builder.add_input(AUTO_SCROLL_KEY, "auto-scroll")
        return builder.build()

    def get_help(self) -> PageHelp:
        return self._help

    def draw(self) -> RenderableType:
        if not self.lines:
            return Text("Waiting for output...", style=self._styles.muted)
        end = self.position + 1
        start = max(end - VISIBLE_LINES, 0)
        rendered: list[Text] = []
        for idx in range(start, end):
            line = Text.from_ansi(self.lines[idx])
            if not self.auto_scroll and idx == self.position:
                line = Text("> ") + line
            rendered.append(line)
        return Group(*rendered)
