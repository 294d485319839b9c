"""Attach page: hands the terminal to an interactive shell in a container.

The page has nothing to draw. Initialising it releases the terminal, runs
the shell until it exits, then navigates back and asks the host to repaint
the screen the shell wrote over.
"""

from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING

import structlog
from rich.text import Text

from dockside.tui.apps.docker.context import AppContext
from dockside.tui.base import Page
from dockside.tui.components.help import PageHelp
from dockside.tui.events import Key, MessageResponse, Transition, send_transition

if TYPE_CHECKING:
    from collections.abc import Callable
    from contextlib import AbstractContextManager

    from dockside.core.config import Config
    from dockside.integrations.docker import DockerClient
    from dockside.tui.events import Message, Sender

logger = structlog.get_logger()

NAME = "Attach"


class AttachPage(Page):
    """Runs `config.default_exec` in the selected container.

    Args:
        client: Docker client.
        tx: Inbound event sender.
        config: Application config.
        suspend: Context manager factory that releases the terminal for the
            duration of the shell. Defaults to doing nothing.
    """

    def __init__(
        self,
        client: DockerClient,
        tx: Sender[Message],
        config: Config,
        suspend: Callable[[], AbstractContextManager[object]] | None = None,
    ) -> None:
        self._client = client
        self._tx = tx
        self._shell = config.default_exec
        self._suspend = suspend or contextlib.nullcontext
        self._help = PageHelp.builder(NAME).add_input(Key.ESC, "back").build()

    async def initialise(self, cx: AppContext) -> None:
        container = cx.docker_container
        if container is None:
            raise ValueError("No docker container to attach to")

        logger.info("attach_started", container=container.id, shell=self._shell)
        with self._suspend():
            await self._client.exec_shell(container.id, self._shell)
        logger.info("attach_finished", container=container.id)

        then = cx.then or Transition.to_container_page(AppContext(docker_container=container))
        await send_transition(self._tx, then)
        await send_transition(self._tx, Transition.to_new_terminal())

    async def update(self, key: Key) -> MessageResponse:
        return MessageResponse.NOT_CONSUMED

    def get_help(self) -> PageHelp:
        return self._help

    def draw(self) -> Text:
        return Text("Attaching...")
