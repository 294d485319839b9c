"""Describe page: the sections of any describable entity, as a tree."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from rich.tree import Tree

from dockside.integrations.docker import DockerContainer, DockerImage, DockerNetwork, DockerVolume
from dockside.tui.apps.docker.context import AppContext
from dockside.tui.base import Page
from dockside.tui.components.help import PageHelp
from dockside.tui.events import Key, KeyCode, MessageResponse, Transition, send_transition
from dockside.tui.theme import Styles

if TYPE_CHECKING:
    from rich.console import RenderableType

    from dockside.core.config import Config
    from dockside.integrations.docker import DescribeSection, Describable, DockerClient
    from dockside.tui.events import Message, Sender

NAME = "Describe"

UP_KEYS = frozenset({Key.UP, Key.char("k")})
DOWN_KEYS = frozenset({Key.DOWN, Key.char("j")})


def default_return(describable: Describable) -> Transition:
    """Go back to the list page for the entity's kind, with it selected."""
    if isinstance(describable, DockerImage):
        return Transition.to_image_page(AppContext(docker_image=describable))
    if isinstance(describable, DockerVolume):
        return Transition.to_volume_page(AppContext(docker_volume=describable))
    if isinstance(describable, DockerNetwork):
        return Transition.to_network_page(AppContext(docker_network=describable))
    if isinstance(describable, DockerContainer):
        return Transition.to_container_page(AppContext(docker_container=describable))
    return Transition.to_container_page(AppContext(describable=describable))


class DescribePage(Page):
    def __init__(self, client: DockerClient, tx: Sender[Message], config: Config) -> None:
        self._tx = tx
        self._styles = Styles(config.theme)
        self.describable: Describable | None = None
        self.sections: list[DescribeSection] = []
        self.then: Transition | None = None
        self.scroll = 0
        self._help = self._build_help(NAME)

    def _build_help(self, name: str) -> PageHelp:
        return (
            PageHelp.builder(name)
            .with_styles(self._styles)
            .add_input(Key.ESC, "back")
            .add_input("j", "down")
            .add_input("k", "up")
            .build()
        )

    async def initialise(self, cx: AppContext) -> None:
        if cx.describable is None:
            raise ValueError("Nothing to describe")
        self.describable = cx.describable
        self.sections = cx.describable.describe()
        self.then = cx.then
        self.scroll = 0
        self._help = self._build_help(f"{NAME} ({cx.describable.get_name()})")

    @property
    def line_count(self) -> int:
        return sum(len(section.entries) + 1 for section in self.sections)

    async def update(self, key: Key) -> MessageResponse:
        if key in UP_KEYS:
            self.scroll = max(self.scroll - 1, 0)
        elif key in DOWN_KEYS:
            self.scroll = min(self.scroll + 1, max(self.line_count - 1, 0))
        elif key.code is KeyCode.ESC:
            if self.then is not None:
                transition = self.then
            elif self.describable is not None:
                transition = default_return(self.describable)
            else:
                transition = Transition.to_container_page(AppContext())
            await send_transition(self._tx, transition)
        else:
            return MessageResponse.NOT_CONSUMED
        return MessageResponse.CONSUMED

    def get_help(self) -> PageHelp:
        return self._help

    def draw(self) -> RenderableType:
        title = self.describable.get_name() if self.describable else NAME
        tree = Tree(title, style=self._styles.title, guide_style=self._styles.muted)
        remaining = self.scroll
        for section in self.sections:
            # Scrolling drops whole lines from the top, section titles included
            if remaining > len(section.entries):
                remaining -= len(section.entries) + 1
                continue
            entries = section.entries[max(remaining - 1, 0) :] if remaining else section.entries
            remaining = 0
            branch = tree.add(section.title, style="bold")
            for key, value in entries:
                branch.add(Text.assemble((f"{key}: ", "bold"), value), style="default")
        return tree
