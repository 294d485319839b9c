"""Navigation and lifecycle intents.

Usage:
    from dockside.tui.events.transition import Transition, send_transition

    await send_transition(sender, Transition.to_image_page(AppContext()))
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from dockside.tui.events.message import TransitionMessage

if TYPE_CHECKING:
    from dockside.tui.apps.docker.context import AppContext
    from dockside.tui.events.channel import Sender
    from dockside.tui.events.message import Message


class TransitionKind(Enum):
    """What a transition asks for."""

    QUIT = "quit"
    TO_NEW_TERMINAL = "to_new_terminal"
    TO_VIEW_MODE = "to_view_mode"
    TO_CONTAINER_PAGE = "to_container_page"
    TO_IMAGE_PAGE = "to_image_page"
    TO_VOLUME_PAGE = "to_volume_page"
    TO_NETWORK_PAGE = "to_network_page"
    TO_LOG_PAGE = "to_log_page"
    TO_ATTACH = "to_attach"
    TO_DESCRIBE_CONTAINER_PAGE = "to_describe_container_page"


# Kinds that carry an AppContext and target a page
NAVIGATION_KINDS = frozenset({
    TransitionKind.TO_CONTAINER_PAGE,
    TransitionKind.TO_IMAGE_PAGE,
    TransitionKind.TO_VOLUME_PAGE,
    TransitionKind.TO_NETWORK_PAGE,
    TransitionKind.TO_LOG_PAGE,
    TransitionKind.TO_ATTACH,
    TransitionKind.TO_DESCRIBE_CONTAINER_PAGE,
})


@dataclass(frozen=True)
class Transition:
    """A navigation or lifecycle intent.

    Attributes:
        kind: What is being asked for.
        context: The hand-off record for navigation kinds, None otherwise.
    """

    kind: TransitionKind
    context: AppContext | None = None

    def __post_init__(self) -> None:
        if self.kind in NAVIGATION_KINDS and self.context is None:
            raise ValueError(f"{self.kind.value} requires an AppContext")
        if self.kind not in NAVIGATION_KINDS and self.context is not None:
            raise ValueError(f"{self.kind.value} does not take an AppContext")

    @property
    def is_navigation(self) -> bool:
        return self.kind in NAVIGATION_KINDS

    @classmethod
    def quit(cls) -> Transition:
        return cls(TransitionKind.QUIT)

    @classmethod
    def to_new_terminal(cls) -> Transition:
        return cls(TransitionKind.TO_NEW_TERMINAL)

    @classmethod
    def to_view_mode(cls) -> Transition:
        return cls(TransitionKind.TO_VIEW_MODE)

    @classmethod
    def to_container_page(cls, cx: AppContext) -> Transition:
        return cls(TransitionKind.TO_CONTAINER_PAGE, cx)

    @classmethod
    def to_image_page(cls, cx: AppContext) -> Transition:
        return cls(TransitionKind.TO_IMAGE_PAGE, cx)

    @classmethod
    def to_volume_page(cls, cx: AppContext) -> Transition:
        return cls(TransitionKind.TO_VOLUME_PAGE, cx)

    @classmethod
    def to_network_page(cls, cx: AppContext) -> Transition:
        return cls(TransitionKind.TO_NETWORK_PAGE, cx)

    @classmethod
    def to_log_page(cls, cx: AppContext) -> Transition:
        return cls(TransitionKind.TO_LOG_PAGE, cx)

    @classmethod
    def to_attach(cls, cx: AppContext) -> Transition:
        return cls(TransitionKind.TO_ATTACH, cx)

    @classmethod
    def to_describe_container_page(cls, cx: AppContext) -> Transition:
        return cls(TransitionKind.TO_DESCRIBE_CONTAINER_PAGE, cx)


async def send_transition(sender: Sender[Message], transition: Transition) -> None:
    """Enqueue a transition on the event loop's inbound sender."""
    await sender.send(TransitionMessage(transition))
