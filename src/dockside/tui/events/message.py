"""Messages carried through the event loop.

Every occurrence the dashboard reacts to (a timer tick, a key press, a
navigation intent, a failure from background work) travels through one
ordered channel as a `Message`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dockside.tui.events.key import Key
    from dockside.tui.events.transition import Transition


@dataclass(frozen=True)
class TickMessage:
    """Periodic heartbeat; re-render and re-check state."""


@dataclass(frozen=True)
class InputMessage:
    """A raw key press."""

    key: Key


@dataclass(frozen=True)
class TransitionMessage:
    """A navigation or lifecycle intent."""

    transition: Transition


@dataclass(frozen=True)
class ErrorMessage:
    """A background failure to surface to the user."""

    error: str


Message = TickMessage | InputMessage | TransitionMessage | ErrorMessage

TICK = TickMessage()


class MessageResponse(Enum):
    """Result of offering a key to a handler in the responsibility chain."""

    CONSUMED = "consumed"
    NOT_CONSUMED = "not_consumed"

    @property
    def is_consumed(self) -> bool:
        return self is MessageResponse.CONSUMED

    @classmethod
    def from_bool(cls, consumed: bool) -> MessageResponse:
        return cls.CONSUMED if consumed else cls.NOT_CONSUMED
