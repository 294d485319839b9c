"""Modal components for confirmations and alerts.

A modal is a small state machine, closed until `initialise()` opens it
with a message. While open, the owning page routes every key to the modal
before doing anything else.

Each modal carries a discriminator, an enum value saying why it was
opened, so a page can tell apart flows that share one modal type (for
example a plain delete and its force-delete retry).

Usage:
    from dockside.tui.components import ConfirmationModal

    modal = ConfirmationModal("Delete", ModalType.DELETE_IMAGE)
    modal.initialise("Are you sure?", DeleteImage(client, image.id, False, tx))

    # In the page's update():
    if modal.is_open:
        return await modal.update(key)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Generic, TypeVar

from rich.align import Align
from rich.panel import Panel
from rich.text import Text

from dockside.tui.base import Component
from dockside.tui.events import Key, KeyCode, MessageResponse
from dockside.tui.theme import Colors

if TYPE_CHECKING:
    from rich.console import RenderableType
    from rich.style import StyleType

    from dockside.tui.apps.docker.callbacks import Callback
    from dockside.tui.theme import Styles

D = TypeVar("D", bound=Enum)

ALERT_PROMPT = "Press any key to continue..."
CONFIRMATION_PROMPT = "(y)es / (n)o"

_CANCEL_KEYS = frozenset({Key.ESC, Key.char("n"), Key.char("N")})
_CONFIRM_KEYS = frozenset({Key.ENTER, Key.char("y"), Key.char("Y")})
_QUIT_KEYS = frozenset({Key.char("q"), Key.char("Q")})


@dataclass(frozen=True)
class ModalClosed:
    """The modal is hidden."""


@dataclass(frozen=True)
class ModalOpen:
    """The modal is showing `message`."""

    message: str


ModalState = ModalClosed | ModalOpen

CLOSED = ModalClosed()


class Modal(Component, Generic[D]):
    """Shared state handling for modals.

    Attributes:
        title: Title drawn on the modal border.
        discriminator: Why this modal was opened.
        state: Current open/closed state.
    """

    prompt = ""

    def __init__(self, title: str, discriminator: D, styles: Styles | None = None) -> None:
        self.title = title
        self.discriminator = discriminator
        self.state: ModalState = CLOSED
        self._styles = styles

    @property
    def is_open(self) -> bool:
        return isinstance(self.state, ModalOpen)

    @property
    def message(self) -> str | None:
        return self.state.message if isinstance(self.state, ModalOpen) else None

    def reset(self) -> None:
        """Close the modal."""
        self.state = CLOSED

    def _border_style(self) -> StyleType:
        return Colors.MODAL_BORDER

    def draw(self) -> RenderableType | None:
        if not isinstance(self.state, ModalOpen):
            return None
        body = Text(self.state.message, justify="center")
        body.append(f"\n\n{self.prompt}", style="bold")
        return Align.center(
            Panel(
                body,
                title=self.title,
                border_style=self._border_style(),
                width=min(80, max(40, len(self.state.message) + 6)),
                padding=(1, 2),
            )
        )


class ConfirmationModal(Modal[D]):
    """Yes/no dialog that runs a callback on confirmation.

    Keyboard handling while open:
    - Esc, n, N: close without running the callback
    - y, Y, Enter: run the callback, then close
    - q, Q: swallowed so the global quit key cannot fire mid-confirmation
    - anything else: not consumed
    """

    prompt = CONFIRMATION_PROMPT

    def __init__(self, title: str, discriminator: D, styles: Styles | None = None) -> None:
        super().__init__(title, discriminator, styles)
        self.callback: Callback | None = None

    def initialise(self, message: str, callback: Callback | None = None) -> None:
        """Open the modal with a message and the action to run on confirm."""
        self.state = ModalOpen(message)
        self.callback = callback

    def reset(self) -> None:
        super().reset()
        self.callback = None

    async def update(self, key: Key) -> MessageResponse:
        """Handle a key.

        Raises:
            Exception: Whatever the callback raised; the modal stays open so
                the caller can react, e.g. by offering a forced retry.
        """
        if not self.is_open:
            return MessageResponse.NOT_CONSUMED

        if key in _CANCEL_KEYS:
            self.reset()
            return MessageResponse.CONSUMED

        if key in _CONFIRM_KEYS:
            if self.callback is not None:
                await self.callback.call()
            self.reset()
            return MessageResponse.CONSUMED

        if key in _QUIT_KEYS:
            return MessageResponse.CONSUMED

        return MessageResponse.NOT_CONSUMED

    def _border_style(self) -> StyleType:
        return self._styles.help if self._styles else "red"


class AlertModal(Modal[D]):
    """Press-any-key dialog for surfacing errors."""

    prompt = ALERT_PROMPT

    def initialise(self, message: str) -> None:
        """Open the alert with a message."""
        self.state = ModalOpen(message)

    async def update(self, key: Key) -> MessageResponse:
        if not self.is_open:
            return MessageResponse.NOT_CONSUMED
        # Ticks arrive as NULL keys and must not dismiss the alert
        if key.code is not KeyCode.NULL:
            self.reset()
        return MessageResponse.CONSUMED

    def _border_style(self) -> StyleType:
        return self._styles.error if self._styles else "red"
