"""Shared behaviour for the entity list pages.

A list page owns the entities of one kind, a selection index into the
filtered view, a sort state, a table filter, and at most one modal. Keys
are offered, in order, to the open modal, the filter, the page-specific
bindings and the shared navigation bindings. The list is refreshed after
every key once no modal is open, which includes the periodic NULL key the
dashboard sends on each tick.
"""

from __future__ import annotations

from abc import abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

import structlog
from rich.console import Group
from rich.table import Table
from rich.text import Text

from dockside.integrations.docker import DockerError
from dockside.tui.apps.docker.context import AppContext
from dockside.tui.apps.docker.sorting import SortState, sort_entities
from dockside.tui.base import Page
from dockside.tui.components.help import PageHelp
from dockside.tui.components.table_filter import TableFilter
from dockside.tui.events import Key, KeyCode, MessageResponse, Transition, send_transition
from dockside.tui.theme import Colors, Styles

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import RenderableType

    from dockside.core.config import Config
    from dockside.integrations.docker import DockerClient
    from dockside.integrations.docker.models import Describable
    from dockside.tui.apps.docker.state import ModalType
    from dockside.tui.components.modal import AlertModal, ConfirmationModal
    from dockside.tui.events import Message, Sender

logger = structlog.get_logger()

E = TypeVar("E", bound="Describable")
F = TypeVar("F", bound=Enum)

PAGE_SIZE = 10
MAX_VISIBLE_ROWS = 30

UP_KEYS = frozenset({Key.UP, Key.char("k")})
DOWN_KEYS = frozenset({Key.DOWN, Key.char("j")})
TOP_KEY = Key.char("g")
BOTTOM_KEY = Key.char("G")
DESCRIBE_KEY = Key.char("d")
DELETE_KEY = Key.ctrl("d")


class ListPage(Page, Generic[E, F]):
    """Base class for the container, image, volume and network pages.

    Subclasses should define:
    - NAME, ENTITY, DEFAULT_SORT, SORT_KEYS, SORT_BINDINGS, COLUMNS
    - fetch(): List the entities from the engine
    - row(): Cells for one entity
    - return_transition(): Where a sub-page goes back to for an entity
    - handle_key(): Page-specific bindings
    """

    NAME: ClassVar[str]
    ENTITY: ClassVar[type[Any]]
    DEFAULT_SORT: ClassVar[Enum]
    SORT_KEYS: ClassVar[dict[Any, Callable[[Any], Any]]]
    SORT_BINDINGS: ClassVar[dict[Key, Any]]
    COLUMNS: ClassVar[list[tuple[str, Enum | None]]]

    def __init__(self, client: DockerClient, tx: Sender[Message], config: Config) -> None:
        self._client = client
        self._tx = tx
        self._config = config
        self._styles = Styles(config.theme)
        self.items: list[E] = []
        self.selected: int | None = None
        self.filter = TableFilter()
        self.sort_state: SortState[F] = SortState(self.DEFAULT_SORT)  # type: ignore[arg-type]
        self.modal: ConfirmationModal[ModalType] | AlertModal[ModalType] | None = None
        self._help = self.build_help(PageHelp.builder(self.NAME).with_styles(self._styles))

    # =========================================================================
    # Subclass hooks
    # =========================================================================

    @abstractmethod
    async def fetch(self) -> list[E]:
        """List this page's entities from the engine."""

    @abstractmethod
    def row(self, item: E) -> list[RenderableType]:
        """Return the table cells for one entity."""

    @abstractmethod
    def return_transition(self, item: E) -> Transition:
        """Transition back to this page with `item` selected."""

    async def handle_key(self, key: Key) -> MessageResponse:
        """Page-specific bindings; return NOT_CONSUMED to fall through."""
        return MessageResponse.NOT_CONSUMED

    def build_help(self, builder: Any) -> PageHelp:
        """Add page bindings to the help builder and build it."""
        return builder.build()

    async def on_modal_error(self, modal: ConfirmationModal[ModalType], error: DockerError) -> None:
        """React to a failed confirmation callback.

        The default closes the modal and re-raises so the dashboard shows
        an alert.
        """
        modal.reset()
        raise error

    # =========================================================================
    # Selection
    # =========================================================================

    @property
    def visible(self) -> list[E]:
        """Items passing the filter, in sort order."""
        if not self.filter.is_active:
            return self.items
        return [item for item in self.items if self.filter.matches(item.get_name(), item.get_id())]

    @property
    def selected_item(self) -> E | None:
        visible = self.visible
        if self.selected is None or not 0 <= self.selected < len(visible):
            return None
        return visible[self.selected]

    def scroll_down(self, amount: int = 1) -> None:
        if self.selected is None:
            self.selected = 0
            return
        if self.visible:
            self.selected = min(self.selected + amount, len(self.visible) - 1)

    def scroll_up(self, amount: int = 1) -> None:
        if self.selected is None:
            self.selected = 0
            return
        self.selected = max(self.selected - amount, 0)

    def select_id(self, entity_id: str) -> bool:
        """Select the visible row whose id matches; return whether found."""
        for idx, item in enumerate(self.visible):
            if item.get_id() == entity_id:
                self.selected = idx
                return True
        return False

    def _clamp_selection(self) -> None:
        count = len(self.visible)
        if count == 0:
            self.selected = None
        elif self.selected is None:
            self.selected = 0
        elif self.selected >= count:
            self.selected = count - 1

    # =========================================================================
    # Page
    # =========================================================================

    async def refresh(self) -> None:
        """Reload and re-sort the entities, keeping the selection in range."""
        self.items = sort_entities(await self.fetch(), self.sort_state, self.SORT_KEYS)
        self._clamp_selection()

    def sort(self) -> None:
        self.items = sort_entities(self.items, self.sort_state, self.SORT_KEYS)

    async def initialise(self, cx: AppContext) -> None:
        self.selected = 0
        await self.refresh()
        target = cx.selected_id(self.ENTITY)
        if target is not None and self.select_id(target):
            return
        if cx.list_idx is not None and self.visible:
            self.selected = min(cx.list_idx, len(self.visible) - 1)

    async def update(self, key: Key) -> MessageResponse:
        if self.modal is not None and self.modal.is_open:
            # An open modal swallows every key, whatever it did with it
            await self._update_modal(key)
            if not self.modal.is_open:
                self.modal = None
                await self.refresh()
            return MessageResponse.CONSUMED

        response = self.filter.handle_input(key)
        if response is None:
            response = await self.handle_key(key)
        if not response.is_consumed:
            response = await self._handle_common_key(key)

        if self.modal is None or not self.modal.is_open:
            await self.refresh()
        return response

    async def _update_modal(self, key: Key) -> None:
        modal = self.modal
        if modal is None:
            return
        try:
            await modal.update(key)
        except DockerError as e:
            logger.warning(
                "modal_callback_failed",
                page=self.NAME,
                modal=modal.discriminator.value,
                error=str(e),
            )
            await self.on_modal_error(modal, e)  # type: ignore[arg-type]

    async def _handle_common_key(self, key: Key) -> MessageResponse:
        if key in UP_KEYS:
            self.scroll_up()
        elif key in DOWN_KEYS:
            self.scroll_down()
        elif key.code is KeyCode.PAGE_UP:
            self.scroll_up(PAGE_SIZE)
        elif key.code is KeyCode.PAGE_DOWN:
            self.scroll_down(PAGE_SIZE)
        elif key == TOP_KEY:
            self.selected = 0
        elif key == BOTTOM_KEY:
            self.selected = max(len(self.visible) - 1, 0)
        elif key in self.SORT_BINDINGS:
            self.sort_state.toggle_or_set(self.SORT_BINDINGS[key])
            self.sort()
        elif key == DESCRIBE_KEY:
            return await self.describe_selected()
        else:
            return MessageResponse.NOT_CONSUMED
        return MessageResponse.CONSUMED

    async def describe_selected(self) -> MessageResponse:
        item = self.selected_item
        if item is not None:
            cx = AppContext(describable=item, then=self.return_transition(item))
            await send_transition(self._tx, Transition.to_describe_container_page(cx))
        return MessageResponse.from_bool(item is not None)

    def get_help(self) -> PageHelp:
        return self._help

    # =========================================================================
    # Rendering
    # =========================================================================

    def draw(self) -> RenderableType:
        table = Table(expand=True, box=None, header_style=self._styles.title, pad_edge=False)
        for title, field in self.COLUMNS:
            suffix = self.sort_state.indicator(field) if field is not None else ""  # type: ignore[arg-type]
            table.add_column(f"{title}{suffix}", no_wrap=True, overflow="ellipsis")

        visible = self.visible
        start = 0
        if self.selected is not None and self.selected >= MAX_VISIBLE_ROWS:
            start = self.selected - MAX_VISIBLE_ROWS + 1
        for idx, item in enumerate(visible[start : start + MAX_VISIBLE_ROWS], start=start):
            table.add_row(*self.row(item), style=Colors.SELECTED if idx == self.selected else None)

        parts: list[RenderableType] = []
        if (modal_view := self.modal.draw() if self.modal else None) is not None:
            parts.append(modal_view)
        if (filter_view := self.filter.draw()) is not None:
            parts.append(filter_view)
        parts.append(table)
        if not visible:
            parts.append(Text(f"No {self.NAME.lower()} found", style=self._styles.muted))
        return Group(*parts)
