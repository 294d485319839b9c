"""Active page ownership and navigation.

The page manager owns exactly one page at a time. Navigating closes the
old page, builds and initialises the new one, and only then swaps it in,
so a page that fails to initialise never becomes current.

Usage:
    manager = await PageManager.create(
        CurrentPage.CONTAINERS, AppContext(), client, tx, config
    )
    await manager.transition(Transition.to_image_page(AppContext()))
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from dockside.tui.apps.docker.pages import (
    AttachPage,
    ContainersPage,
    DescribePage,
    ImagesPage,
    LogsPage,
    NetworksPage,
    VolumesPage,
)
from dockside.tui.apps.docker.state import CurrentPage
from dockside.tui.events import MessageResponse, TransitionKind

if TYPE_CHECKING:
    from collections.abc import Callable
    from contextlib import AbstractContextManager

    from rich.console import RenderableType

    from dockside.core.config import Config
    from dockside.integrations.docker import DockerClient
    from dockside.tui.apps.docker.context import AppContext
    from dockside.tui.base import Page
    from dockside.tui.components.help import PageHelp
    from dockside.tui.events import Key, Message, Sender, Transition

logger = structlog.get_logger()

PAGE_FOR_TRANSITION: dict[TransitionKind, CurrentPage] = {
    TransitionKind.TO_CONTAINER_PAGE: CurrentPage.CONTAINERS,
    TransitionKind.TO_IMAGE_PAGE: CurrentPage.IMAGES,
    TransitionKind.TO_VOLUME_PAGE: CurrentPage.VOLUMES,
    TransitionKind.TO_NETWORK_PAGE: CurrentPage.NETWORK,
    TransitionKind.TO_LOG_PAGE: CurrentPage.LOGS,
    TransitionKind.TO_ATTACH: CurrentPage.ATTACH,
    TransitionKind.TO_DESCRIBE_CONTAINER_PAGE: CurrentPage.DESCRIBE_CONTAINER,
}

PAGE_CLASSES: dict[CurrentPage, type[Any]] = {
    CurrentPage.CONTAINERS: ContainersPage,
    CurrentPage.IMAGES: ImagesPage,
    CurrentPage.VOLUMES: VolumesPage,
    CurrentPage.NETWORK: NetworksPage,
    CurrentPage.LOGS: LogsPage,
    CurrentPage.ATTACH: AttachPage,
    CurrentPage.DESCRIBE_CONTAINER: DescribePage,
}


class PageManager:
    """Holds the current page and swaps it on navigation transitions."""

    def __init__(
        self,
        client: DockerClient,
        tx: Sender[Message],
        config: Config,
        suspend: Callable[[], AbstractContextManager[object]] | None = None,
    ) -> None:
        self._client = client
        self._tx = tx
        self._config = config
        self._suspend = suspend
        self.current: CurrentPage | None = None
        self.page: Page | None = None

    @classmethod
    async def create(
        cls,
        page: CurrentPage,
        cx: AppContext,
        client: DockerClient,
        tx: Sender[Message],
        config: Config,
        suspend: Callable[[], AbstractContextManager[object]] | None = None,
    ) -> PageManager:
        """Build a manager showing `page`, already initialised with `cx`."""
        manager = cls(client, tx, config, suspend)
        await manager.set_current_page(page, cx)
        return manager

    def _build(self, page: CurrentPage) -> Page:
        page_class = PAGE_CLASSES[page]
        if page is CurrentPage.ATTACH:
            return page_class(self._client, self._tx, self._config, suspend=self._suspend)
        return page_class(self._client, self._tx, self._config)

    async def set_current_page(self, next_page: CurrentPage, cx: AppContext) -> None:
        """Swap to `next_page`, unless it is already showing.

        Raises:
            Exception: Whatever the new page's `initialise()` raised; the
                previous page object stays current (already closed).
        """
        if next_page is self.current:
            return

        if self.page is not None:
            await self.page.close()

        page = self._build(next_page)
        await page.initialise(cx)

        logger.debug(
            "page_changed",
            previous=self.current.value if self.current else None,
            current=next_page.value,
        )
        self.page = page
        self.current = next_page

    async def transition(self, transition: Transition) -> MessageResponse:
        if not transition.is_navigation or transition.context is None:
            return MessageResponse.NOT_CONSUMED
        await self.set_current_page(PAGE_FOR_TRANSITION[transition.kind], transition.context)
        return MessageResponse.CONSUMED

    async def update(self, key: Key) -> MessageResponse:
        if self.page is None:
            return MessageResponse.NOT_CONSUMED
        return await self.page.update(key)

    def get_help(self) -> PageHelp | None:
        return self.page.get_help() if self.page else None

    def draw(self) -> RenderableType | None:
        return self.page.draw() if self.page else None

    async def close(self) -> None:
        if self.page is not None:
            await self.page.close()
