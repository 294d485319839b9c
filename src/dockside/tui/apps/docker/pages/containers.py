"""Containers page: list, start, stop, delete, and jump to logs or a shell."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from rich.text import Text

from dockside.integrations.docker import DockerContainer
from dockside.tui.apps.docker.callbacks import DeleteAllContainers, DeleteContainer
from dockside.tui.apps.docker.context import AppContext
from dockside.tui.apps.docker.pages.base import DELETE_KEY, ListPage
from dockside.tui.apps.docker.sorting import CONTAINER_SORT_KEYS, ContainerSortField
from dockside.tui.apps.docker.state import ModalType
from dockside.tui.components.modal import ConfirmationModal
from dockside.tui.events import TICK, ErrorMessage, Key, MessageResponse, Transition, send_transition
from dockside.tui.tasks import spawn

if TYPE_CHECKING:
    from rich.console import RenderableType

    from dockside.core.config import Config
    from dockside.integrations.docker import DockerClient
    from dockside.tui.components.help import PageHelp, PageHelpBuilder
    from dockside.tui.events import Message, Sender

logger = structlog.get_logger()

ATTACH_KEY = Key.char("a")
LOGS_KEY = Key.char("l")
START_KEY = Key.char("r")
STOP_KEY = Key.char("s")
DELETE_ALL_KEY = Key.alt("d")

STOPPING_STATUS = "stopping"


class ContainersPage(ListPage[DockerContainer, ContainerSortField]):
    """All containers, running or not.

    Stopping a container can take the engine several seconds, so it runs
    detached. Until the stop task reports back, the container's id sits in
    `stopping` and its row shows "stopping".
    """

    NAME = "Containers"
    ENTITY = DockerContainer
    DEFAULT_SORT = ContainerSortField.NAME
    SORT_KEYS = CONTAINER_SORT_KEYS
    SORT_BINDINGS = {
        Key.char("N"): ContainerSortField.NAME,
        Key.char("I"): ContainerSortField.IMAGE,
        Key.char("S"): ContainerSortField.STATUS,
        Key.char("C"): ContainerSortField.CREATED,
        Key.char("P"): ContainerSortField.PORTS,
    }
    COLUMNS = [
        ("Id", None),
        ("Name", ContainerSortField.NAME),
        ("Image", ContainerSortField.IMAGE),
        ("Status", ContainerSortField.STATUS),
        ("Created", ContainerSortField.CREATED),
        ("Ports", ContainerSortField.PORTS),
    ]

    def __init__(self, client: DockerClient, tx: Sender[Message], config: Config) -> None:
        super().__init__(client, tx, config)
        self.stopping: set[str] = set()

    def build_help(self, builder: PageHelpBuilder) -> PageHelp:
        return (
            builder.add_input(ATTACH_KEY, "exec")
            .add_input(DELETE_KEY, "delete")
            .add_input(DELETE_ALL_KEY, "delete all")
            .add_input(START_KEY, "run")
            .add_input(STOP_KEY, "stop")
            .add_input(LOGS_KEY, "logs")
            .add_input("d", "describe")
            .add_input("g", "top")
            .add_input("G", "bottom")
            .add_input("/", "filter")
            .build()
        )

    async def fetch(self) -> list[DockerContainer]:
        return await self._client.list_containers()

    def return_transition(self, item: DockerContainer) -> Transition:
        return Transition.to_container_page(AppContext(docker_container=item))

    def _context(self, container: DockerContainer) -> AppContext:
        return AppContext(
            docker_container=container,
            describable=container,
            then=self.return_transition(container),
        )

    async def handle_key(self, key: Key) -> MessageResponse:
        if key == DELETE_ALL_KEY:
            return self.confirm_delete_all()

        container = self.selected_item
        if container is None:
            return MessageResponse.NOT_CONSUMED

        if key == DELETE_KEY:
            self.confirm_delete(container)
        elif key == START_KEY:
            await self._client.start_container(container.id)
        elif key == STOP_KEY:
            self.stop(container)
        elif key == ATTACH_KEY:
            await send_transition(self._tx, Transition.to_attach(self._context(container)))
        elif key == LOGS_KEY:
            await send_transition(self._tx, Transition.to_log_page(self._context(container)))
        else:
            return MessageResponse.NOT_CONSUMED
        return MessageResponse.CONSUMED

    def confirm_delete(self, container: DockerContainer) -> None:
        message = (
            f"Are you sure you wish to delete container {container.get_name()} "
            f"(image = {container.image})?"
        )
        if container.running:
            message += " This container is currently running; this will result in a force deletion."
        modal: ConfirmationModal[ModalType] = ConfirmationModal(
            "Delete", ModalType.DELETE_CONTAINER, self._styles
        )
        modal.initialise(
            message, DeleteContainer(self._client, container.id, container.running, self._tx)
        )
        self.modal = modal

    def confirm_delete_all(self) -> MessageResponse:
        if not self.items:
            return MessageResponse.NOT_CONSUMED
        modal: ConfirmationModal[ModalType] = ConfirmationModal(
            "Delete All", ModalType.DELETE_ALL_CONTAINERS, self._styles
        )
        modal.initialise(
            f"Are you sure you wish to delete all {len(self.items)} containers? "
            "Running containers will be force deleted.",
            DeleteAllContainers(self._client, list(self.items), True, self._tx),
        )
        self.modal = modal
        return MessageResponse.CONSUMED

    def stop(self, container: DockerContainer) -> None:
        """Stop a container in the background."""
        if container.id in self.stopping:
            return
        self.stopping.add(container.id)
        spawn(self._stop(container), name=f"stop-{container.short_id}")

    async def _stop(self, container: DockerContainer) -> None:
        message: Message
        try:
            await self._client.stop_container(container.id)
        except Exception as e:
            logger.warning("container_stop_failed", container=container.id, error=str(e))
            message = ErrorMessage(f"Failed to stop {container.get_name()}: {e}")
        else:
            message = TICK
        finally:
            self.stopping.discard(container.id)
        await self._tx.send(message)

    def row(self, item: DockerContainer) -> list[RenderableType]:
        if item.id in self.stopping:
            status = Text(STOPPING_STATUS, style=self._styles.negative_highlight)
        elif item.running:
            status = Text(item.status, style=self._styles.success)
        else:
            status = Text(item.status)
        return [
            item.short_id,
            item.get_name(),
            item.image,
            status,
            item.created_display,
            item.ports_display,
        ]
