"""Volumes page."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dockside.integrations.docker import DockerVolume
from dockside.tui.apps.docker.callbacks import DeleteVolume
from dockside.tui.apps.docker.context import AppContext
from dockside.tui.apps.docker.pages.base import DELETE_KEY, ListPage
from dockside.tui.apps.docker.sorting import VOLUME_SORT_KEYS, VolumeSortField
from dockside.tui.apps.docker.state import ModalType
from dockside.tui.components.modal import ConfirmationModal
from dockside.tui.events import Key, MessageResponse, Transition

if TYPE_CHECKING:
    from rich.console import RenderableType

    from dockside.integrations.docker import DockerError
    from dockside.tui.components.help import PageHelp, PageHelpBuilder

FORCE_DELETE_MESSAGE = (
    "An error occurred deleting this volume; would you like to try to force remove?"
)


class VolumesPage(ListPage[DockerVolume, VolumeSortField]):
    NAME = "Volumes"
    ENTITY = DockerVolume
    DEFAULT_SORT = VolumeSortField.NAME
    SORT_KEYS = VOLUME_SORT_KEYS
    SORT_BINDINGS = {
        Key.char("N"): VolumeSortField.NAME,
        Key.char("C"): VolumeSortField.CREATED,
        Key.char("D"): VolumeSortField.DRIVER,
    }
    COLUMNS = [
        ("Name", VolumeSortField.NAME),
        ("Driver", VolumeSortField.DRIVER),
        ("Created", VolumeSortField.CREATED),
        ("Mountpoint", None),
    ]

    def build_help(self, builder: PageHelpBuilder) -> PageHelp:
        return (
            builder.add_input(DELETE_KEY, "delete")
            .add_input("d", "describe")
            .add_input("g", "top")
            .add_input("G", "bottom")
            .add_input("/", "filter")
            .build()
        )

    async def fetch(self) -> list[DockerVolume]:
        return await self._client.list_volumes()

    def return_transition(self, item: DockerVolume) -> Transition:
        return Transition.to_volume_page(AppContext(docker_volume=item))

    async def handle_key(self, key: Key) -> MessageResponse:
        if key != DELETE_KEY or (volume := self.selected_item) is None:
            return MessageResponse.NOT_CONSUMED
        modal: ConfirmationModal[ModalType] = ConfirmationModal(
            "Delete", ModalType.DELETE_VOLUME, self._styles
        )
        modal.initialise(
            f"Are you sure you wish to delete volume {volume.name}?",
            DeleteVolume(self._client, volume.name, False, self._tx),
        )
        self.modal = modal
        return MessageResponse.CONSUMED

    async def on_modal_error(self, modal: ConfirmationModal[ModalType], error: DockerError) -> None:
        if modal.discriminator is not ModalType.DELETE_VOLUME or not isinstance(
            modal.callback, DeleteVolume
        ):
            await super().on_modal_error(modal, error)
            return
        retry: ConfirmationModal[ModalType] = ConfirmationModal(
            "Force Delete", ModalType.FORCE_DELETE_VOLUME, self._styles
        )
        retry.initialise(
            FORCE_DELETE_MESSAGE, DeleteVolume(self._client, modal.callback.name, True, self._tx)
        )
        self.modal = retry

    def row(self, item: DockerVolume) -> list[RenderableType]:
        return [item.name, item.driver, item.created_at or "Unknown", item.mountpoint]
