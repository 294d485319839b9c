"""Networks page."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dockside.integrations.docker import DockerNetwork
from dockside.tui.apps.docker.callbacks import DeleteNetwork, EmptyCallback, PruneNetworks
from dockside.tui.apps.docker.context import AppContext
from dockside.tui.apps.docker.pages.base import DELETE_KEY, ListPage
from dockside.tui.apps.docker.sorting import NETWORK_SORT_KEYS, NetworkSortField
from dockside.tui.apps.docker.state import ModalType
from dockside.tui.components.modal import ConfirmationModal
from dockside.tui.events import Key, MessageResponse, Transition

if TYPE_CHECKING:
    from rich.console import RenderableType

    from dockside.integrations.docker import DockerError
    from dockside.tui.components.help import PageHelp, PageHelpBuilder

PRUNE_KEY = Key.ctrl("p")

FAILED_DELETE_MESSAGE = (
    "An error occurred deleting this network.  It is likely still in use.  Will not try again."
)


class NetworksPage(ListPage[DockerNetwork, NetworkSortField]):
    """Networks. Deletes are not retried with force; the engine has no such option."""

    NAME = "Networks"
    ENTITY = DockerNetwork
    DEFAULT_SORT = NetworkSortField.NAME
    SORT_KEYS = NETWORK_SORT_KEYS
    SORT_BINDINGS = {
        Key.char("N"): NetworkSortField.NAME,
        Key.char("C"): NetworkSortField.CREATED,
        Key.char("D"): NetworkSortField.DRIVER,
    }
    COLUMNS = [
        ("Id", None),
        ("Name", NetworkSortField.NAME),
        ("Driver", NetworkSortField.DRIVER),
        ("Created", NetworkSortField.CREATED),
        ("Scope", None),
    ]

    def build_help(self, builder: PageHelpBuilder) -> PageHelp:
        return (
            builder.add_input(DELETE_KEY, "delete")
            .add_input(PRUNE_KEY, "prune")
            .add_input("d", "describe")
            .add_input("g", "top")
            .add_input("G", "bottom")
            .add_input("/", "filter")
            .build()
        )

    async def fetch(self) -> list[DockerNetwork]:
        return await self._client.list_networks()

    def return_transition(self, item: DockerNetwork) -> Transition:
        return Transition.to_network_page(AppContext(docker_network=item))

    async def handle_key(self, key: Key) -> MessageResponse:
        if key == PRUNE_KEY:
            modal: ConfirmationModal[ModalType] = ConfirmationModal(
                "Prune", ModalType.PRUNE_NETWORKS, self._styles
            )
            modal.initialise(
                "Are you sure you wish to prune all unused networks?",
                PruneNetworks(self._client, self._tx),
            )
            self.modal = modal
            return MessageResponse.CONSUMED
        if key == DELETE_KEY and (network := self.selected_item) is not None:
            modal = ConfirmationModal("Delete", ModalType.DELETE_NETWORK, self._styles)
            modal.initialise(
                f"Are you sure you wish to delete network {network.name}?",
                DeleteNetwork(self._client, network.name, self._tx),
            )
            self.modal = modal
            return MessageResponse.CONSUMED
        return MessageResponse.NOT_CONSUMED

    async def on_modal_error(self, modal: ConfirmationModal[ModalType], error: DockerError) -> None:
        if modal.discriminator is not ModalType.DELETE_NETWORK:
            await super().on_modal_error(modal, error)
            return
        failed: ConfirmationModal[ModalType] = ConfirmationModal(
            "Failed", ModalType.FAILED_TO_DELETE_NETWORK, self._styles
        )
        failed.initialise(FAILED_DELETE_MESSAGE, EmptyCallback())
        self.modal = failed

    def row(self, item: DockerNetwork) -> list[RenderableType]:
        return [item.id[:12], item.name, item.driver, item.created_at or "Unknown", item.scope]
