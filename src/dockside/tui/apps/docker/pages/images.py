"""Images page."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dockside.integrations.docker import DockerImage
from dockside.tui.apps.docker.callbacks import DeleteImage
from dockside.tui.apps.docker.context import AppContext
from dockside.tui.apps.docker.pages.base import DELETE_KEY, ListPage
from dockside.tui.apps.docker.sorting import IMAGE_SORT_KEYS, ImageSortField
from dockside.tui.apps.docker.state import ModalType
from dockside.tui.components.modal import ConfirmationModal
from dockside.tui.events import Key, MessageResponse, Transition

if TYPE_CHECKING:
    from rich.console import RenderableType

    from dockside.integrations.docker import DockerError
    from dockside.tui.components.help import PageHelp, PageHelpBuilder

TOGGLE_DANGLING_KEY = Key.alt("d")

FORCE_DELETE_MESSAGE = (
    "An error occurred deleting this image; would you like to try to force remove?"
)


class ImagesPage(ListPage[DockerImage, ImageSortField]):
    """Local images. Untagged (dangling) images are hidden until toggled on."""

    NAME = "Images"
    ENTITY = DockerImage
    DEFAULT_SORT = ImageSortField.NAME
    SORT_KEYS = IMAGE_SORT_KEYS
    SORT_BINDINGS = {
        Key.char("N"): ImageSortField.NAME,
        Key.char("C"): ImageSortField.CREATED,
        Key.char("T"): ImageSortField.TAG,
        Key.char("S"): ImageSortField.SIZE,
    }
    COLUMNS = [
        ("Id", None),
        ("Name", ImageSortField.NAME),
        ("Tag", ImageSortField.TAG),
        ("Created", ImageSortField.CREATED),
        ("Size", ImageSortField.SIZE),
    ]

    show_dangling = False

    def build_help(self, builder: PageHelpBuilder) -> PageHelp:
        return (
            builder.add_input(DELETE_KEY, "delete")
            .add_input(TOGGLE_DANGLING_KEY, "toggle dangling")
            .add_input("d", "describe")
            .add_input("g", "top")
            .add_input("G", "bottom")
            .add_input("/", "filter")
            .build()
        )

    async def fetch(self) -> list[DockerImage]:
        return await self._client.list_images(dangling=self.show_dangling)

    def return_transition(self, item: DockerImage) -> Transition:
        return Transition.to_image_page(AppContext(docker_image=item))

    async def handle_key(self, key: Key) -> MessageResponse:
        if key == TOGGLE_DANGLING_KEY:
            self.show_dangling = not self.show_dangling
            return MessageResponse.CONSUMED
        if key == DELETE_KEY and (image := self.selected_item) is not None:
            modal: ConfirmationModal[ModalType] = ConfirmationModal(
                "Delete", ModalType.DELETE_IMAGE, self._styles
            )
            modal.initialise(
                f"Are you sure you wish to delete image {image.name}:{image.tag}?",
                DeleteImage(self._client, image.id, False, self._tx),
            )
            self.modal = modal
            return MessageResponse.CONSUMED
        return MessageResponse.NOT_CONSUMED

    async def on_modal_error(self, modal: ConfirmationModal[ModalType], error: DockerError) -> None:
        # A plain delete that failed gets one forced retry offer
        if modal.discriminator is not ModalType.DELETE_IMAGE or not isinstance(
            modal.callback, DeleteImage
        ):
            await super().on_modal_error(modal, error)
            return
        retry: ConfirmationModal[ModalType] = ConfirmationModal(
            "Force Delete", ModalType.FORCE_DELETE_IMAGE, self._styles
        )
        retry.initialise(
            FORCE_DELETE_MESSAGE, DeleteImage(self._client, modal.callback.image_id, True, self._tx)
        )
        self.modal = retry

    def row(self, item: DockerImage) -> list[RenderableType]:
        return [item.short_id, item.name, item.tag, item.created_display, item.size_display]
