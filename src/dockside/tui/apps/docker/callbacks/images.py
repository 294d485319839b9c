"""Image deletion callback."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from dockside.tui.apps.docker.callbacks.base import Callback
from dockside.tui.events import TICK

if TYPE_CHECKING:
    from dockside.integrations.docker import DockerClient
    from dockside.tui.events import Message, Sender


@dataclass
class DeleteImage(Callback):
    """Remove one image, inline."""

    client: DockerClient = field(repr=False)
    image_id: str
    force: bool
    tx: Sender[Message] = field(repr=False)

    async def call(self) -> None:
        await self.client.remove_image(self.image_id, force=self.force)
        await self.tx.send(TICK)
