"""Volume deletion callback."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from dockside.tui.apps.docker.callbacks.base import Callback
from dockside.tui.events import TICK

if TYPE_CHECKING:
    from dockside.integrations.docker import DockerClient
    from dockside.tui.events import Message, Sender


@dataclass
class DeleteVolume(Callback):
    """Remove one volume by name, inline."""

    client: DockerClient = field(repr=False)
    name: str
    force: bool
    tx: Sender[Message] = field(repr=False)

    async def call(self) -> None:
        await self.client.remove_volume(self.name, force=self.force)
        await self.tx.send(TICK)
