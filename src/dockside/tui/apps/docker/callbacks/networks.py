"""Network deletion and prune callbacks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from dockside.tui.apps.docker.callbacks.base import Callback
from dockside.tui.events import TICK, ErrorMessage
from dockside.tui.tasks import spawn

if TYPE_CHECKING:
    from dockside.integrations.docker import DockerClient
    from dockside.tui.events import Message, Sender

logger = structlog.get_logger()


@dataclass
class DeleteNetwork(Callback):
    """Remove one network by name, inline."""

    client: DockerClient = field(repr=False)
    name: str
    tx: Sender[Message] = field(repr=False)

    async def call(self) -> None:
        await self.client.remove_network(self.name)
        await self.tx.send(TICK)


@dataclass
class PruneNetworks(Callback):
    """Remove all unused networks, detached."""

    client: DockerClient = field(repr=False)
    tx: Sender[Message] = field(repr=False)

    async def call(self) -> None:
        spawn(self._prune(), name="prune-networks")

    async def _prune(self) -> None:
        try:
            await self.client.prune_networks()
        except Exception as e:
            logger.warning("prune_networks_failed", error=str(e))
            await self.tx.send(ErrorMessage(f"Failed to prune networks: {e}"))
            return
        await self.tx.send(TICK)
