"""Container deletion callbacks."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from dockside.tui.apps.docker.callbacks.base import Callback
from dockside.tui.events import TICK, ErrorMessage
from dockside.tui.tasks import spawn

if TYPE_CHECKING:
    from dockside.integrations.docker import DockerClient, DockerContainer
    from dockside.tui.events import Message, Sender

logger = structlog.get_logger()


@dataclass
class DeleteContainer(Callback):
    """Remove one container, inline."""

    client: DockerClient = field(repr=False)
    container_id: str
    force: bool
    tx: Sender[Message] = field(repr=False)

    async def call(self) -> None:
        await self.client.remove_container(self.container_id, force=self.force)
        await self.tx.send(TICK)


@dataclass
class DeleteAllContainers(Callback):
    """Remove every given container, detached.

    One removal runs per container; a single aggregate Error is reported
    if any of them failed, otherwise a single Tick.
    """

    client: DockerClient = field(repr=False)
    containers: list[DockerContainer]
    force: bool
    tx: Sender[Message] = field(repr=False)

    async def call(self) -> None:
        spawn(self._delete_all(), name="delete-all-containers")

    async def _delete_all(self) -> None:
        results = await asyncio.gather(
            *(self.client.remove_container(c.id, force=self.force) for c in self.containers),
            return_exceptions=True,
        )
        failures = [
            f"{c.get_name()}: {r}"
            for c, r in zip(self.containers, results, strict=True)
            if isinstance(r, BaseException)
        ]
        if failures:
            logger.warning(
                "delete_all_containers_failed",
                failed=len(failures),
                total=len(self.containers),
            )
            await self.tx.send(
                ErrorMessage(
                    f"Failed to delete {len(failures)} of {len(self.containers)} "
                    f"containers: {'; '.join(failures)}"
                )
            )
        else:
            await self.tx.send(TICK)
