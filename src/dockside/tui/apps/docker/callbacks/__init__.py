"""Confirmed side effects triggered from modals.

Usage:
    from dockside.tui.apps.docker.callbacks import DeleteContainer

    modal.initialise(message, DeleteContainer(client, container.id, force, tx))
"""

from dockside.tui.apps.docker.callbacks.base import Callback, EmptyCallback
from dockside.tui.apps.docker.callbacks.containers import DeleteAllContainers, DeleteContainer
from dockside.tui.apps.docker.callbacks.images import DeleteImage
from dockside.tui.apps.docker.callbacks.networks import DeleteNetwork, PruneNetworks
from dockside.tui.apps.docker.callbacks.volumes import DeleteVolume

__all__ = [
    "Callback",
    "DeleteAllContainers",
    "DeleteContainer",
    "DeleteImage",
    "DeleteNetwork",
    "DeleteVolume",
    "EmptyCallback",
    "PruneNetworks",
]
