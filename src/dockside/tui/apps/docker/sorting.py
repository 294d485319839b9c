"""Sort state and key functions for the list pages."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from dockside.integrations.docker.models import (
    DockerContainer,
    DockerImage,
    DockerNetwork,
    DockerVolume,
)

F = TypeVar("F", bound=Enum)
E = TypeVar("E")


class SortOrder(Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"

    def toggle(self) -> SortOrder:
        if self is SortOrder.ASCENDING:
            return SortOrder.DESCENDING
        return SortOrder.ASCENDING


class ContainerSortField(Enum):
    NAME = "Name"
    IMAGE = "Image"
    STATUS = "Status"
    CREATED = "Created"
    PORTS = "Ports"


class ImageSortField(Enum):
    NAME = "Name"
    TAG = "Tag"
    CREATED = "Created"
    SIZE = "Size"


class VolumeSortField(Enum):
    NAME = "Name"
    CREATED = "Created"
    DRIVER = "Driver"


class NetworkSortField(Enum):
    NAME = "Name"
    CREATED = "Created"
    DRIVER = "Driver"


@dataclass
class SortState(Generic[F]):
    """Current sort field and direction.

    Choosing the field already sorted on flips the direction; choosing a
    new field sorts ascending on it.
    """

    field: F
    order: SortOrder = SortOrder.ASCENDING

    def toggle_or_set(self, field: F) -> None:
        if self.field == field:
            self.order = self.order.toggle()
        else:
            self.field = field
            self.order = SortOrder.ASCENDING

    def get_order_for_field(self, field: F) -> SortOrder | None:
        return self.order if self.field == field else None

    def indicator(self, field: F) -> str:
        """Arrow suffix for a column header."""
        order = self.get_order_for_field(field)
        if order is None:
            return ""
        return " ▲" if order is SortOrder.ASCENDING else " ▼"


CONTAINER_SORT_KEYS: dict[ContainerSortField, Callable[[DockerContainer], Any]] = {
    ContainerSortField.NAME: lambda c: c.names,
    ContainerSortField.IMAGE: lambda c: c.image,
    ContainerSortField.STATUS: lambda c: c.status,
    ContainerSortField.CREATED: lambda c: c.created,
    ContainerSortField.PORTS: lambda c: c.ports_display,
}

IMAGE_SORT_KEYS: dict[ImageSortField, Callable[[DockerImage], Any]] = {
    ImageSortField.NAME: lambda i: i.name,
    ImageSortField.TAG: lambda i: i.tag,
    ImageSortField.CREATED: lambda i: i.created,
    ImageSortField.SIZE: lambda i: i.size,
}

VOLUME_SORT_KEYS: dict[VolumeSortField, Callable[[DockerVolume], Any]] = {
    VolumeSortField.NAME: lambda v: v.name,
    VolumeSortField.CREATED: lambda v: v.created_at or "",
    VolumeSortField.DRIVER: lambda v: v.driver,
}

NETWORK_SORT_KEYS: dict[NetworkSortField, Callable[[DockerNetwork], Any]] = {
    NetworkSortField.NAME: lambda n: n.name,
    NetworkSortField.CREATED: lambda n: n.created_at or "",
    NetworkSortField.DRIVER: lambda n: n.driver,
}


def sort_entities(
    items: Iterable[E],
    state: SortState[F],
    keys: dict[F, Callable[[E], Any]],
) -> list[E]:
    """Return `items` sorted according to `state`; the sort is stable."""
    return sorted(items, key=keys[state.field], reverse=state.order is SortOrder.DESCENDING)
