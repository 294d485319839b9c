"""Cross-page hand-off record.

An `AppContext` rides on every navigation transition. It tells the target
page which entity was selected (so the same row can be re-selected) and,
optionally, where to go back to when the page is done.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from dockside.integrations.docker.models import (
    Describable,
    DockerContainer,
    DockerImage,
    DockerNetwork,
    DockerVolume,
)

if TYPE_CHECKING:
    from dockside.tui.events.transition import Transition

__all__ = ["AppContext", "Describable"]


@dataclass(eq=False)
class AppContext:
    """Selection and return-target state carried across a page swap.

    Attributes:
        then: Explicit transition to take when the target page is done.
        list_idx: Row index hint for list pages.
        docker_container: Selected container.
        docker_image: Selected image.
        docker_volume: Selected volume.
        docker_network: Selected network.
        describable: Entity the describe page should render.
    """

    then: Transition | None = None
    list_idx: int | None = None
    docker_container: DockerContainer | None = None
    docker_image: DockerImage | None = None
    docker_volume: DockerVolume | None = None
    docker_network: DockerNetwork | None = None
    describable: Describable | None = None

    def __eq__(self, other: object) -> bool:
        # describable compares by what it describes, not by identity/type
        if not isinstance(other, AppContext):
            return NotImplemented
        return (
            self.then == other.then
            and self.list_idx == other.list_idx
            and self.docker_container == other.docker_container
            and self.docker_image == other.docker_image
            and self.docker_volume == other.docker_volume
            and self.docker_network == other.docker_network
            and _describe(self.describable) == _describe(other.describable)
        )

    __hash__ = None  # type: ignore[assignment]

    def selected_id(self, kind: type[Describable]) -> str | None:
        """Return the id of the selected entity of `kind`, if any.

        The matching typed field wins; otherwise a describable of the same
        kind is used.
        """
        field_value: Describable | None = {
            DockerContainer: self.docker_container,
            DockerImage: self.docker_image,
            DockerVolume: self.docker_volume,
            DockerNetwork: self.docker_network,
        }.get(kind)
        if field_value is not None:
            return field_value.get_id()
        if isinstance(self.describable, kind):
            return self.describable.get_id()
        return None


def _describe(describable: Describable | None) -> object:
    return None if describable is None else describable.describe()
