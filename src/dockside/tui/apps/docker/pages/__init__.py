"""Pages shown by the page manager, one per `CurrentPage`."""

from dockside.tui.apps.docker.pages.attach import AttachPage
from dockside.tui.apps.docker.pages.base import ListPage
from dockside.tui.apps.docker.pages.containers import ContainersPage
from dockside.tui.apps.docker.pages.describe import DescribePage
from dockside.tui.apps.docker.pages.images import ImagesPage
from dockside.tui.apps.docker.pages.logs import LogsPage
from dockside.tui.apps.docker.pages.networks import NetworksPage
from dockside.tui.apps.docker.pages.volumes import VolumesPage

__all__ = [
    "AttachPage",
    "ContainersPage",
    "DescribePage",
    "ImagesPage",
    "ListPage",
    "LogsPage",
    "NetworksPage",
    "VolumesPage",
]
