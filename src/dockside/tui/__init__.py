"""Terminal user interface for dockside.

The dashboard is a set of plain state machines (pages, modals, inputs)
driven by one event loop; textual only hosts the terminal.

Usage:
    from dockside.tui import Component, Page, Styles
    from dockside.tui.components import ConfirmationModal, AlertModal
    from dockside.tui.apps.docker import DockerApp
"""

from dockside.tui.base import Close, Component, Page
from dockside.tui.theme import Colors, Styles

__all__ = [
    "Close",
    "Colors",
    "Component",
    "Page",
    "Styles",
]
