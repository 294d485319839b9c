"""Reusable dashboard components.

Usage:
    from dockside.tui.components import ConfirmationModal, PageHelp, TableFilter
"""

from dockside.tui.components.help import PageHelp, PageHelpBuilder
from dockside.tui.components.modal import (
    CLOSED,
    AlertModal,
    ConfirmationModal,
    Modal,
    ModalClosed,
    ModalOpen,
    ModalState,
)
from dockside.tui.components.table_filter import TableFilter
from dockside.tui.components.text_input import Autocomplete, TextInput

__all__ = [
    "CLOSED",
    "AlertModal",
    "Autocomplete",
    "ConfirmationModal",
    "Modal",
    "ModalClosed",
    "ModalOpen",
    "ModalState",
    "PageHelp",
    "PageHelpBuilder",
    "TableFilter",
    "TextInput",
]
