"""Dashboard state enums."""

from __future__ import annotations

from enum import Enum


class CurrentPage(Enum):
    """The kind of page the page manager is showing."""

    CONTAINERS = "Containers"
    IMAGES = "Images"
    VOLUMES = "Volumes"
    NETWORK = "Networks"
    LOGS = "Logs"
    ATTACH = "Attach"
    DESCRIBE_CONTAINER = "Describe"


class Mode(Enum):
    """Whether keys drive the pages or the command input."""

    VIEW = "view"
    TEXT_INPUT = "text_input"


class Running(Enum):
    """Whether the main loop should keep going."""

    RUNNING = "running"
    DONE = "done"


class ModalType(Enum):
    """Why a modal was opened."""

    DELETE_CONTAINER = "delete_container"
    DELETE_ALL_CONTAINERS = "delete_all_containers"
    DELETE_IMAGE = "delete_image"
    FORCE_DELETE_IMAGE = "force_delete_image"
    DELETE_VOLUME = "delete_volume"
    FORCE_DELETE_VOLUME = "force_delete_volume"
    DELETE_NETWORK = "delete_network"
    FAILED_TO_DELETE_NETWORK = "failed_to_delete_network"
    PRUNE_NETWORKS = "prune_networks"
    ERROR = "error"
