"""Docker engine integration.

Provides the async-friendly engine client, display models for the four
entity kinds, and the exception hierarchy used across the dashboard.
"""

from dockside.integrations.docker.client import DockerClient
from dockside.integrations.docker.exceptions import (
    DockerAPIError,
    DockerConflictError,
    DockerConnectionError,
    DockerError,
    DockerNotFoundError,
)
from dockside.integrations.docker.models import (
    DescribeSection,
    Describable,
    DockerContainer,
    DockerImage,
    DockerNetwork,
    DockerPort,
    DockerVolume,
    LogStreamOptions,
)

__all__ = [
    "DescribeSection",
    "Describable",
    "DockerAPIError",
    "DockerClient",
    "DockerConflictError",
    "DockerConnectionError",
    "DockerContainer",
    "DockerError",
    "DockerImage",
    "DockerNetwork",
    "DockerNotFoundError",
    "DockerPort",
    "DockerVolume",
    "LogStreamOptions",
]
