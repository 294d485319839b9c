"""Release lookup on the Python package index."""

from dockside.integrations.pypi.client import PyPIClient, find_update

__all__ = ["PyPIClient", "find_update"]
