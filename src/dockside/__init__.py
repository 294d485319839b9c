"""dockside - a terminal dashboard for Docker."""

from dockside.__version__ import __version__

__all__ = ["__version__"]
