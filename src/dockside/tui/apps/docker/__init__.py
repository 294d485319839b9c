"""Docker dashboard application.

Usage:
    from dockside.tui.apps.docker import DockerApp

    DockerApp(client, config).run()
"""

from dockside.tui.apps.docker.app import DockerApp

__all__ = ["DockerApp"]
