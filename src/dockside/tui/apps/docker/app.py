"""Main Textual application for the Docker dashboard.

Textual only hosts the dashboard: it owns the terminal, decodes key
presses and displays whatever `Dashboard.draw()` returns. Navigation,
modals and refreshes all happen in the dashboard's own event loop, which
runs in a worker for the lifetime of the app.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from textual import work
from textual.app import App, ComposeResult
from textual.widgets import Static

from dockside.tui.apps.docker.context import AppContext
from dockside.tui.apps.docker.dashboard import Dashboard
from dockside.tui.apps.docker.page_manager import PageManager
from dockside.tui.apps.docker.runner import run_app
from dockside.tui.apps.docker.state import CurrentPage
from dockside.tui.events import EventLoop, Key, QueueKeyReader
from dockside.tui.tasks import spawn

if TYPE_CHECKING:
    from rich.console import RenderableType
    from textual import events

    from dockside.core.config import Config
    from dockside.integrations.docker import DockerClient

logger = structlog.get_logger()


class DockerApp(App[None], inherit_bindings=False):
    """TUI application for operating a Docker engine.

    No bindings are inherited, so every key (Ctrl+C included) reaches the
    dashboard, which decides whether it quits.

    Args:
        client: Docker engine client.
        config: Application config.
        initial_page: Page shown at startup.
    """

    TITLE = "dockside"
    ENABLE_COMMAND_PALETTE = False
    DEFAULT_CSS = """
    #body {
        height: 1fr;
        padding: 0 1;
    }
    """

    def __init__(
        self,
        client: DockerClient,
        config: Config,
        initial_page: CurrentPage = CurrentPage.CONTAINERS,
    ) -> None:
        super().__init__()
        self._client = client
        self._config = config
        self._initial_page = initial_page
        self.key_reader = QueueKeyReader()
        self.dashboard: Dashboard | None = None

    def compose(self) -> ComposeResult:
        """Compose the app layout."""
        yield Static(id="body")

    def on_mount(self) -> None:
        """Start the dashboard loop."""
        self.run_dashboard()

    def on_key(self, event: events.Key) -> None:
        """Decode a key press and hand it to the dashboard."""
        event.stop()
        event.prevent_default()
        key = Key.from_textual(event.key, event.character)
        if key != Key.NULL:
            self.key_reader.feed(key)

    def render_frame(self, renderable: RenderableType) -> None:
        self.query_one("#body", Static).update(renderable)

    def reset_terminal(self) -> None:
        """Repaint everything after a shell has drawn over the screen."""
        self.refresh(repaint=True, layout=True)

    @work(exclusive=True, group="dashboard")
    async def run_dashboard(self) -> None:
        """Run the dashboard until it quits, then exit the app."""
        events = EventLoop(self.key_reader)
        events.start()
        tx = events.get_sender()
        try:
            page_manager = await PageManager.create(
                self._initial_page,
                AppContext(),
                self._client,
                tx,
                self._config,
                suspend=self.suspend,
            )
            self.dashboard = Dashboard(page_manager, tx, self._config, self._client.base_url)
            if self._config.check_for_update:
                spawn(self.dashboard.check_for_update(), name="update-check")
            await run_app(self.dashboard, events, self.render_frame, self.reset_terminal)
        except Exception as e:
            logger.error("dashboard_failed", error=str(e))
            await events.stop()
            self.exit(return_code=1, message=str(e))
            return
        self.exit()
