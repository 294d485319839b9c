"""Main loop: render, wait for one message, dispatch it, repeat."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from dockside.tui.events import (
    ErrorMessage,
    InputMessage,
    Key,
    TickMessage,
    TransitionKind,
    TransitionMessage,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import RenderableType

    from dockside.tui.apps.docker.dashboard import Dashboard
    from dockside.tui.events import EventLoop

logger = structlog.get_logger()

EXIT_KEYS = frozenset({Key.ctrl("c"), Key.ctrl("d")})


async def run_app(
    dashboard: Dashboard,
    events: EventLoop,
    render: Callable[[RenderableType], None],
    reset_terminal: Callable[[], None],
) -> None:
    """Drive the dashboard until it is done.

    Args:
        dashboard: The mode machine to dispatch to.
        events: A started event loop.
        render: Displays a frame.
        reset_terminal: Repaints the terminal after an attached shell.
    """
    try:
        while dashboard.is_running:
            render(dashboard.draw())
            message = await events.next()

            match message:
                case InputMessage(key=key):
                    response = await dashboard.update(key)
                    if not response.is_consumed and key in EXIT_KEYS:
                        logger.debug("exit_key_pressed", key=str(key))
                        break
                case TickMessage():
                    await dashboard.update(Key.NULL)
                case TransitionMessage(transition=transition):
                    if transition.kind is TransitionKind.TO_NEW_TERMINAL:
                        reset_terminal()
                    else:
                        await dashboard.transition(transition)
                case ErrorMessage(error=error):
                    dashboard.show_error(error)
    finally:
        await dashboard.page_manager.close()
        await events.stop()
        logger.debug("main_loop_stopped")
