"""Fire-and-forget task spawning.

The event loop only keeps weak references to tasks, so detached work must
be held somewhere until it finishes.
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any

import structlog

logger = structlog.get_logger()

_background_tasks: set[asyncio.Task[Any]] = set()


def spawn(coro: Coroutine[Any, Any, Any], *, name: str | None = None) -> asyncio.Task[Any]:
    """Schedule a coroutine to run detached from its caller.

    Args:
        coro: Work to run.
        name: Task name, used in logs.

    Returns:
        The scheduled task; callers may keep it to cancel the work.
    """
    task = asyncio.create_task(coro, name=name)
    _background_tasks.add(task)
    task.add_done_callback(_on_done)
    return task


def _on_done(task: asyncio.Task[Any]) -> None:
    _background_tasks.discard(task)
    if task.cancelled():
        return
    if (exc := task.exception()) is not None:
        logger.error("background_task_failed", task=task.get_name(), error=str(exc))


def pending_tasks() -> frozenset[asyncio.Task[Any]]:
    """Return the detached tasks that have not finished yet."""
    return frozenset(_background_tasks)
