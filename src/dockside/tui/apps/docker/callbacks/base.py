"""Callback capability attached to confirmation modals.

A callback performs one confirmed side effect. Two reporting paths exist
and every implementation uses exactly one of them:

- inline callbacks await the work and raise on failure, so the modal that
  invoked them can react (e.g. offer a forced retry);
- detached callbacks spawn the work and return at once; the outcome
  arrives later as a `Tick` or `Error` message on the sender.

Single-item operations are inline; bulk operations are detached.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class Callback(ABC):
    """One confirmed asynchronous action."""

    @abstractmethod
    async def call(self) -> None:
        """Run the action (inline) or start it (detached).

        Raises:
            Exception: Inline failures only.
        """


class EmptyCallback(Callback):
    """Does nothing; for acknowledgement-only dialogs."""

    async def call(self) -> None:
        return None

    def __repr__(self) -> str:
        return "EmptyCallback()"
