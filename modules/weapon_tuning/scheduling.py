"""Zero-delay schedulers for work that must wait until the host settles.

Host notifications such as "item added to container" can fire before the
weapon's internal state is consistent.  Instead of acting inline, handlers
post a callback that runs on the next turn of the same single-threaded loop.
Two implementations are provided:

``DeferredActionQueue``
    A FIFO drained explicitly by the host tick via :meth:`run_pending`.
``AsyncioScheduler``
    Posts callbacks onto an :mod:`asyncio` event loop with ``call_soon``.
"""
from __future__ import annotations

import asyncio
from collections import deque
from typing import Callable, Deque, Optional, Protocol

__all__ = ["AsyncioScheduler", "DeferredActionQueue", "Scheduler"]

Action = Callable[[], None]


class Scheduler(Protocol):
    def call_soon(self, callback: Action) -> None:
        ...


class DeferredActionQueue:
    """FIFO of deferred actions executed by :meth:`run_pending`."""

    def __init__(self) -> None:
        self._actions: Deque[Action] = deque()

    def call_soon(self, callback: Action) -> None:
        self._actions.append(callback)

    def run_pending(self) -> int:
        """Run the actions queued before this call and return how many ran.

        Actions queued while draining wait for the next call.
        """

        batch = len(self._actions)
        for _ in range(batch):
            action = self._actions.popleft()
            action()
        return batch

    def clear(self) -> None:
        self._actions.clear()

    def __len__(self) -> int:
        return len(self._actions)


class AsyncioScheduler:
    """Scheduler bound to one asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_soon(self, callback: Action) -> None:
        self.loop.call_soon(callback)
