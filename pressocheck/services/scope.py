"""
Cancellation scope for work tied to a screen's lifetime.

The owner (typically a screen) creates a scope, hands it to the state manager
and cancels it when torn down. Cancelling stops every in-flight task and runs
the registered finalizers, such as disposing live-query subscriptions.
"""

import asyncio
from collections.abc import AsyncIterator, Callable, Coroutine
from contextlib import asynccontextmanager
from typing import Any, TypeVar

import structlog

from pressocheck.domain.errors import ScopeCancelledError

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class CancellationScope:
    """Tracks tasks launched on behalf of one owner and cancels them together."""

    def __init__(self, name: str = "scope") -> None:
        self.name = name
        self.logger = logger.bind(scope=name)
        self._tasks: set[asyncio.Task[Any]] = set()
        self._finalizers: list[Callable[[], None]] = []
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def active_tasks(self) -> int:
        return len(self._tasks)

    def launch(self, coro: Coroutine[Any, Any, T], name: str | None = None) -> asyncio.Task[T]:
        """Schedule ``coro`` on the running loop as a task owned by this scope."""
        if self._cancelled:
            coro.close()
            raise ScopeCancelledError(f"Scope {self.name!r} is cancelled")

        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def add_finalizer(self, finalizer: Callable[[], None]) -> None:
        """Run ``finalizer`` on cancel, or right away if already cancelled."""
        if self._cancelled:
            finalizer()
            return
        self._finalizers.append(finalizer)

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise asyncio.CancelledError(f"Scope {self.name!r} is cancelled")

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True

        pending = [task for task in self._tasks if not task.done()]
        for task in pending:
            task.cancel()

        finalizers, self._finalizers = self._finalizers, []
        for finalizer in reversed(finalizers):
            finalizer()

        self.logger.info("scope_cancelled", cancelled_tasks=len(pending))

    async def join(self) -> None:
        """Wait until every task launched so far has finished."""
        while self._tasks:
            await asyncio.wait(list(self._tasks))


@asynccontextmanager
async def open_scope(name: str = "scope") -> AsyncIterator[CancellationScope]:
    """
    Async context manager for a scope's lifecycle.

    The scope is cancelled on exit even if the body raises.
    """
    scope = CancellationScope(name)
    scope.logger.info("scope_opened")
    try:
        yield scope
    finally:
        scope.cancel()
