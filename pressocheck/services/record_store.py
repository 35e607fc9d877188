"""
Record store contract and an in-memory implementation.

Key patterns:
- Protocol-based dependency injection: the state manager only sees RecordStore
- Live queries: every committed mutation re-emits full snapshots to subscribers
- Async writes: stores are awaited from cooperative tasks, never from threads
"""

import asyncio
from collections.abc import AsyncIterator, Callable, Iterable
from typing import Protocol

import structlog

from pressocheck.domain.errors import StoreError
from pressocheck.domain.models import PressureRecord
from pressocheck.domain.pressure import day_range
from pressocheck.services.observable import Listener, Observable, Subscription

logger = structlog.get_logger(__name__)

Snapshot = list[PressureRecord]


def newest_first(records: Iterable[PressureRecord]) -> Snapshot:
    """Order by timestamp descending, then time label descending."""
    return sorted(records, key=lambda r: (r.timestamp, r.time_label), reverse=True)


class LiveQuery:
    """
    A query that re-runs whenever its store commits a change.

    ``fetch`` runs synchronously against the store; ``changes`` is the store's
    commit counter.
    """

    def __init__(self, fetch: Callable[[], Snapshot], changes: Observable[int]) -> None:
        self._fetch = fetch
        self._changes = changes

    def snapshot(self) -> Snapshot:
        return self._fetch()

    def subscribe(self, listener: Listener[Snapshot]) -> Subscription:
        """Deliver the current snapshot now and a fresh one after each commit."""
        return self._changes.subscribe(lambda _version: listener(self._fetch()))

    async def stream(self) -> AsyncIterator[Snapshot]:
        """
        Iterate snapshots as they are produced.

        The first item is the current snapshot. The subscription is released
        when the consumer stops iterating.
        """
        queue: asyncio.Queue[Snapshot] = asyncio.Queue()
        subscription = self.subscribe(queue.put_nowait)
        try:
            while True:
                yield await queue.get()
        finally:
            subscription.dispose()


class RecordStore(Protocol):
    """
    Persistence collaborator consumed by the state manager.

    Why Protocol over ABC: structural typing, easier faking in tests.
    Implementations raise StoreError for any constraint or I/O failure.
    """

    async def insert(self, record: PressureRecord) -> int:
        """Persist ``record`` and return its id. A non-zero id replaces that row."""
        ...

    async def update(self, record: PressureRecord) -> None: ...

    async def delete(self, record: PressureRecord) -> None: ...

    async def delete_by_id(self, record_id: int) -> None: ...

    async def get_by_id(self, record_id: int) -> PressureRecord | None: ...

    def subscribe_all(self) -> LiveQuery: ...

    def subscribe_by_date(self, day_start: int) -> LiveQuery: ...

    def subscribe_recent(self, limit: int) -> LiveQuery: ...

    def close(self) -> None: ...


class InMemoryRecordStore:
    """
    Dictionary-backed store for tests and demos.

    Ids are assigned from a counter starting at 1, like an autoincrement key.
    """

    def __init__(self, records: Iterable[PressureRecord] = ()) -> None:
        self.logger = logger.bind(component="in_memory_store")
        self._records: dict[int, PressureRecord] = {}
        self._next_id = 1
        self._changes: Observable[int] = Observable(0, name="in_memory_store_changes")
        self._closed = False
        for record in records:
            self._put(record)

    async def insert(self, record: PressureRecord) -> int:
        self._check_open()
        stored = self._put(record)
        self._commit("insert", stored.id)
        return stored.id

    async def update(self, record: PressureRecord) -> None:
        self._check_open()
        if record.id not in self._records:
            self.logger.warning("record_not_found", operation="update", record_id=record.id)
            return
        self._records[record.id] = record
        self._commit("update", record.id)

    async def delete(self, record: PressureRecord) -> None:
        await self.delete_by_id(record.id)

    async def delete_by_id(self, record_id: int) -> None:
        self._check_open()
        if self._records.pop(record_id, None) is None:
            self.logger.warning("record_not_found", operation="delete", record_id=record_id)
            return
        self._commit("delete", record_id)

    async def get_by_id(self, record_id: int) -> PressureRecord | None:
        self._check_open()
        return self._records.get(record_id)

    def subscribe_all(self) -> LiveQuery:
        return LiveQuery(lambda: newest_first(self._records.values()), self._changes)

    def subscribe_by_date(self, day_start: int) -> LiveQuery:
        start, end = day_range(day_start)

        def fetch() -> Snapshot:
            same_day = [r for r in self._records.values() if start <= r.timestamp < end]
            return sorted(same_day, key=lambda r: r.time_label, reverse=True)

        return LiveQuery(fetch, self._changes)

    def subscribe_recent(self, limit: int) -> LiveQuery:
        if limit < 0:
            raise ValueError("limit must be non-negative")
        return LiveQuery(lambda: newest_first(self._records.values())[:limit], self._changes)

    def close(self) -> None:
        self._closed = True
        self.logger.info("store_closed")

    def _put(self, record: PressureRecord) -> PressureRecord:
        if record.id == 0:
            record = record.model_copy(update={"id": self._next_id})
        self._next_id = max(self._next_id, record.id + 1)
        self._records[record.id] = record
        return record

    def _commit(self, operation: str, record_id: int) -> None:
        self.logger.debug("store_committed", operation=operation, record_id=record_id)
        self._changes.set(self._changes.value + 1)

    def _check_open(self) -> None:
        if self._closed:
            raise StoreError("Record store is closed")
