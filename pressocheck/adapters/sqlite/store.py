"""
SQLite-backed record store.

Thin wrapper over SQLAlchemy sessions implementing the RecordStore protocol.
Each call runs in its own short session and commits before notifying live
queries, so subscribers always see committed state.
"""

from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from sqlalchemy import delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from pressocheck.config import StorageConfig
from pressocheck.domain.errors import StoreError
from pressocheck.domain.models import PressureRecord
from pressocheck.domain.pressure import day_range
from pressocheck.services.observable import Observable
from pressocheck.services.record_store import LiveQuery, Snapshot

from .engine import get_engine, init_db
from .models import PressureRow

logger = structlog.get_logger(__name__)

_NEWEST_FIRST = (PressureRow.timestamp.desc(), PressureRow.time_label.desc())


class SqlAlchemyRecordStore:
    """RecordStore over a SQLAlchemy engine."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._session_factory = sessionmaker(
            bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
        )
        self._changes: Observable[int] = Observable(0, name="sqlite_store_changes")
        self._closed = False
        self.logger = logger.bind(component="sqlite_store", url=str(engine.url))
        init_db(engine)

    @classmethod
    def from_config(cls, config: StorageConfig) -> "SqlAlchemyRecordStore":
        return cls(get_engine(config.url, echo=config.echo))

    async def insert(self, record: PressureRecord) -> int:
        with self._session("insert") as session:
            row = session.merge(PressureRow.from_record(record))
            session.commit()
            record_id = int(row.id)
        self._commit("insert", record_id)
        return record_id

    async def update(self, record: PressureRecord) -> None:
        with self._session("update") as session:
            row = session.get(PressureRow, record.id)
            if row is None:
                self.logger.warning("record_not_found", operation="update", record_id=record.id)
                return
            row.systolic = record.systolic
            row.diastolic = record.diastolic
            row.timestamp = record.timestamp
            row.time_label = record.time_label
            row.note = record.note
            session.commit()
        self._commit("update", record.id)

    async def delete(self, record: PressureRecord) -> None:
        await self.delete_by_id(record.id)

    async def delete_by_id(self, record_id: int) -> None:
        with self._session("delete") as session:
            result = session.execute(delete(PressureRow).where(PressureRow.id == record_id))
            session.commit()
            deleted = result.rowcount
        if not deleted:
            self.logger.warning("record_not_found", operation="delete", record_id=record_id)
            return
        self._commit("delete", record_id)

    async def get_by_id(self, record_id: int) -> PressureRecord | None:
        with self._session("get_by_id") as session:
            row = session.get(PressureRow, record_id)
            return row.to_record() if row is not None else None

    def subscribe_all(self) -> LiveQuery:
        query = select(PressureRow).order_by(*_NEWEST_FIRST)
        return LiveQuery(lambda: self._fetch(query), self._changes)

    def subscribe_by_date(self, day_start: int) -> LiveQuery:
        start, end = day_range(day_start)
        query = (
            select(PressureRow)
            .where(PressureRow.timestamp >= start, PressureRow.timestamp < end)
            .order_by(PressureRow.time_label.desc())
        )
        return LiveQuery(lambda: self._fetch(query), self._changes)

    def subscribe_recent(self, limit: int) -> LiveQuery:
        if limit < 0:
            raise ValueError("limit must be non-negative")
        query = select(PressureRow).order_by(*_NEWEST_FIRST).limit(limit)
        return LiveQuery(lambda: self._fetch(query), self._changes)

    def close(self) -> None:
        self._closed = True
        self._engine.dispose()
        self.logger.info("store_closed")

    def _fetch(self, query) -> Snapshot:
        with self._session("query") as session:
            return [row.to_record() for row in session.scalars(query)]

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        """Open a session, translating database failures into StoreError."""
        if self._closed:
            raise StoreError("Record store is closed")
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            session.rollback()
            self.logger.error("store_operation_failed", operation=operation, error=str(e))
            raise StoreError(f"{operation} failed: {e}") from e
        finally:
            session.close()

    def _commit(self, operation: str, record_id: int) -> None:
        self.logger.debug("store_committed", operation=operation, record_id=record_id)
        self._changes.set(self._changes.value + 1)
