"""SQLite persistence for readings, built on SQLAlchemy."""

from .store import SqlAlchemyRecordStore

__all__ = ["SqlAlchemyRecordStore"]
