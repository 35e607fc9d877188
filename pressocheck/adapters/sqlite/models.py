"""SQLAlchemy table for stored readings."""

from sqlalchemy import BigInteger, Column, Index, Integer, String, Text
from sqlalchemy.orm import declarative_base

from pressocheck.domain.models import PressureRecord

Base = declarative_base()


class PressureRow(Base):
    __tablename__ = "pressure_measurements"

    id = Column(Integer, primary_key=True, autoincrement=True)
    systolic = Column(Integer, nullable=False)
    diastolic = Column(Integer, nullable=False)
    timestamp = Column(BigInteger, nullable=False)  # ms since epoch
    time_label = Column(String(5), nullable=False)  # HH:mm
    note = Column(Text, nullable=False, default="")

    __table_args__ = (Index("ix_pressure_measurements_timestamp", "timestamp"),)

    @classmethod
    def from_record(cls, record: PressureRecord) -> "PressureRow":
        return cls(
            id=record.id or None,
            systolic=record.systolic,
            diastolic=record.diastolic,
            timestamp=record.timestamp,
            time_label=record.time_label,
            note=record.note,
        )

    def to_record(self) -> PressureRecord:
        return PressureRecord(
            id=self.id,
            systolic=self.systolic,
            diastolic=self.diastolic,
            timestamp=self.timestamp,
            time_label=self.time_label,
            note=self.note or "",
        )

    def __repr__(self) -> str:  # pragma: no cover - repr utility
        return f"PressureRow(id={self.id}, {self.systolic}/{self.diastolic}, at={self.timestamp})"
