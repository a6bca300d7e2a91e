"""SQLAlchemy ORM models for Interval Alarm."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class AlarmSession(Base):
    """One run of the interval program (completed or stopped early)."""

    __tablename__ = "alarm_sessions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    start_time = Column(DateTime, nullable=False, default=datetime.now)
    end_time = Column(DateTime, nullable=True)
    total_intervals = Column(Integer, nullable=False, default=10)
    completed_intervals = Column(Integer, nullable=False, default=0)
    is_completed = Column(Boolean, nullable=False, default=False)
    device_source = Column(String(16), nullable=False, default="desktop")
    last_modified = Column(DateTime, nullable=False, default=datetime.now)

    @classmethod
    def new(
        cls,
        *,
        total_intervals: int = 10,
        device_source: str = "desktop",
        start_time: datetime | None = None,
    ) -> "AlarmSession":
        """Build an unsaved session with every column filled in.

        Column defaults only apply on INSERT; the timer reads these
        attributes before (or without) the row ever being flushed.
        """
        now = start_time or datetime.now()
        return cls(
            id=str(uuid.uuid4()),
            start_time=now,
            end_time=None,
            total_intervals=total_intervals,
            completed_intervals=0,
            is_completed=False,
            device_source=device_source,
            last_modified=now,
        )

    @property
    def duration_seconds(self) -> int:
        if self.end_time is None:
            return 0
        return max(0, int((self.end_time - self.start_time).total_seconds()))

    def __repr__(self) -> str:
        return (
            f"<AlarmSession id={self.id} "
            f"intervals={self.completed_intervals}/{self.total_intervals} "
            f"completed={self.is_completed}>"
        )
