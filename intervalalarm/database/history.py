"""Session persistence: the timer hands its session entity here at
creation and again when the session stops or completes.

Sessions are detached ORM objects (``expire_on_commit=False``) so the
timer can keep mutating them between saves; :func:`save_session`
merges the latest counters back into the table.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from .db import get_session
from .models import AlarmSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionStats:
    total_sessions: int
    completed_sessions: int
    completed_intervals: int
    focus_minutes: int


def create_session(
    total_intervals: int = 10,
    device_source: str = "desktop",
) -> AlarmSession:
    """Insert a new session stamped now and return it (detached)."""
    record = AlarmSession.new(
        total_intervals=total_intervals, device_source=device_source,
    )
    with get_session() as db:
        db.add(record)
    logger.debug("Created session %s", record.id)
    return record


def save_session(record: AlarmSession) -> None:
    """Write the session's current counters (insert if unknown)."""
    record.last_modified = datetime.now()
    with get_session() as db:
        db.merge(record)
    logger.debug("Saved %r", record)


def get_alarm_session(session_id: str) -> AlarmSession | None:
    with get_session() as db:
        return db.get(AlarmSession, session_id)


def recent_sessions(limit: int = 20) -> list[AlarmSession]:
    """Newest first."""
    with get_session() as db:
        return (
            db.query(AlarmSession)
            .order_by(AlarmSession.start_time.desc())
            .limit(limit)
            .all()
        )


def delete_session(session_id: str) -> bool:
    """Remove a session.  Returns False if it did not exist."""
    with get_session() as db:
        record = db.get(AlarmSession, session_id)
        if record is None:
            return False
        db.delete(record)
    return True


def session_stats() -> SessionStats:
    """Totals across every recorded session.

    ``focus_minutes`` counts wall-clock time of finished sessions only.
    """
    with get_session() as db:
        rows = db.query(AlarmSession).all()
        finished = [r for r in rows if r.end_time is not None]
        return SessionStats(
            total_sessions=len(rows),
            completed_sessions=sum(1 for r in rows if r.is_completed),
            completed_intervals=sum(r.completed_intervals for r in rows),
            focus_minutes=sum(r.duration_seconds for r in finished) // 60,
        )
