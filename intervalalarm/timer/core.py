"""Interval session state machine for Interval Alarm.

A session is ``total_intervals`` back-to-back countdowns of
``interval_duration`` seconds each (production: 10 x 3 min).  Alert
sounds and music alternate between choice "A" (intervals 1, 3, 5 ...)
and choice "B" (intervals 2, 4, 6 ...).

States
------
IDLE        No session loaded.
RUNNING     Countdown decrementing once per ``tick()``.
PAUSED      Session loaded, countdown frozen.
COMPLETED   Last interval finished (terminal until ``stop`` / ``start``).

Transitions
-----------
IDLE → RUNNING                      (start_session)
RUNNING → PAUSED                    (pause)
PAUSED → RUNNING                    (resume)
RUNNING → RUNNING                   (interval rollover on tick)
RUNNING → COMPLETED                 (last rollover, or reconcile past end)
Any → IDLE                          (stop)

Driving the machine
-------------------
The controller owns no timer.  A host calls ``tick()`` once per second
while running and ``reconcile_after_resume()`` when the app comes back
to the foreground; both calls must come from the same event loop.  Ticks
are never trusted to account for real time across suspension:
reconciliation recomputes the position from the wall clock.

Notifications are plain callables, invoked synchronously:

``on_interval_complete(index)``
    The interval at *index* (0-based) just finished.
``on_session_complete()``
    The last interval finished; the session entity has been finalised.
``on_tick()``
    One second elapsed.
"""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional, Protocol

from ..choices import (
    AlarmSound,
    MusicTrack,
    DEFAULT_SOUND_A,
    DEFAULT_SOUND_B,
    DEFAULT_MUSIC_A,
    DEFAULT_MUSIC_B,
)
from .display import format_time_remaining, status_text

logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class TimerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


# ── constants ─────────────────────────────────────────────────────────────

INTERVAL_DURATION = 180  # 3 minutes
TOTAL_INTERVALS = 10
TOTAL_DURATION = INTERVAL_DURATION * TOTAL_INTERVALS  # 30 minutes


class SessionRef(Protocol):
    """What the controller needs from a session entity."""

    end_time: Optional[datetime]
    completed_intervals: int
    is_completed: bool


# ── controller ────────────────────────────────────────────────────────────


class IntervalSessionController:
    """Plain state holder for one interval session at a time.

    Nothing here raises: calls that make no sense in the current state
    (``tick`` while idle, ``resume`` while running ...) are no-ops.
    """

    def __init__(
        self,
        *,
        interval_duration: int = INTERVAL_DURATION,
        total_intervals: int = TOTAL_INTERVALS,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        # ── configuration (fixed while a session is loaded) ───────────
        self._interval_duration: int = max(1, interval_duration)
        self._total_intervals: int = max(1, total_intervals)
        self._clock = clock

        # ── audio preferences ─────────────────────────────────────────
        self.sound_a: AlarmSound = DEFAULT_SOUND_A
        self.sound_b: AlarmSound = DEFAULT_SOUND_B
        self.music_a: MusicTrack = DEFAULT_MUSIC_A
        self.music_b: MusicTrack = DEFAULT_MUSIC_B

        # ── callbacks ─────────────────────────────────────────────────
        self.on_interval_complete: Callable[[int], None] | None = None
        self.on_session_complete: Callable[[], None] | None = None
        self.on_tick: Callable[[], None] | None = None

        # ── session state ─────────────────────────────────────────────
        self._session: SessionRef | None = None
        self._is_running: bool = False
        self._current_interval: int = 0
        self._seconds_remaining: int = self._interval_duration
        self._session_started_at: datetime | None = None
        self._interval_started_at: datetime | None = None
        # seconds_remaining at the moment interval_started_at was stamped
        self._anchor_remaining: int = self._interval_duration

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def interval_duration(self) -> int:
        return self._interval_duration

    @property
    def total_intervals(self) -> int:
        return self._total_intervals

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def current_interval(self) -> int:
        """0-based index of the interval in progress.

        Equals ``total_intervals`` once the session has completed.
        """
        return self._current_interval

    @property
    def seconds_remaining(self) -> int:
        return self._seconds_remaining

    @property
    def interval_started_at(self) -> datetime | None:
        """When the current countdown began or was last re-anchored.

        ``None`` unless running.
        """
        return self._interval_started_at

    @property
    def session_started_at(self) -> datetime | None:
        return self._session_started_at

    @property
    def current_session(self) -> SessionRef | None:
        return self._session

    @property
    def state(self) -> TimerState:
        if self._current_interval >= self._total_intervals:
            return TimerState.COMPLETED
        if self._is_running:
            return TimerState.RUNNING
        if self._session_started_at is not None:
            return TimerState.PAUSED
        return TimerState.IDLE

    @property
    def progress(self) -> float:
        """0.0 → 1.0 through the whole session."""
        if self._current_interval >= self._total_intervals:
            return 1.0
        total = self._total_intervals * self._interval_duration
        elapsed = (
            self._current_interval * self._interval_duration
            + self._interval_duration - self._seconds_remaining
        )
        return max(0.0, min(1.0, elapsed / total))

    @property
    def interval_progress(self) -> float:
        """0.0 → 1.0 through the current interval."""
        elapsed = self._interval_duration - self._seconds_remaining
        return max(0.0, min(1.0, elapsed / self._interval_duration))

    @property
    def time_remaining(self) -> str:
        return format_time_remaining(self._seconds_remaining)

    @property
    def status_text(self) -> str:
        return status_text(
            self._is_running,
            self._current_interval,
            self._total_intervals,
            in_session=self._session_started_at is not None,
        )

    def current_alert_sound(self) -> AlarmSound:
        return self.sound_a if self._current_interval % 2 == 0 else self.sound_b

    def current_music(self) -> MusicTrack:
        return self.music_a if self._current_interval % 2 == 0 else self.music_b

    @property
    def current_sound_name(self) -> str:
        return self.current_alert_sound().value

    def snapshot(self) -> dict[str, Any]:
        """Observable state as a plain dict (UI, sync, live activity)."""
        return {
            "state": self.state,
            "session_id": getattr(self._session, "id", None),
            "current_interval": self._current_interval,
            "total_intervals": self._total_intervals,
            "seconds_remaining": self._seconds_remaining,
            "time_remaining": self.time_remaining,
            "progress": self.progress,
            "interval_progress": self.interval_progress,
            "is_running": self._is_running,
            "status_text": self.status_text,
        }

    def configure(
        self,
        *,
        interval_duration: int | None = None,
        total_intervals: int | None = None,
    ) -> bool:
        """Change the interval length / count for the next session.

        Refused (returns False) while a session is running or paused.
        From COMPLETED the finished session is released and the
        controller returns to IDLE with the new configuration.
        """
        if self.state in (TimerState.RUNNING, TimerState.PAUSED):
            logger.debug("configure ignored: session in progress")
            return False
        if interval_duration is not None:
            self._interval_duration = max(1, interval_duration)
        if total_intervals is not None:
            self._total_intervals = max(1, total_intervals)
        self._session = None
        self._reset_countdown()
        return True

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start_session(self, session: SessionRef) -> None:
        """Arm the countdown for *session* at interval 0.

        Any session already loaded is dropped as-is (not finalised).
        """
        if self._session is not None and self._session is not session:
            logger.warning(
                "Starting a new session over %s (state=%s); it is discarded",
                getattr(self._session, "id", "<unsaved>"),
                self.state.value,
            )
        now = self._clock()
        self._session = session
        self._current_interval = 0
        self._seconds_remaining = self._interval_duration
        self._is_running = True
        self._session_started_at = now
        self._anchor(now)
        logger.debug(
            "Session started: %d x %ds", self._total_intervals, self._interval_duration,
        )

    def pause(self) -> None:
        if not self._is_running:
            return
        self._is_running = False
        self._interval_started_at = None

    def resume(self) -> None:
        """Continue a paused session.

        Re-anchors ``interval_started_at`` to now so a later
        reconciliation does not count the paused span as elapsed.
        """
        if self._is_running or self.state != TimerState.PAUSED:
            return
        self._is_running = True
        self._anchor(self._clock())

    def stop(self) -> SessionRef | None:
        """Return to IDLE and hand back the session entity.

        A session stopped early records the intervals finished so far;
        a completed session is returned untouched.
        """
        session = self._session
        if session is not None and not session.is_completed:
            session.end_time = self._clock()
            session.completed_intervals = min(
                self._current_interval, self._total_intervals,
            )
        self._session = None
        self._reset_countdown()
        return session

    def tick(self) -> None:
        """Advance the countdown by one second.  No-op unless running."""
        if not self._is_running:
            return
        self._seconds_remaining -= 1
        if self.on_tick is not None:
            self.on_tick()
        if self._seconds_remaining <= 0:
            self._complete_interval()

    def reconcile_after_resume(self, now: datetime | None = None) -> None:
        """Catch up with wall-clock time after the app was suspended.

        Skipped intervals are folded into a single
        ``on_interval_complete`` for the interval just left.  If the
        session ran out while suspended it completes directly.
        """
        if not self._is_running or self._interval_started_at is None:
            return
        if now is None:
            now = self._clock()

        since_anchor = int((now - self._interval_started_at).total_seconds())
        if since_anchor < 0:
            logger.warning("Clock moved backwards by %ds; not reconciling", -since_anchor)
            return
        elapsed = since_anchor + self._interval_duration - self._anchor_remaining

        missed = elapsed // self._interval_duration
        if missed > 0:
            self._current_interval += missed
            logger.debug("Reconcile: %d interval(s) passed in background", missed)
            if self._current_interval >= self._total_intervals:
                self._complete_session(now)
                self._emit_session_complete()
                return

        self._seconds_remaining = self._interval_duration - elapsed % self._interval_duration
        if self._seconds_remaining <= 0:
            self._complete_interval(now)
            return
        self._anchor(now)

        if missed > 0:
            self._emit_interval_complete(self._current_interval - 1)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _anchor(self, now: datetime) -> None:
        self._interval_started_at = now
        self._anchor_remaining = self._seconds_remaining

    def _reset_countdown(self) -> None:
        self._is_running = False
        self._current_interval = 0
        self._seconds_remaining = self._interval_duration
        self._anchor_remaining = self._interval_duration
        self._interval_started_at = None
        self._session_started_at = None

    def _complete_interval(self, now: datetime | None = None) -> None:
        if now is None:
            now = self._clock()
        completed = self._current_interval
        self._current_interval += 1

        if self._current_interval >= self._total_intervals:
            self._complete_session(now)
            self._emit_interval_complete(completed)
            self._emit_session_complete()
            return

        self._seconds_remaining = self._interval_duration
        self._anchor(now)
        self._emit_interval_complete(completed)

    def _complete_session(self, now: datetime) -> None:
        self._is_running = False
        self._current_interval = self._total_intervals
        self._seconds_remaining = 0
        self._interval_started_at = None
        self._session_started_at = None

        if self._session is not None:
            self._session.end_time = now
            self._session.completed_intervals = self._total_intervals
            self._session.is_completed = True
        logger.debug("Session completed")

    def _emit_interval_complete(self, index: int) -> None:
        if self.on_interval_complete is not None:
            self.on_interval_complete(index)

    def _emit_session_complete(self) -> None:
        if self.on_session_complete is not None:
            self.on_session_complete()
