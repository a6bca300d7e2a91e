"""Live-activity content (lock screen / menu bar / widget).

A live activity is refreshed far less often than the timer ticks:
:class:`ActivityThrottle` lets a refresh through when the interval or
the run state changes, and otherwise once every *every* ticks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ActivityState:
    current_interval: int
    total_intervals: int
    time_remaining: str
    seconds_remaining: int
    is_running: bool

    @classmethod
    def from_snapshot(cls, snapshot: dict[str, Any]) -> ActivityState:
        return cls(
            current_interval=snapshot["current_interval"],
            total_intervals=snapshot["total_intervals"],
            time_remaining=snapshot["time_remaining"],
            seconds_remaining=snapshot["seconds_remaining"],
            is_running=snapshot["is_running"],
        )

    @property
    def label(self) -> str:
        """``"Interval 3/10 · 2:41"``"""
        shown = min(self.current_interval + 1, self.total_intervals)
        return f"Interval {shown}/{self.total_intervals} · {self.time_remaining}"


class ActivityThrottle:
    def __init__(self, every: int = 10) -> None:
        self._every = max(1, every)
        self._last: ActivityState | None = None
        self._since_refresh = 0

    def should_refresh(self, state: ActivityState) -> bool:
        last = self._last
        if (
            last is None
            or last.current_interval != state.current_interval
            or last.is_running != state.is_running
        ):
            self._mark(state)
            return True
        self._since_refresh += 1
        if self._since_refresh >= self._every:
            self._mark(state)
            return True
        return False

    def reset(self) -> None:
        self._last = None
        self._since_refresh = 0

    def _mark(self, state: ActivityState) -> None:
        self._last = state
        self._since_refresh = 0
