"""Timer package.

The Qt host lives in :mod:`intervalalarm.timer.driver` and is imported
from there directly; this package only exposes the Qt-free core.
"""

from .core import (
    IntervalSessionController,
    TimerState,
    INTERVAL_DURATION,
    TOTAL_INTERVALS,
    TOTAL_DURATION,
)
from .display import format_time_remaining, status_text, session_summary

__all__ = [
    "IntervalSessionController",
    "TimerState",
    "INTERVAL_DURATION",
    "TOTAL_INTERVALS",
    "TOTAL_DURATION",
    "format_time_remaining",
    "status_text",
    "session_summary",
]
