"""Formatting helpers for the countdown display."""

from __future__ import annotations


def format_time_remaining(seconds: int) -> str:
    """``180`` → ``"3:00"``, ``5`` → ``"0:05"``.  Negative input shows 0:00."""
    seconds = max(0, seconds)
    return f"{seconds // 60}:{seconds % 60:02d}"


def status_text(
    is_running: bool,
    current_interval: int,
    total_intervals: int,
    in_session: bool | None = None,
) -> str:
    """Human status line.

    *in_session* says whether a session is loaded (running or paused).
    When omitted it is guessed from ``current_interval > 0``, which
    cannot tell "paused in the first interval" from "never started".
    """
    if in_session is None:
        in_session = current_interval > 0
    if current_interval >= total_intervals:
        return "Session completed!"
    if not in_session:
        return "Ready to start"
    if not is_running:
        return "Paused"
    return f"Interval {current_interval + 1} active"


def session_summary(interval_duration: int, total_intervals: int) -> str:
    """Header line, e.g. ``"30min • 3min intervals • Alternating sounds"``."""
    return (
        f"{_fmt_minutes(interval_duration * total_intervals)} • "
        f"{_fmt_minutes(interval_duration)} intervals • Alternating sounds"
    )


def _fmt_minutes(seconds: int) -> str:
    if seconds % 60 == 0:
        return f"{seconds // 60}min"
    return f"{seconds}s"
