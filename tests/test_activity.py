"""Tests for live-activity content and refresh throttling."""

from intervalalarm.activity import ActivityState, ActivityThrottle
from intervalalarm.database.models import AlarmSession
from intervalalarm.timer.core import IntervalSessionController

from helpers import run_ticks


def _state(interval=0, remaining=180, running=True):
    return ActivityState(
        current_interval=interval,
        total_intervals=10,
        time_remaining=f"{remaining // 60}:{remaining % 60:02d}",
        seconds_remaining=remaining,
        is_running=running,
    )


class TestActivityState:
    def test_from_controller_snapshot(self, clock):
        c = IntervalSessionController(clock=clock)
        c.start_session(AlarmSession.new())
        run_ticks(c, clock, 200)
        state = ActivityState.from_snapshot(c.snapshot())
        assert state == ActivityState(
            current_interval=1, total_intervals=10,
            time_remaining="2:40", seconds_remaining=160, is_running=True,
        )

    def test_label(self):
        assert _state(interval=2, remaining=161).label == "Interval 3/10 · 2:41"

    def test_label_caps_at_total(self):
        assert _state(interval=10, remaining=0, running=False).label == "Interval 10/10 · 0:00"


class TestActivityThrottle:
    def test_first_state_always_refreshes(self):
        assert ActivityThrottle().should_refresh(_state()) is True

    def test_refreshes_every_n_ticks(self):
        t = ActivityThrottle(every=5)
        t.should_refresh(_state(remaining=180))
        results = [t.should_refresh(_state(remaining=180 - i)) for i in range(1, 11)]
        assert results == [False] * 4 + [True] + [False] * 4 + [True]

    def test_interval_change_refreshes_immediately(self):
        t = ActivityThrottle(every=100)
        t.should_refresh(_state(interval=0, remaining=2))
        assert t.should_refresh(_state(interval=0, remaining=1)) is False
        assert t.should_refresh(_state(interval=1, remaining=180)) is True

    def test_pause_refreshes_immediately(self):
        t = ActivityThrottle(every=100)
        t.should_refresh(_state(remaining=50))
        assert t.should_refresh(_state(remaining=50, running=False)) is True

    def test_reset(self):
        t = ActivityThrottle(every=100)
        t.should_refresh(_state())
        t.reset()
        assert t.should_refresh(_state()) is True
