"""Shared test helpers for Interval Alarm."""

from datetime import datetime, timedelta


class SignalCollector:
    """Utility to capture pyqtSignal emissions (or plain callbacks) into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeClock:
    """Callable stand-in for ``datetime.now`` that only moves when told to."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 1, 5, 9, 0, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now


def run_ticks(controller, clock: FakeClock, n: int) -> None:
    """Deliver *n* ticks, moving the clock one second before each."""
    for _ in range(n):
        clock.advance(1)
        controller.tick()
