"""Allow running Interval Alarm as a module: python -m intervalalarm.

Runs one session headless on a ``QCoreApplication``, printing the
status line every second.  Audio, notifications and the live activity
are printed instead of played or shown.
"""

import logging
import signal
import sys

import click
from PyQt6.QtCore import QCoreApplication

from .database.db import init_db
from .database.history import session_stats
from .settings import load_settings
from .sync.channel import OutboxChannel
from .timer.display import session_summary
from .timer.driver import IntervalTimer

logger = logging.getLogger(__name__)


def _run(interval_seconds: int | None, intervals: int | None, db_enabled: bool) -> int:
    settings = load_settings()
    if interval_seconds is not None:
        settings.interval_duration = max(1, interval_seconds)
    if intervals is not None:
        settings.total_intervals = max(1, intervals)

    if db_enabled:
        init_db()

    app = QCoreApplication(sys.argv)
    app.setApplicationName("IntervalAlarm")
    app.setOrganizationName("IntervalAlarm")

    outbox = OutboxChannel()
    timer = IntervalTimer(settings=settings, db_enabled=db_enabled, sync_channel=outbox)
    core = timer.controller

    def on_tick(_remaining: int) -> None:
        click.echo(f"\r{core.status_text:<24} {core.time_remaining:>6}  {core.progress:6.1%}", nl=False)

    def on_interval(index: int) -> None:
        click.echo(f"\nInterval {index + 1} done")

    def on_complete(data: dict) -> None:
        click.echo(f"\nSession complete: {data['completed_intervals']} intervals")
        app.quit()

    timer.tick.connect(on_tick)
    timer.interval_completed.connect(on_interval)
    timer.session_completed.connect(on_complete)
    timer.alert_requested.connect(lambda s: click.echo(f"\n♪ alert: {s.value} ({s.filename})"))
    timer.music_requested.connect(lambda m: click.echo(f"♫ music: {m.value} ({m.filename})"))
    timer.notification_requested.connect(lambda t, b: click.echo(f"[{t}] {b}"))

    # Ctrl-C stops (and saves) the session instead of killing the loop.
    def on_sigint(*_args) -> None:
        session = timer.stop()
        if session is not None:
            click.echo(f"\nStopped after {session.completed_intervals} interval(s)")
        app.quit()

    signal.signal(signal.SIGINT, on_sigint)

    click.echo(session_summary(settings.interval_duration, settings.total_intervals))
    click.echo(f"theme: {settings.theme_color.value} {settings.theme_color.hex}")
    timer.start_session()
    code = app.exec()

    if len(outbox):
        logger.info("%d sync message(s) left unsent", len(outbox))

    if db_enabled:
        stats = session_stats()
        click.echo(
            f"{stats.completed_sessions}/{stats.total_sessions} sessions completed, "
            f"{stats.focus_minutes} min total"
        )
    return code


@click.command()
@click.option("--interval-seconds", type=int, default=None, help="Length of one interval.")
@click.option("--intervals", type=int, default=None, help="Number of intervals.")
@click.option("--no-db", is_flag=True, help="Do not record the session.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
def main(interval_seconds, intervals, no_db, verbose) -> None:
    """Run one interval session in the terminal."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    sys.exit(_run(interval_seconds, intervals, not no_db))


if __name__ == "__main__":
    main()
