"""Qt host for the interval session controller.

``IntervalTimer`` is what the rest of the app talks to.  It owns the
one-second ``QTimer`` that feeds ``tick()``, reconciles with the wall
clock whenever the application becomes active again, and turns the
controller's callbacks into Qt signals for the audio, notification,
live-activity and sync collaborators.  Everything runs on the Qt event
loop, so ticks and reconciliation never overlap.

Signals
-------
tick(seconds_remaining: int)
    Emitted every second while running.
state_changed(new_state: TimerState)
    Emitted on every state transition.
interval_completed(index: int)
    The interval at *index* (0-based) finished.
session_completed(data: dict)
    The last interval finished.  Keys: ``session_id``, ``start_time``,
    ``end_time``, ``completed_intervals``, ``total_intervals``,
    ``interval_duration``.
alert_requested(sound: AlarmSound)
    Play this alert now (start of every interval).
music_requested(track: MusicTrack)
    Switch background music to this track.
notification_requested(title: str, body: str)
    Show a local notification.
activity_updated(state: ActivityState | None)
    Refresh the live activity; ``None`` ends it.
remote_state_received(message: TimerStateMessage)
    A companion device reported its countdown.
remote_session_started(message: SessionStartedMessage)
remote_session_completed(message: SessionCompletedMessage)
    A companion device started or finished a session.
preferences_received(settings: Settings)
    Sound/music/theme choices arrived from a companion device and have
    been applied.  The host decides whether to save them.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable

from PyQt6.QtCore import QCoreApplication, QObject, Qt, QTimer, pyqtSignal
from PyQt6.QtGui import QGuiApplication

from ..activity import ActivityState, ActivityThrottle
from ..database.models import AlarmSession
from ..settings import Settings
from ..sync.channel import NullChannel, SyncChannel
from ..sync.records import (
    DeviceSource,
    PreferencesMessage,
    SessionCompletedMessage,
    SessionStartedMessage,
    SyncDecodeError,
    SyncMessage,
    TimerStateMessage,
    decode_message,
)
from .core import IntervalSessionController, TimerState

logger = logging.getLogger(__name__)

_DISCONNECTED = NullChannel()


class IntervalTimer(QObject):
    """Drives an :class:`IntervalSessionController` from the Qt event loop."""

    tick = pyqtSignal(int)
    state_changed = pyqtSignal(object)
    interval_completed = pyqtSignal(int)
    session_completed = pyqtSignal(object)
    alert_requested = pyqtSignal(object)
    music_requested = pyqtSignal(object)
    notification_requested = pyqtSignal(str, str)
    activity_updated = pyqtSignal(object)
    remote_state_received = pyqtSignal(object)
    remote_session_started = pyqtSignal(object)
    remote_session_completed = pyqtSignal(object)
    preferences_received = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        settings: Settings | None = None,
        db_enabled: bool = True,
        sync_channel: SyncChannel | None = None,
        device_source: DeviceSource = DeviceSource.DESKTOP,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        super().__init__(parent)

        self._settings: Settings = settings or Settings()
        self._db_enabled = db_enabled
        self._channel: SyncChannel = (
            sync_channel if sync_channel is not None else NullChannel()
        )
        self._device_source = device_source

        self._core = IntervalSessionController(
            interval_duration=self._settings.interval_duration,
            total_intervals=self._settings.total_intervals,
            clock=clock,
        )
        self._core.on_tick = self._on_core_tick
        self._core.on_interval_complete = self._on_core_interval_complete
        self._core.on_session_complete = self._on_core_session_complete
        self._apply_preferences()

        self._throttle = ActivityThrottle()
        self._last_state: TimerState = self._core.state

        # ── Qt timer ──────────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(1000)
        self._qt_timer.timeout.connect(self._core.tick)

        app = QCoreApplication.instance()
        if isinstance(app, QGuiApplication):
            app.applicationStateChanged.connect(self.handle_application_state)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def controller(self) -> IntervalSessionController:
        return self._core

    @property
    def state(self) -> TimerState:
        return self._core.state

    @property
    def is_running(self) -> bool:
        return self._core.is_running

    @property
    def remaining(self) -> int:
        return self._core.seconds_remaining

    @property
    def current_interval(self) -> int:
        return self._core.current_interval

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def sync_channel(self) -> SyncChannel:
        """Where outgoing sync messages go; a null channel while sync is off."""
        if self._settings.sync_enabled:
            return self._channel
        return _DISCONNECTED

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start_session(self) -> AlarmSession:
        """Start a fresh session.  A session already in progress is
        stopped (and saved) first."""
        if self._core.state in (TimerState.RUNNING, TimerState.PAUSED):
            self.stop()

        self._core.configure(
            interval_duration=self._settings.interval_duration,
            total_intervals=self._settings.total_intervals,
        )
        session = self._new_session()
        self._core.start_session(session)
        logger.info(
            "Session %s started (%d x %ds)",
            session.id, self._core.total_intervals, self._core.interval_duration,
        )

        self._throttle.reset()
        self._qt_timer.start()
        self._request_interval_audio()
        self._send(SessionStartedMessage(
            session_id=session.id, start_time=session.start_time,
        ))
        self._publish_activity()
        self._emit_state()
        return session

    def pause(self) -> None:
        if not self._core.is_running:
            return
        self._qt_timer.stop()
        self._core.pause()
        self._after_run_state_change()

    def resume(self) -> None:
        if self._core.state != TimerState.PAUSED:
            return
        self._core.resume()
        self._qt_timer.start()
        self._after_run_state_change()

    def stop(self) -> AlarmSession | None:
        """Stop and save the session as it stands."""
        self._qt_timer.stop()
        session = self._core.stop()
        if session is not None:
            logger.info(
                "Session %s stopped after %d interval(s)",
                session.id, session.completed_intervals,
            )
            self._persist(session)
            self._send_timer_state()
        self._throttle.reset()
        self.activity_updated.emit(None)
        self._emit_state()
        return session

    def reconcile(self, now: datetime | None = None) -> None:
        """Catch up with the wall clock (app back from the background)."""
        if not self._core.is_running:
            return
        self._core.reconcile_after_resume(now)
        if self._core.is_running:
            self.tick.emit(self._core.seconds_remaining)
            self._publish_activity()

    def handle_application_state(self, state: Qt.ApplicationState) -> None:
        if state == Qt.ApplicationState.ApplicationActive:
            logger.debug("Application active, reconciling timer")
            self.reconcile()

    def apply_settings(self, settings: Settings) -> None:
        """Sound/music choices apply immediately; interval length and
        count apply from the next session."""
        self._settings = settings
        self._apply_preferences()
        if self._core.state in (TimerState.IDLE, TimerState.COMPLETED):
            self._core.configure(
                interval_duration=settings.interval_duration,
                total_intervals=settings.total_intervals,
            )
            self._emit_state()
        self._send(PreferencesMessage(
            preferences=settings.to_preferences(self._device_source),
        ))

    def receive(self, envelope: dict[str, Any]) -> SyncMessage | None:
        """Handle a message envelope from a companion device.

        Preferences are applied to the current settings straight away;
        timer-state and session messages are passed on as signals.
        Malformed envelopes are logged and dropped.  Returns the decoded
        message, or ``None`` if it was dropped.
        """
        if not self._settings.sync_enabled:
            logger.debug("Sync disabled, ignoring incoming message")
            return None
        try:
            message = decode_message(envelope)
        except SyncDecodeError as exc:
            logger.warning("Dropping undecodable sync message: %s", exc)
            return None

        if isinstance(message, PreferencesMessage):
            self._settings.apply_preferences(message.preferences)
            self._apply_preferences()
            logger.info(
                "Applied preferences from %s", message.preferences.device_source.value,
            )
            self.preferences_received.emit(self._settings)
        elif isinstance(message, TimerStateMessage):
            self.remote_state_received.emit(message)
        elif isinstance(message, SessionStartedMessage):
            self.remote_session_started.emit(message)
        elif isinstance(message, SessionCompletedMessage):
            self.remote_session_completed.emit(message)
        return message

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — controller callbacks
    # ══════════════════════════════════════════════════════════════════

    def _on_core_tick(self) -> None:
        self.tick.emit(max(0, self._core.seconds_remaining))
        if self._settings.live_activity_enabled:
            state = ActivityState.from_snapshot(self._core.snapshot())
            if self._throttle.should_refresh(state):
                self.activity_updated.emit(state)

    def _on_core_interval_complete(self, index: int) -> None:
        logger.debug("Interval %d complete", index + 1)
        self.interval_completed.emit(index)
        if self._core.state != TimerState.RUNNING:
            return  # last interval; session completion follows
        self._request_interval_audio()
        self._publish_activity()
        self._send_timer_state()

    def _on_core_session_complete(self) -> None:
        self._qt_timer.stop()
        session = self._core.current_session
        logger.info("Session %s complete", getattr(session, "id", None))

        if session is not None:
            self._persist(session)
            self._send(SessionCompletedMessage(
                session_id=session.id,
                completed_intervals=session.completed_intervals,
                end_time=session.end_time,
            ))

        self.session_completed.emit({
            "session_id": getattr(session, "id", None),
            "start_time": getattr(session, "start_time", None),
            "end_time": getattr(session, "end_time", None),
            "completed_intervals": self._core.total_intervals,
            "total_intervals": self._core.total_intervals,
            "interval_duration": self._core.interval_duration,
        })

        if self._settings.notifications_enabled:
            total = self._core.total_intervals * self._core.interval_duration
            length = f"{total // 60}-minute" if total % 60 == 0 else f"{total}-second"
            self.notification_requested.emit(
                "Session Complete!",
                f"Your {length} interval session has finished.",
            )
        self.activity_updated.emit(None)
        self._emit_state()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — helpers
    # ══════════════════════════════════════════════════════════════════

    def _new_session(self) -> AlarmSession:
        if self._db_enabled:
            from ..database.history import create_session

            return create_session(
                total_intervals=self._core.total_intervals,
                device_source=self._device_source.value,
            )
        return AlarmSession.new(
            total_intervals=self._core.total_intervals,
            device_source=self._device_source.value,
        )

    def _persist(self, session: AlarmSession) -> None:
        if not self._db_enabled:
            return
        from ..database.history import save_session

        save_session(session)

    def _apply_preferences(self) -> None:
        s = self._settings
        self._core.sound_a = s.sound_a
        self._core.sound_b = s.sound_b
        self._core.music_a = s.music_a
        self._core.music_b = s.music_b

    def _request_interval_audio(self) -> None:
        if not self._settings.sound_enabled:
            return
        self.alert_requested.emit(self._core.current_alert_sound())
        self.music_requested.emit(self._core.current_music())

    def _publish_activity(self) -> None:
        if not self._settings.live_activity_enabled:
            return
        state = ActivityState.from_snapshot(self._core.snapshot())
        self._throttle.should_refresh(state)  # keeps the throttle in step
        self.activity_updated.emit(state)

    def _send(self, message: SyncMessage) -> None:
        self.sync_channel.send(message)

    def _send_timer_state(self) -> None:
        self._send(TimerStateMessage(
            current_interval=self._core.current_interval,
            seconds_remaining=self._core.seconds_remaining,
            is_running=self._core.is_running,
            session_id=getattr(self._core.current_session, "id", None),
        ))

    def _after_run_state_change(self) -> None:
        self._publish_activity()
        self._send_timer_state()
        self._emit_state()

    def _emit_state(self) -> None:
        new_state = self._core.state
        if new_state != self._last_state:
            self._last_state = new_state
            self.state_changed.emit(new_state)
