"""Records exchanged with companion devices (phone, watch) and cloud sync.

Every record serialises to a JSON-safe ``dict`` (datetimes as ISO-8601
strings, enums by value).  Messages travel inside a one-key envelope
whose key names the message kind::

    {"timerState": {"current_interval": 3, ...}}

Decoding anything malformed raises :class:`SyncDecodeError`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, asdict, fields
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar

from ..choices import AlarmSound, MusicTrack, ThemeColor


class SyncDecodeError(ValueError):
    """A sync payload could not be turned back into a record."""


class DeviceSource(Enum):
    IOS = "iOS"
    WATCH_OS = "watchOS"
    DESKTOP = "desktop"


# ── value coercion ───────────────────────────────────────────────────────


def _encode_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


def _parse_datetime(value: Any) -> datetime | None:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError) as exc:
        raise SyncDecodeError(f"bad timestamp {value!r}") from exc


def _parse_enum(enum_cls: type[Enum], value: Any) -> Enum:
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise SyncDecodeError(f"unknown {enum_cls.__name__} {value!r}") from exc


def _require(data: dict[str, Any], *keys: str) -> None:
    missing = [k for k in keys if k not in data]
    if missing:
        raise SyncDecodeError(f"missing field(s): {', '.join(missing)}")


def _to_dict(record: Any) -> dict[str, Any]:
    return {f.name: _encode_value(getattr(record, f.name)) for f in fields(record)}


# ═══════════════════════════════════════════════════════════════════════════
#  PERSISTENT RECORDS
# ═══════════════════════════════════════════════════════════════════════════


@dataclass
class TimerSessionRecord:
    """Portable copy of an :class:`~intervalalarm.database.models.AlarmSession`."""

    id: str
    start_time: datetime
    device_source: DeviceSource
    end_time: datetime | None = None
    total_intervals: int = 10
    completed_intervals: int = 0
    is_completed: bool = False
    last_modified: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_session(cls, session: Any, device_source: DeviceSource) -> TimerSessionRecord:
        return cls(
            id=session.id,
            start_time=session.start_time,
            end_time=session.end_time,
            total_intervals=session.total_intervals,
            completed_intervals=session.completed_intervals,
            is_completed=session.is_completed,
            device_source=device_source,
            last_modified=datetime.now(),
        )

    def apply_to(self, session: Any) -> None:
        session.id = self.id
        session.start_time = self.start_time
        session.end_time = self.end_time
        session.total_intervals = self.total_intervals
        session.completed_intervals = self.completed_intervals
        session.is_completed = self.is_completed

    def to_dict(self) -> dict[str, Any]:
        return _to_dict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TimerSessionRecord:
        _require(data, "id", "start_time", "device_source")
        return cls(
            id=str(data["id"]),
            start_time=_parse_datetime(data["start_time"]),
            end_time=_parse_datetime(data.get("end_time")),
            total_intervals=int(data.get("total_intervals", 10)),
            completed_intervals=int(data.get("completed_intervals", 0)),
            is_completed=bool(data.get("is_completed", False)),
            device_source=_parse_enum(DeviceSource, data["device_source"]),
            last_modified=_parse_datetime(data.get("last_modified")) or datetime.now(),
        )


@dataclass
class PreferencesRecord:
    sound_a: AlarmSound = AlarmSound.BELL
    sound_b: AlarmSound = AlarmSound.CHIME
    music_a: MusicTrack = MusicTrack.MUSIC_A
    music_b: MusicTrack = MusicTrack.MUSIC_B
    theme_color: ThemeColor = ThemeColor.PURPLE
    device_source: DeviceSource = DeviceSource.DESKTOP
    last_modified: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        return _to_dict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PreferencesRecord:
        _require(data, "sound_a", "sound_b", "music_a", "music_b", "theme_color")
        return cls(
            sound_a=_parse_enum(AlarmSound, data["sound_a"]),
            sound_b=_parse_enum(AlarmSound, data["sound_b"]),
            music_a=_parse_enum(MusicTrack, data["music_a"]),
            music_b=_parse_enum(MusicTrack, data["music_b"]),
            theme_color=_parse_enum(ThemeColor, data["theme_color"]),
            device_source=_parse_enum(
                DeviceSource, data.get("device_source", DeviceSource.DESKTOP.value),
            ),
            last_modified=_parse_datetime(data.get("last_modified")) or datetime.now(),
        )


# ═══════════════════════════════════════════════════════════════════════════
#  MESSAGES
# ═══════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class TimerStateMessage:
    KIND: ClassVar[str] = "timerState"

    current_interval: int
    seconds_remaining: int
    is_running: bool
    session_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TimerStateMessage:
        _require(data, "current_interval", "seconds_remaining", "is_running")
        return cls(
            current_interval=int(data["current_interval"]),
            seconds_remaining=int(data["seconds_remaining"]),
            is_running=bool(data["is_running"]),
            session_id=data.get("session_id"),
        )


@dataclass(frozen=True)
class SessionStartedMessage:
    KIND: ClassVar[str] = "sessionStarted"

    session_id: str
    start_time: datetime

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SessionStartedMessage:
        _require(data, "session_id", "start_time")
        return cls(
            session_id=str(data["session_id"]),
            start_time=_parse_datetime(data["start_time"]),
        )


@dataclass(frozen=True)
class SessionCompletedMessage:
    KIND: ClassVar[str] = "sessionCompleted"

    session_id: str
    completed_intervals: int
    end_time: datetime

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SessionCompletedMessage:
        _require(data, "session_id", "completed_intervals", "end_time")
        return cls(
            session_id=str(data["session_id"]),
            completed_intervals=int(data["completed_intervals"]),
            end_time=_parse_datetime(data["end_time"]),
        )


@dataclass(frozen=True)
class PreferencesMessage:
    KIND: ClassVar[str] = "preferences"

    preferences: PreferencesRecord

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PreferencesMessage:
        return cls(preferences=PreferencesRecord.from_dict(data))


SyncMessage = (
    TimerStateMessage | SessionStartedMessage | SessionCompletedMessage | PreferencesMessage
)

_MESSAGE_TYPES: dict[str, type] = {
    cls.KIND: cls
    for cls in (
        TimerStateMessage,
        SessionStartedMessage,
        SessionCompletedMessage,
        PreferencesMessage,
    )
}


def encode_message(message: SyncMessage) -> dict[str, dict[str, Any]]:
    if isinstance(message, PreferencesMessage):
        payload = message.preferences.to_dict()
    else:
        payload = {k: _encode_value(v) for k, v in asdict(message).items()}
    return {message.KIND: payload}


def decode_message(envelope: dict[str, Any]) -> SyncMessage:
    if not isinstance(envelope, dict) or len(envelope) != 1:
        raise SyncDecodeError("envelope must hold exactly one message")
    (kind, payload), = envelope.items()
    msg_cls = _MESSAGE_TYPES.get(kind)
    if msg_cls is None:
        raise SyncDecodeError(f"unknown message kind {kind!r}")
    if not isinstance(payload, dict):
        raise SyncDecodeError(f"{kind} payload is not an object")
    try:
        return msg_cls.from_dict(payload)
    except SyncDecodeError:
        raise
    except (TypeError, ValueError) as exc:
        raise SyncDecodeError(f"bad {kind} payload: {exc}") from exc


def message_to_json(message: SyncMessage) -> str:
    return json.dumps(encode_message(message))


def message_from_json(raw: str | bytes) -> SyncMessage:
    try:
        envelope = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SyncDecodeError(f"not JSON: {exc}") from exc
    return decode_message(envelope)
