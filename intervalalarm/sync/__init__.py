"""Companion-device sync package."""

from .channel import SyncChannel, NullChannel, OutboxChannel
from .records import (
    DeviceSource,
    PreferencesMessage,
    PreferencesRecord,
    SessionCompletedMessage,
    SessionStartedMessage,
    SyncDecodeError,
    TimerSessionRecord,
    TimerStateMessage,
    decode_message,
    encode_message,
    message_from_json,
    message_to_json,
)

__all__ = [
    "SyncChannel",
    "NullChannel",
    "OutboxChannel",
    "DeviceSource",
    "PreferencesMessage",
    "PreferencesRecord",
    "SessionCompletedMessage",
    "SessionStartedMessage",
    "SyncDecodeError",
    "TimerSessionRecord",
    "TimerStateMessage",
    "decode_message",
    "encode_message",
    "message_from_json",
    "message_to_json",
]
