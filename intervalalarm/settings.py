"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/IntervalAlarm/settings.json

Usage::

    settings = load_settings()
    settings.sound_a = AlarmSound.TONE
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from enum import Enum
from pathlib import Path

from .choices import (
    AlarmSound,
    MusicTrack,
    ThemeColor,
    DEFAULT_SOUND_A,
    DEFAULT_SOUND_B,
    DEFAULT_MUSIC_A,
    DEFAULT_MUSIC_B,
    DEFAULT_THEME,
)
from .sync.records import DeviceSource, PreferencesRecord
from .timer.core import INTERVAL_DURATION, TOTAL_INTERVALS

logger = logging.getLogger(__name__)

# Reuse the app-support directory from db.py
APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "IntervalAlarm"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    interval_duration: int = INTERVAL_DURATION   # seconds
    total_intervals: int = TOTAL_INTERVALS

    # ── audio ─────────────────────────────────────────────────────────
    sound_a: AlarmSound = DEFAULT_SOUND_A
    sound_b: AlarmSound = DEFAULT_SOUND_B
    music_a: MusicTrack = DEFAULT_MUSIC_A
    music_b: MusicTrack = DEFAULT_MUSIC_B
    sound_enabled: bool = True

    # ── appearance ────────────────────────────────────────────────────
    theme_color: ThemeColor = DEFAULT_THEME

    # ── notifications / companions ────────────────────────────────────
    notifications_enabled: bool = True
    live_activity_enabled: bool = True
    sync_enabled: bool = True

    def __post_init__(self) -> None:
        self.interval_duration = max(1, int(self.interval_duration))
        self.total_intervals = max(1, int(self.total_intervals))

    def to_preferences(
        self, device_source: DeviceSource = DeviceSource.DESKTOP,
    ) -> PreferencesRecord:
        return PreferencesRecord(
            sound_a=self.sound_a,
            sound_b=self.sound_b,
            music_a=self.music_a,
            music_b=self.music_b,
            theme_color=self.theme_color,
            device_source=device_source,
        )

    def apply_preferences(self, prefs: PreferencesRecord) -> None:
        """Take sound/music/theme choices received from another device."""
        self.sound_a = prefs.sound_a
        self.sound_b = prefs.sound_b
        self.music_a = prefs.music_a
        self.music_b = prefs.music_b
        self.theme_color = prefs.theme_color


_ENUM_FIELDS: dict[str, type[Enum]] = {
    "sound_a": AlarmSound,
    "sound_b": AlarmSound,
    "music_a": MusicTrack,
    "music_b": MusicTrack,
    "theme_color": ThemeColor,
}


def _coerce(data: dict) -> dict:
    """Turn stored enum values back into members, dropping unknown ones
    so the dataclass default applies."""
    out = dict(data)
    for key, enum_cls in _ENUM_FIELDS.items():
        if key not in out:
            continue
        try:
            out[key] = enum_cls(out[key])
        except ValueError:
            logger.warning("Ignoring unknown %s %r in settings", key, out[key])
            del out[key]
    return out


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**_coerce(filtered))
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Could not read %s (%s); using defaults", SETTINGS_PATH, exc)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    data = {
        k: v.value if isinstance(v, Enum) else v
        for k, v in asdict(settings).items()
    }
    SETTINGS_PATH.write_text(
        json.dumps(data, indent=2) + "\n",
        encoding="utf-8",
    )
