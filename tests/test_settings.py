"""Tests for settings defaults and JSON persistence."""

from __future__ import annotations

import json

import pytest

from intervalalarm.choices import AlarmSound, MusicTrack, ThemeColor
from intervalalarm.settings import Settings, load_settings, save_settings
from intervalalarm.sync.records import DeviceSource, PreferencesRecord


@pytest.fixture
def settings_path(tmp_path, monkeypatch):
    path = tmp_path / "settings.json"
    monkeypatch.setattr("intervalalarm.settings.SETTINGS_PATH", path)
    monkeypatch.setattr("intervalalarm.settings.APP_SUPPORT_DIR", tmp_path)
    return path


class TestSettingsDefaults:
    def test_timer(self):
        s = Settings()
        assert s.interval_duration == 180
        assert s.total_intervals == 10

    def test_audio(self):
        s = Settings()
        assert s.sound_a == AlarmSound.BELL
        assert s.sound_b == AlarmSound.CHIME
        assert s.music_a == MusicTrack.MUSIC_A
        assert s.music_b == MusicTrack.MUSIC_B
        assert s.sound_enabled is True

    def test_theme(self):
        assert Settings().theme_color == ThemeColor.PURPLE

    def test_toggles(self):
        s = Settings()
        assert s.notifications_enabled is True
        assert s.live_activity_enabled is True
        assert s.sync_enabled is True

    def test_durations_clamped(self):
        s = Settings(interval_duration=0, total_intervals=0)
        assert s.interval_duration == 1
        assert s.total_intervals == 1


class TestSettingsPersistence:
    def test_round_trip(self, settings_path):
        original = Settings(
            interval_duration=60, sound_b=AlarmSound.TONE, theme_color=ThemeColor.GREEN,
        )
        save_settings(original)
        loaded = load_settings()
        assert loaded == original

    def test_enums_stored_by_value(self, settings_path):
        save_settings(Settings(sound_a=AlarmSound.BEEP))
        data = json.loads(settings_path.read_text(encoding="utf-8"))
        assert data["sound_a"] == "Beep"
        assert data["music_a"] == "Music A"

    def test_missing_file_returns_defaults(self, settings_path):
        assert load_settings() == Settings()

    def test_invalid_json_returns_defaults(self, settings_path):
        settings_path.write_text("NOT VALID JSON", encoding="utf-8")
        assert load_settings() == Settings()

    def test_non_object_returns_defaults(self, settings_path):
        settings_path.write_text("[1, 2, 3]", encoding="utf-8")
        assert load_settings() == Settings()

    def test_bad_number_returns_defaults(self, settings_path):
        settings_path.write_text(json.dumps({"interval_duration": "soon"}), encoding="utf-8")
        assert load_settings().interval_duration == 180

    def test_extra_keys_ignored(self, settings_path):
        data = {"interval_duration": 120, "unknown_future_key": True}
        settings_path.write_text(json.dumps(data), encoding="utf-8")
        s = load_settings()
        assert s.interval_duration == 120
        assert not hasattr(s, "unknown_future_key")

    def test_unknown_enum_value_falls_back(self, settings_path):
        data = {"sound_a": "Kazoo", "sound_b": "Alert"}
        settings_path.write_text(json.dumps(data), encoding="utf-8")
        s = load_settings()
        assert s.sound_a == AlarmSound.BELL
        assert s.sound_b == AlarmSound.ALERT


class TestPreferences:
    def test_to_preferences(self):
        s = Settings(sound_a=AlarmSound.ALERT, theme_color=ThemeColor.RED)
        prefs = s.to_preferences(DeviceSource.WATCH_OS)
        assert prefs.sound_a == AlarmSound.ALERT
        assert prefs.sound_b == AlarmSound.CHIME
        assert prefs.theme_color == ThemeColor.RED
        assert prefs.device_source == DeviceSource.WATCH_OS

    def test_apply_preferences(self):
        s = Settings(interval_duration=60)
        s.apply_preferences(PreferencesRecord(
            sound_a=AlarmSound.TONE, music_a=MusicTrack.MUSIC_B, theme_color=ThemeColor.BLUE,
        ))
        assert s.sound_a == AlarmSound.TONE
        assert s.music_a == MusicTrack.MUSIC_B
        assert s.theme_color == ThemeColor.BLUE
        assert s.interval_duration == 60
