"""Tests for display helpers and the user-selectable choices."""

from intervalalarm.choices import (
    AlarmSound, MusicTrack, ThemeColor, next_choice, DEFAULT_THEME,
)
from intervalalarm.timer.display import (
    format_time_remaining, status_text, session_summary,
)


class TestFormatTimeRemaining:
    def test_full_interval(self):
        assert format_time_remaining(180) == "3:00"

    def test_seconds_are_zero_padded(self):
        assert format_time_remaining(65) == "1:05"

    def test_under_a_minute(self):
        assert format_time_remaining(5) == "0:05"

    def test_zero(self):
        assert format_time_remaining(0) == "0:00"

    def test_negative_clamped(self):
        assert format_time_remaining(-3) == "0:00"

    def test_long_durations_keep_counting_minutes(self):
        assert format_time_remaining(1800) == "30:00"


class TestStatusText:
    def test_ready(self):
        assert status_text(False, 0, 10, in_session=False) == "Ready to start"

    def test_running(self):
        assert status_text(True, 0, 10, in_session=True) == "Interval 1 active"
        assert status_text(True, 9, 10, in_session=True) == "Interval 10 active"

    def test_paused(self):
        assert status_text(False, 4, 10, in_session=True) == "Paused"

    def test_completed(self):
        assert status_text(False, 10, 10, in_session=False) == "Session completed!"

    def test_guesses_session_from_index(self):
        assert status_text(False, 0, 10) == "Ready to start"
        assert status_text(False, 3, 10) == "Paused"


class TestSessionSummary:
    def test_production(self):
        assert session_summary(180, 10) == "30min • 3min intervals • Alternating sounds"

    def test_seconds_intervals(self):
        assert session_summary(45, 4) == "3min • 45s intervals • Alternating sounds"


class TestChoices:
    def test_sound_filenames(self):
        assert [s.filename for s in AlarmSound] == ["bell", "chime", "beep", "tone", "alert"]

    def test_music_filenames(self):
        assert MusicTrack.MUSIC_A.filename == "musicA"
        assert MusicTrack.MUSIC_B.filename == "musicB"

    def test_display_names(self):
        assert AlarmSound.BELL.value == "Bell"
        assert MusicTrack.MUSIC_B.value == "Music B"

    def test_next_choice_cycles(self):
        assert next_choice(AlarmSound.BELL) == AlarmSound.CHIME
        assert next_choice(AlarmSound.ALERT) == AlarmSound.BELL
        assert next_choice(MusicTrack.MUSIC_B) == MusicTrack.MUSIC_A

    def test_every_theme_has_colours(self):
        for theme in ThemeColor:
            assert theme.hex.startswith("#")
            start, end = theme.gradient
            assert start == theme.hex
            assert end.startswith("#")

    def test_default_theme(self):
        assert DEFAULT_THEME == ThemeColor.PURPLE
