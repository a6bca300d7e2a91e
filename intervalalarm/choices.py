"""User-selectable sounds, music tracks and theme colours.

Interval 1, 3, 5 ... play choice "A"; interval 2, 4, 6 ... play choice
"B".  The enum *values* are the display names shown on the picker
buttons and are also what gets written to ``settings.json``.

``ThemeColor.hex``/``gradient`` colour the progress ring, and
``next_choice`` is what a picker button calls when tapped.  The
``filename`` stems name the bundled audio resources.
"""

from __future__ import annotations

from enum import Enum
from typing import TypeVar


class AlarmSound(Enum):
    BELL = "Bell"
    CHIME = "Chime"
    BEEP = "Beep"
    TONE = "Tone"
    ALERT = "Alert"

    @property
    def filename(self) -> str:
        return self.value.lower()


class MusicTrack(Enum):
    MUSIC_A = "Music A"
    MUSIC_B = "Music B"

    @property
    def filename(self) -> str:
        return "musicA" if self is MusicTrack.MUSIC_A else "musicB"


class ThemeColor(Enum):
    BLUE = "Blue"
    PURPLE = "Purple"
    PINK = "Pink"
    ORANGE = "Orange"
    GREEN = "Green"
    RED = "Red"

    @property
    def hex(self) -> str:
        return _THEME_HEX[self]

    @property
    def gradient(self) -> tuple[str, str]:
        return _THEME_GRADIENTS[self]


_THEME_HEX: dict[ThemeColor, str] = {
    ThemeColor.BLUE: "#0A84FF",
    ThemeColor.PURPLE: "#BF5AF2",
    ThemeColor.PINK: "#FF375F",
    ThemeColor.ORANGE: "#FF9F0A",
    ThemeColor.GREEN: "#30D158",
    ThemeColor.RED: "#FF453A",
}

# start → end colour of the progress ring
_THEME_GRADIENTS: dict[ThemeColor, tuple[str, str]] = {
    ThemeColor.BLUE: ("#0A84FF", "#64D2FF"),      # blue → cyan
    ThemeColor.PURPLE: ("#BF5AF2", "#FF375F"),    # purple → pink
    ThemeColor.PINK: ("#FF375F", "#FF9F0A"),      # pink → orange
    ThemeColor.ORANGE: ("#FF9F0A", "#FFD60A"),    # orange → yellow
    ThemeColor.GREEN: ("#30D158", "#66D4CF"),     # green → mint
    ThemeColor.RED: ("#FF453A", "#FF9F0A"),       # red → orange
}

DEFAULT_SOUND_A = AlarmSound.BELL
DEFAULT_SOUND_B = AlarmSound.CHIME
DEFAULT_MUSIC_A = MusicTrack.MUSIC_A
DEFAULT_MUSIC_B = MusicTrack.MUSIC_B
DEFAULT_THEME = ThemeColor.PURPLE


E = TypeVar("E", bound=Enum)


def next_choice(current: E) -> E:
    """The member after *current* in declaration order, wrapping around."""
    members = list(type(current))
    return members[(members.index(current) + 1) % len(members)]
