# app/settings.py
from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


class Difficulty(str, Enum):
    SHORT = "short"
    LONG = "long"


class ThemeName(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class SettingKind(str, Enum):
    TIME = "time"
    DIFFICULTY = "difficulty"
    THEME = "theme"


# -------- defaults --------
TIME_OPTIONS = (15, 30, 60, 120)
DEFAULT_DURATION = 30
DEFAULT_DIFFICULTY = Difficulty.SHORT
DEFAULT_THEME = ThemeName.DARK
WORDS_PER_PASSAGE = 50


@dataclass(frozen=True)
class GameSettings:
    duration: int = DEFAULT_DURATION
    difficulty: Difficulty = DEFAULT_DIFFICULTY
    theme: ThemeName = DEFAULT_THEME

    def with_duration(self, seconds: int) -> GameSettings:
        return replace(self, duration=int(seconds))

    def with_difficulty(self, difficulty: Difficulty) -> GameSettings:
        return replace(self, difficulty=Difficulty(difficulty))

    def with_theme(self, theme: ThemeName) -> GameSettings:
        return replace(self, theme=ThemeName(theme))


@dataclass(frozen=True)
class SettingsChange:
    """One user-selected option, e.g. ``SettingsChange(SettingKind.TIME, 60)``."""

    kind: SettingKind
    value: Any
