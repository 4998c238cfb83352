# app/themes.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict

from app.settings import ThemeName


@dataclass(frozen=True)
class Theme:
    name: str
    background: str
    primary: str
    secondary: str
    accent: str
    correct: str
    error: str


# -------- Built-in themes --------
THEMES: Dict[ThemeName, Theme] = {
    ThemeName.DARK: Theme(
        name="Dark",
        background="#0f1115",
        primary="#e5e7eb",
        secondary="#6b7280",
        accent="#eab308",
        correct="#22c55e",
        error="#ef4444",
    ),
    ThemeName.LIGHT: Theme(
        name="Light",
        background="#fafafa",
        primary="#111111",
        secondary="#6b6b6b",
        accent="#ca8a04",
        correct="#15803d",
        error="#dc2626",
    ),
}


def theme_for(name: ThemeName | str) -> Theme:
    """Palette for a theme name; unknown names fall back to dark."""
    try:
        return THEMES[ThemeName(name)]
    except ValueError:
        return THEMES[ThemeName.DARK]


def stylesheet(theme: Theme) -> str:
    return f"""
        QWidget {{ background: {theme.background}; color: {theme.primary}; }}
        QLabel#lblTimer, QLabel#lblBest {{ color: {theme.secondary}; }}
        QLabel#lblWPM {{ color: {theme.accent}; }}
        QPushButton#OptionBtn {{
            background: transparent;
            border: 1px solid {theme.secondary};
            border-radius: 9px;
            padding: 6px 12px;
        }}
        QPushButton#OptionBtn:checked {{ border-color: {theme.accent}; color: {theme.accent}; }}
        """
