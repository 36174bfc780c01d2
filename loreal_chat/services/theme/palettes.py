"""Theme palettes.

Each theme maps style variable names to hex colors. ``classic`` matches the
fallback colors used by the contrast routines.
"""

from typing import Dict

DEFAULT_THEME = "classic"

THEMES: Dict[str, Dict[str, str]] = {
    "classic": {
        "--text": "#222222",
        "--muted": "#6b6b6b",
        "--brand-muted": "#f7f4ef",
        "--brand-black": "#000000",
        "--brand-gold": "#E3A535",
        "--user-text": "#FFFFFF",
        "--user-bg": "#000000",
        "--assistant-bg": "#f3f1ee",
        "--assistant-border": "#e6dfd3",
    },
    "rose": {
        "--text": "#8a6d72",
        "--muted": "#a08a8e",
        "--brand-muted": "#fbeff1",
        "--brand-black": "#2b1d20",
        "--brand-gold": "#d9a3ad",
        "--user-text": "#FFFFFF",
        "--user-bg": "#8c3b4b",
        "--assistant-bg": "#f6e4e8",
        "--assistant-border": "#ecc9d1",
    },
    "noir": {
        "--text": "#f2ece4",
        "--muted": "#a39e97",
        "--brand-muted": "#141414",
        "--brand-black": "#000000",
        "--brand-gold": "#E3A535",
        "--user-text": "#000000",
        "--user-bg": "#E3A535",
        "--assistant-bg": "#1f1d1b",
        "--assistant-border": "#3a3632",
    },
}


def get_palette(theme: str) -> Dict[str, str]:
    """Palette for ``theme``; unknown names get the default theme."""
    return dict(THEMES.get(theme) or THEMES[DEFAULT_THEME])


def is_known_theme(theme: str) -> bool:
    return theme in THEMES
