"""Theme colors and contrast correction."""

from .color_math import (
    contrast_ratio,
    darken_towards_black,
    hex_to_rgb,
    lerp_color,
    relative_luminance,
    rgb_to_hex,
)
from .contrast import ContrastCorrector, run_contrast_audit
from .manager import ThemeManager
from .palettes import DEFAULT_THEME, THEMES

__all__ = [
    "contrast_ratio",
    "darken_towards_black",
    "hex_to_rgb",
    "lerp_color",
    "relative_luminance",
    "rgb_to_hex",
    "ContrastCorrector",
    "run_contrast_audit",
    "ThemeManager",
    "DEFAULT_THEME",
    "THEMES",
]
