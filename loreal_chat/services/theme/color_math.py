"""Hex color helpers and WCAG contrast math."""

import math
import re
from typing import Optional, Sequence, Tuple

RGB = Tuple[int, int, int]

_HEX_RE = re.compile(r"^(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def hex_to_rgb(hex_color: str) -> RGB:
    """Parse ``#rgb`` / ``#rrggbb`` (leading ``#`` optional) into channels.

    Raises:
        ValueError: If the value is not a 3- or 6-digit hex color
    """
    if not isinstance(hex_color, str):
        raise ValueError(f"Not a hex color: {hex_color!r}")

    h = hex_color.strip().lstrip("#")
    if not _HEX_RE.match(h):
        raise ValueError(f"Not a hex color: {hex_color!r}")

    if len(h) == 3:
        h = "".join(c * 2 for c in h)

    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def rgb_to_hex(rgb: Sequence[int]) -> str:
    r, g, b = rgb
    return f"#{r:02x}{g:02x}{b:02x}"


def _linearize(channel: float) -> float:
    if channel <= 0.03928:
        return channel / 12.92
    return ((channel + 0.055) / 1.055) ** 2.4


def relative_luminance(rgb: Sequence[int]) -> float:
    """Relative luminance per WCAG 2.0."""
    r, g, b = (_linearize(v / 255) for v in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(hex_a: str, hex_b: str) -> Optional[float]:
    """WCAG contrast ratio between two colors, or None if either is unparseable."""
    try:
        a = relative_luminance(hex_to_rgb(hex_a))
        b = relative_luminance(hex_to_rgb(hex_b))
    except ValueError:
        return None

    lighter, darker = max(a, b), min(a, b)
    return (lighter + 0.05) / (darker + 0.05)


def _clamp(value: float, low: int = 0, high: int = 255) -> int:
    # Half-up rounding
    return max(low, min(high, int(math.floor(value + 0.5))))


def lerp_color(hex_a: str, hex_b: str, t: float) -> str:
    """Move ``hex_a`` toward ``hex_b`` by fraction ``t``."""
    a = hex_to_rgb(hex_a)
    b = hex_to_rgb(hex_b)
    return rgb_to_hex([_clamp(a[i] + (b[i] - a[i]) * t) for i in range(3)])


def darken_towards_black(hex_color: str, step: float) -> str:
    return lerp_color(hex_color, "#000000", step)
