from __future__ import annotations

"""Color space conversions between hex, RGB and HSL.

All functions are pure. Conversions that read a hex string return ``None``
on malformed input instead of raising, so callers can treat a bad color as
"ignore this item".
"""

import math
import re
from typing import NamedTuple, Optional


class RGB(NamedTuple):
    """8-bit sRGB channels in [0, 255]."""

    r: int
    g: int
    b: int


class HSL(NamedTuple):
    """Hue in degrees [0, 360), saturation and lightness in percent [0, 100]."""

    h: float
    s: float
    l: float


BLACK = "#000000"
WHITE = "#ffffff"

# Weights are the ITU-R BT.601 luma coefficients.
LUMA_WEIGHTS = (0.299, 0.587, 0.114)
CONTRAST_THRESHOLD = 0.5

_HEX_RE = re.compile(r"#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})", re.IGNORECASE)


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def normalize_hue(h: float) -> float:
    """Normalize hue angle into [0, 360)."""
    return (h % 360.0 + 360.0) % 360.0


def hex_to_rgb(hex_str: str) -> Optional[RGB]:
    """Parse ``#rrggbb`` / ``rrggbb`` (any case) into RGB, or None."""
    if not isinstance(hex_str, str):
        return None
    m = _HEX_RE.fullmatch(hex_str)
    if m is None:
        return None
    return RGB(int(m.group(1), 16), int(m.group(2), 16), int(m.group(3), 16))


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Format channels as lowercase ``#rrggbb``.

    Each channel is masked to its low byte, so out-of-range integers still
    yield a valid hex string.
    """
    return f"#{int(r) & 0xFF:02x}{int(g) & 0xFF:02x}{int(b) & 0xFF:02x}"


def normalize_hex(hex_str: str) -> Optional[str]:
    """Return the canonical lowercase ``#rrggbb`` form, or None if malformed."""
    rgb = hex_to_rgb(hex_str)
    if rgb is None:
        return None
    return rgb_to_hex(*rgb)


def hex_to_hsl(hex_str: str) -> Optional[HSL]:
    """Convert a hex color to HSL, or None if the hex is malformed."""
    rgb = hex_to_rgb(hex_str)
    if rgb is None:
        return None
    r = rgb.r / 255.0
    g = rgb.g / 255.0
    b = rgb.b / 255.0
    mx = max(r, g, b)
    mn = min(r, g, b)
    light = (mx + mn) / 2.0

    if mx == mn:
        return HSL(0.0, 0.0, light * 100.0)

    d = mx - mn
    sat = d / (2.0 - mx - mn) if light > 0.5 else d / (mx + mn)
    if mx == r:
        hue = (g - b) / d + (6.0 if g < b else 0.0)
    elif mx == g:
        hue = (b - r) / d + 2.0
    else:
        hue = (r - g) / d + 4.0
    hue /= 6.0
    return HSL(hue * 360.0, sat * 100.0, light * 100.0)


def _hue_to_rgb(p: float, q: float, t: float) -> float:
    t = t % 1.0
    if t < 1.0 / 6.0:
        return p + (q - p) * 6.0 * t
    if t < 1.0 / 2.0:
        return q
    if t < 2.0 / 3.0:
        return p + (q - p) * (2.0 / 3.0 - t) * 6.0
    return p


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def hsl_to_hex(h: float, s: float, l: float) -> str:
    """Convert HSL to hex.

    ``h`` wraps around modulo 360. ``s`` and ``l`` are percentages and are
    not clamped here; callers clamp them to [0, 100] first.
    """
    h = h / 360.0
    s = s / 100.0
    l = l / 100.0
    q = l * (1.0 + s) if l < 0.5 else l + s - l * s
    p = 2.0 * l - q
    r = _round_half_up(_hue_to_rgb(p, q, h + 1.0 / 3.0) * 255.0)
    g = _round_half_up(_hue_to_rgb(p, q, h) * 255.0)
    b = _round_half_up(_hue_to_rgb(p, q, h - 1.0 / 3.0) * 255.0)
    return rgb_to_hex(r, g, b)


def luminance(hex_str: str) -> Optional[float]:
    """Relative luma in [0, 1] using :data:`LUMA_WEIGHTS`."""
    rgb = hex_to_rgb(hex_str)
    if rgb is None:
        return None
    wr, wg, wb = LUMA_WEIGHTS
    return (wr * rgb.r + wg * rgb.g + wb * rgb.b) / 255.0


def get_contrast_color(hex_str: str) -> str:
    """Black for light backgrounds, white for dark ones.

    Malformed input falls back to black.
    """
    lum = luminance(hex_str)
    if lum is None:
        return BLACK
    return BLACK if lum > CONTRAST_THRESHOLD else WHITE


__all__ = [
    "RGB",
    "HSL",
    "BLACK",
    "WHITE",
    "LUMA_WEIGHTS",
    "CONTRAST_THRESHOLD",
    "clamp",
    "normalize_hue",
    "hex_to_rgb",
    "rgb_to_hex",
    "normalize_hex",
    "hex_to_hsl",
    "hsl_to_hex",
    "luminance",
    "get_contrast_color",
]
