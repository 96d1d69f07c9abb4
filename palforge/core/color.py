# ==============================================================================
# COLOR MODEL
# ==============================================================================
# RGBA <-> HSL conversion for single palette entries.
#
# Conventions used throughout PalForge:
#   - RGBA colors are 4-tuples of ints in 0..255
#   - Hue is normalized to a full turn: 0.0 <= h < 1.0 (NOT degrees)
#   - Saturation and lightness are in 0.0..1.0
#
# The conversion is built on colorsys (HLS ordering), with 8-bit rounding on
# the way back so that from_hsl(*to_hsl(c)) == c for every 8-bit color.
#
# Usage:
#   h, s, l = to_hsl((200, 100, 50, 255))
#   color = from_hsl((h + 0.5) % 1.0, s, l, 255)
# ==============================================================================

import colorsys
from typing import Tuple


# RGBA color as stored in a palette entry
RGBA = Tuple[int, int, int, int]


def clamp(value: float) -> float:
    """Restrict a scalar to the closed interval [0, 1]."""
    if value < 0.0:
        return 0.0
    if value > 1.0:
        return 1.0
    return value


def wrap_hue(hue: float) -> float:
    """
    Wrap a hue expressed in turns into [0, 1).

    Float modulo can return exactly 1.0 for tiny negative inputs
    (e.g. -1e-17 % 1.0), so that case is folded back to 0.0.
    """
    hue = hue % 1.0
    if hue >= 1.0:
        hue = 0.0
    return hue


def wrap_degrees(degrees: float) -> float:
    """Wrap an angle in degrees into [0, 360)."""
    degrees = degrees % 360.0
    if degrees >= 360.0:
        degrees = 0.0
    return degrees


def to_byte(value: float) -> int:
    """Convert a 0..1 channel value to an 8-bit int with rounding."""
    return max(0, min(255, int(round(value * 255.0))))


def to_hsl(color: RGBA) -> Tuple[float, float, float]:
    """
    Convert an RGBA color to (hue, saturation, lightness).

    Args:
        color: RGBA tuple (alpha is ignored)

    Returns:
        Tuple of (hue in [0,1), saturation in [0,1], lightness in [0,1])

    Example:
        >>> to_hsl((255, 0, 0, 255))
        (0.0, 1.0, 0.5)
    """
    r, g, b = color[0] / 255.0, color[1] / 255.0, color[2] / 255.0
    h, l, s = colorsys.rgb_to_hls(r, g, b)
    return wrap_hue(h), s, l


def from_hsl(hue: float, saturation: float, lightness: float,
             alpha: int = 255) -> RGBA:
    """
    Build an RGBA color from hue/saturation/lightness.

    Args:
        hue:        Hue in turns (wrapped into [0,1))
        saturation: Saturation, clamped to [0,1]
        lightness:  Lightness, clamped to [0,1]
        alpha:      Alpha byte carried through unchanged

    Returns:
        RGBA tuple
    """
    r, g, b = colorsys.hls_to_rgb(wrap_hue(hue), clamp(lightness), clamp(saturation))
    return (to_byte(r), to_byte(g), to_byte(b), alpha)


def from_hex(argb: str) -> RGBA:
    """
    Parse an "#AARRGGBB" (or "#RRGGBB") hex string into an RGBA tuple.

    Example:
        >>> from_hex("#FFE99F91")
        (233, 159, 145, 255)
    """
    value = argb.lstrip('#')
    if len(value) == 6:
        value = 'FF' + value
    if len(value) != 8:
        raise ValueError(f"Expected #AARRGGBB color, got {argb!r}")

    a = int(value[0:2], 16)
    r = int(value[2:4], 16)
    g = int(value[4:6], 16)
    b = int(value[6:8], 16)
    return (r, g, b, a)


def luminance(color: RGBA) -> float:
    """Perceived luminance (ITU-R BT.601 weights) in [0, 1]."""
    return (0.299 * color[0] + 0.587 * color[1] + 0.114 * color[2]) / 255.0
