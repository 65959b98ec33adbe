"""
Color Conversion

Conversions between the three color representations used by the core:
hex strings (#rrggbb), RGB triples (0-255) and HSL triples
(hue in degrees [0, 360), saturation and lightness in [0, 100]).
"""

import colorsys
import math
import re
from typing import Tuple

from .errors import InvalidInputError

RGB = Tuple[int, int, int]
HSL = Tuple[float, float, float]

_HEX_RE = re.compile(r"^#?([0-9A-Fa-f]{6})$")


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp_channel(value: float) -> int:
    """Round a channel value to the nearest integer (halves up) and clamp it to [0, 255]."""
    return int(clamp(math.floor(value + 0.5), 0, 255))


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """
    Convert RGB channels to a lowercase hex color.

    Args:
        r, g, b: Channel values; clamped to [0, 255] and rounded

    Returns:
        Hex color string in format #rrggbb
    """
    return "#{:02x}{:02x}{:02x}".format(clamp_channel(r), clamp_channel(g), clamp_channel(b))


def hex_to_rgb(hex_color: str) -> RGB:
    """
    Convert hex color string to RGB tuple.

    Args:
        hex_color: Color as #rrggbb or rrggbb, either case

    Returns:
        RGB tuple (r, g, b) with values 0-255

    Raises:
        InvalidInputError: If the string is not six hex digits
    """
    if not isinstance(hex_color, str):
        raise InvalidInputError(f"Invalid hex color format: {hex_color!r}")

    match = _HEX_RE.match(hex_color.strip())
    if match is None:
        raise InvalidInputError(f"Invalid hex color format: {hex_color!r}")

    digits = match.group(1)
    return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))


def normalize_hue(h: float) -> float:
    """Wrap a hue in degrees into [0, 360)."""
    h = h % 360.0
    # -1e-17 % 360 rounds up to 360.0
    if h >= 360.0:
        h -= 360.0
    return h


def rotate_hue(h: float, degrees: float) -> float:
    """
    Rotate hue by specified degrees.

    Args:
        h: Original hue in degrees
        degrees: Rotation in degrees (can be negative)

    Returns:
        Rotated hue in [0, 360) with proper wraparound
    """
    return normalize_hue(h + degrees)


def rgb_to_hsl(r: float, g: float, b: float) -> HSL:
    """
    Convert RGB (0-255) to HSL.

    Achromatic colors (max == min) get hue 0 and saturation 0.

    Returns:
        Tuple of (h, s, l) with h in [0, 360), s and l in [0, 100]
    """
    h, l, s = colorsys.rgb_to_hls(r / 255.0, g / 255.0, b / 255.0)
    return normalize_hue(h * 360.0), s * 100.0, l * 100.0


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """
    Convert HSL to RGB (0-255).

    Hue wraps modulo 360; saturation and lightness are clamped to [0, 100].
    Each output channel is rounded to the nearest integer and clamped.
    """
    h = normalize_hue(h)
    s = clamp(s, 0.0, 100.0)
    l = clamp(l, 0.0, 100.0)

    r, g, b = colorsys.hls_to_rgb(h / 360.0, l / 100.0, s / 100.0)
    return clamp_channel(r * 255), clamp_channel(g * 255), clamp_channel(b * 255)


def hex_to_hsl(hex_color: str) -> HSL:
    """Convert a hex color to an HSL triple."""
    return rgb_to_hsl(*hex_to_rgb(hex_color))


def hsl_to_hex(h: float, s: float, l: float) -> str:
    """Convert an HSL triple to a hex color."""
    return rgb_to_hex(*hsl_to_rgb(h, s, l))
