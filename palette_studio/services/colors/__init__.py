"""
Palette Studio Colors Module

Provides color conversion, dominant-color extraction and harmony generation.
All functions here are pure: they take pixel buffers or hex strings and
return freshly built values.
"""

from .errors import InvalidInputError
from .conversion import (
    rgb_to_hex, hex_to_rgb, rgb_to_hsl, hsl_to_rgb,
    hex_to_hsl, hsl_to_hex, normalize_hue, rotate_hue
)
from .extraction import extract_dominant_colors, extract_palette
from .harmony import HarmonyKind, generate_harmony, generate_all_harmonies

__version__ = "1.0.0"
