"""
Palette export serializations: CSS custom properties and a JSON array.
"""

import json
from typing import List, Sequence

from .conversion import hex_to_rgb, rgb_to_hex
from .errors import InvalidInputError

EXPORT_FILENAME = "color-palette.json"


def normalize_palette(palette: Sequence[str]) -> List[str]:
    """
    Canonicalize every palette entry to #rrggbb.

    Raises:
        InvalidInputError: If the palette is empty or holds a malformed color
    """
    if not palette:
        raise InvalidInputError("Palette must contain at least one color")
    return [rgb_to_hex(*hex_to_rgb(color)) for color in palette]


def to_css_variables(palette: Sequence[str]) -> str:
    """
    Render a palette as CSS custom properties, one per line.

    Example:
        --color-1: #4f8cff;
        --color-2: #ff6f61;
    """
    colors = normalize_palette(palette)
    return "\n".join(f"--color-{i}: {color};" for i, color in enumerate(colors, start=1))


def to_json(palette: Sequence[str]) -> str:
    """Render a palette as a JSON array of hex strings, indented by two spaces."""
    return json.dumps(normalize_palette(palette), indent=2)
