"""
Swatch Rendering Module

Creates PNG swatch strips for palette previews: one square chip per color,
laid out left to right in palette order.
"""

import base64
import io
from typing import List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw
from loguru import logger

from .conversion import hex_to_rgb
from .errors import InvalidInputError


def create_color_chip(color_hex: str, chip_size: int = 40) -> Image.Image:
    """
    Create a single color chip image.

    Args:
        color_hex: Hex color to render
        chip_size: Size of the square chip in pixels

    Returns:
        PIL Image of the color chip
    """
    return Image.new("RGB", (chip_size, chip_size), hex_to_rgb(color_hex))


def create_swatch_strip(
    hex_colors: Sequence[str],
    chip_size: int = 40,
    spacing: int = 0,
    highlight_index: Optional[int] = None,
    border_color: Tuple[int, int, int] = (0, 0, 0),
    border_width: int = 2
) -> Image.Image:
    """
    Create a horizontal strip of color chips.

    Args:
        hex_colors: Palette in display order
        chip_size: Size of each chip in pixels
        spacing: Gap between chips in pixels (filled white)
        highlight_index: Index of a chip to outline, e.g. the harmony base
        border_color: RGB color of the outline
        border_width: Outline width in pixels

    Returns:
        PIL Image of the strip
    """
    if not hex_colors:
        raise InvalidInputError("Empty hex_colors list provided")

    num_chips = len(hex_colors)
    strip_width = num_chips * chip_size + (num_chips - 1) * spacing
    strip = Image.new("RGB", (strip_width, chip_size), (255, 255, 255))

    x_pos = 0
    for hex_color in hex_colors:
        strip.paste(create_color_chip(hex_color, chip_size), (x_pos, 0))
        x_pos += chip_size + spacing

    if highlight_index is not None and 0 <= highlight_index < num_chips:
        x_start = highlight_index * (chip_size + spacing)
        draw = ImageDraw.Draw(strip)
        draw.rectangle(
            (x_start, 0, x_start + chip_size - 1, chip_size - 1),
            outline=border_color,
            width=border_width
        )

    logger.debug(f"Rendered swatch strip with {num_chips} chips, chip_size={chip_size}")
    return strip


def render_swatch_strip(hex_colors: List[str], chip_size: int = 40,
                        highlight_index: Optional[int] = None) -> str:
    """
    Render a swatch strip and encode it as base64 PNG.

    Returns:
        Base64-encoded PNG image string
    """
    strip = create_swatch_strip(hex_colors, chip_size=chip_size, highlight_index=highlight_index)
    buffer = io.BytesIO()
    strip.save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode("ascii")
