"""
Dominant-color extraction.

Implements the extraction pipeline: strided pixel sampling, per-channel
quantization into buckets of 32, frequency counting over the quantized
colors and ranking by descending frequency. Exact ranking is not the goal;
the stride trades precision for bounded work on large images.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

import numpy as np
from loguru import logger

from .conversion import RGB, rgb_to_hex
from .errors import InvalidInputError

# Every SAMPLE_STRIDE-th pixel of the flattened buffer is examined
SAMPLE_STRIDE = 4

# Channel quantization step; 256 (the bucket above 224) is clamped to 255
BUCKET_SIZE = 32


@dataclass
class ExtractionResult:
    """Outcome of one extraction pass, most frequent color first."""
    colors: List[str] = field(default_factory=list)
    counts: List[int] = field(default_factory=list)
    sampled_pixels: int = 0
    distinct_colors: int = 0


def quantize_channel(value: float) -> int:
    """
    Snap a channel value to the nearest multiple of BUCKET_SIZE.

    Halves round up. Values that are already quantized are returned unchanged.
    """
    return min(255, int(math.floor(value / BUCKET_SIZE + 0.5)) * BUCKET_SIZE)


def quantize_pixels(rgb: np.ndarray) -> np.ndarray:
    """Vectorized quantize_channel over an (N, 3) array."""
    buckets = np.floor(rgb.astype(np.float64) / BUCKET_SIZE + 0.5) * BUCKET_SIZE
    return np.minimum(buckets, 255).astype(np.int64)


def as_rgb_array(pixel_buffer: Any) -> np.ndarray:
    """
    Normalize a pixel buffer into an (N, 3) array of RGB channels.

    Accepts a flat RGBA sequence (canvas layout), an (N, 4) or (H, W, 4)
    array, or their three-channel equivalents. Alpha is dropped.

    Raises:
        InvalidInputError: If the buffer is absent, empty, malformed or
            holds channel values outside [0, 255]
    """
    if pixel_buffer is None:
        raise InvalidInputError("Pixel buffer is required")

    try:
        pixels = np.asarray(pixel_buffer)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Pixel buffer is malformed: {e}") from e

    if pixels.size == 0:
        raise InvalidInputError("Pixel buffer is empty")

    if pixels.dtype.kind not in "iuf":
        raise InvalidInputError(f"Pixel buffer must hold numeric channels, got dtype {pixels.dtype}")

    if pixels.ndim == 1:
        if pixels.size % 4 != 0:
            raise InvalidInputError(
                f"Flat pixel buffer length {pixels.size} is not a multiple of 4 (RGBA)"
            )
        pixels = pixels.reshape(-1, 4)
    elif pixels.ndim in (2, 3):
        if pixels.shape[-1] not in (3, 4):
            raise InvalidInputError(
                f"Pixel buffer must have 3 or 4 channels, got shape {pixels.shape}"
            )
        pixels = pixels.reshape(-1, pixels.shape[-1])
    else:
        raise InvalidInputError(f"Unsupported pixel buffer shape {pixels.shape}")

    rgb = pixels[:, :3]
    if rgb.dtype.kind == "f":
        if not np.isfinite(rgb).all():
            raise InvalidInputError("Pixel channel values must be finite")
        if (rgb != np.floor(rgb)).any():
            raise InvalidInputError("Pixel channel values must be integers")

    if rgb.min() < 0 or rgb.max() > 255:
        raise InvalidInputError("Pixel channel values must be within [0, 255]")

    return rgb


def sample_pixels(rgb: np.ndarray, stride: int = SAMPLE_STRIDE) -> np.ndarray:
    """Take every stride-th pixel, starting with the first."""
    if isinstance(stride, bool) or not isinstance(stride, (int, np.integer)) or stride < 1:
        raise InvalidInputError(f"Sampling stride must be a positive integer, got {stride!r}")
    return rgb[::stride]


def _pack(rgb: RGB) -> int:
    r, g, b = rgb
    return (r << 16) | (g << 8) | b


def build_frequency_table(pixel_buffer: Any, stride: int = SAMPLE_STRIDE) -> Dict[RGB, int]:
    """
    Count sampled pixels per quantized color.

    Args:
        pixel_buffer: Pixel buffer in any layout accepted by as_rgb_array
        stride: Sampling stride

    Returns:
        Mapping of quantized (r, g, b) to occurrence count
    """
    sampled = sample_pixels(as_rgb_array(pixel_buffer), stride)
    quantized = quantize_pixels(sampled)

    packed = (quantized[:, 0] << 16) | (quantized[:, 1] << 8) | quantized[:, 2]
    keys, counts = np.unique(packed, return_counts=True)

    return {
        (int(key >> 16) & 0xFF, int(key >> 8) & 0xFF, int(key) & 0xFF): int(count)
        for key, count in zip(keys, counts)
    }


def rank_colors(frequency_table: Dict[RGB, int]) -> List[Tuple[RGB, int]]:
    """
    Order quantized colors by descending count.

    Equal counts are ordered by packed RGB value so repeated runs agree.
    """
    return sorted(frequency_table.items(), key=lambda item: (-item[1], _pack(item[0])))


def _validate_count(count: Any) -> int:
    if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
        raise InvalidInputError(f"Color count must be an integer, got {count!r}")
    if count < 1:
        raise InvalidInputError(f"Color count must be positive, got {count}")
    return int(count)


def extract_palette(pixel_buffer: Any, count: int, stride: int = SAMPLE_STRIDE) -> ExtractionResult:
    """
    Extract the most frequent quantized colors from a pixel buffer.

    Args:
        pixel_buffer: Pixel buffer in any layout accepted by as_rgb_array
        count: Number of colors wanted (any N >= 1)
        stride: Sampling stride, SAMPLE_STRIDE unless a caller needs a full scan

    Returns:
        ExtractionResult with at most `count` colors. Images with fewer
        distinct quantized colors yield a shorter palette, never padding.

    Raises:
        InvalidInputError: For an absent/empty buffer or a non-positive count
    """
    count = _validate_count(count)
    frequency_table = build_frequency_table(pixel_buffer, stride)
    ranked = rank_colors(frequency_table)
    top = ranked[:count]

    result = ExtractionResult(
        colors=[rgb_to_hex(*rgb) for rgb, _ in top],
        counts=[n for _, n in top],
        sampled_pixels=sum(frequency_table.values()),
        distinct_colors=len(frequency_table)
    )

    logger.debug(
        f"Extracted {len(result.colors)}/{count} colors from {result.sampled_pixels} samples "
        f"({result.distinct_colors} distinct buckets)"
    )
    return result


def extract_dominant_colors(pixel_buffer: Any, count: int) -> List[str]:
    """
    Return the `count` most frequent quantized colors as hex strings.

    Most frequent first; length is min(count, distinct quantized colors).
    """
    return extract_palette(pixel_buffer, count).colors
