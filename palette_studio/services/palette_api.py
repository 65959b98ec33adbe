"""
Palette API Orchestrator

Coordinates the request-level flow around the pure color core: upload
decoding, extraction, harmony generation, optional swatch rendering,
structured logging and metrics.
"""

import time
from typing import Optional

from fastapi import UploadFile

from palette_studio.config import config
from palette_studio.schemas import ExtractResponse, HarmonyRequest, HarmonyResponse
from palette_studio.services.colors.conversion import hex_to_rgb, rgb_to_hex
from palette_studio.services.colors.errors import InvalidInputError
from palette_studio.services.colors.extraction import extract_palette
from palette_studio.services.colors.harmony import BASE_POSITIONS, generate_harmony, parse_harmony_kind
from palette_studio.services.colors.swatches import render_swatch_strip
from palette_studio.services.imaging import read_pixel_buffer
from palette_studio.utils.ids import generate_request_id
from palette_studio.utils.logging import get_logger
from palette_studio.utils.metrics import get_metrics

logger = get_logger()


def _record(operation: str, duration_ms: float, palette_size: Optional[int] = None):
    if not config.METRICS_ENABLED:
        return
    metrics = get_metrics()
    metrics.increment_counter(f"{operation}_requests_total")
    metrics.record_timing(operation, duration_ms)
    if palette_size is not None:
        metrics.record_palette_size(palette_size)


def _record_failure(operation: str, error: Exception):
    if config.METRICS_ENABLED:
        get_metrics().increment_failure_count(operation, type(error).__name__)


def _chip_size() -> int:
    if config.validate_chip_size(config.SWATCH_CHIP_SIZE):
        return config.SWATCH_CHIP_SIZE
    logger.warning("Swatch chip size out of range, using default",
                   extra={"chip_size": config.SWATCH_CHIP_SIZE})
    return 40


async def handle_extract(file: UploadFile, count: int, include_swatch: bool = False) -> ExtractResponse:
    """
    Decode an uploaded image and extract its dominant colors.

    Args:
        file: Uploaded image file
        count: Number of colors wanted
        include_swatch: Whether to render a PNG strip of the palette

    Returns:
        ExtractResponse with the palette, most frequent first

    Raises:
        HTTPException: For unreadable uploads
        InvalidInputError: For an invalid count or an empty pixel buffer
    """
    request_id = generate_request_id("extract")
    start_time = time.time()

    logger.info("Starting palette extraction", extra={"request_id": request_id, "count": count})

    try:
        if not config.validate_color_count(count):
            raise InvalidInputError(
                f"count must be between {config.MIN_COLOR_COUNT} and {config.MAX_COLOR_COUNT}"
            )
        pixels, width, height = await read_pixel_buffer(file)
        decode_time = time.time() - start_time

        extract_start = time.time()
        result = extract_palette(pixels, count)
        extract_time = time.time() - extract_start
    except Exception as e:
        _record_failure("extract", e)
        logger.warning(f"Palette extraction failed: {str(e)}", extra={"request_id": request_id})
        raise

    swatch_b64 = None
    if include_swatch and result.colors:
        swatch_b64 = render_swatch_strip(result.colors, chip_size=_chip_size())

    total_time = time.time() - start_time
    _record("extract", total_time * 1000, palette_size=len(result.colors))

    logger.info("Palette extraction completed successfully",
                extra={
                    "request_id": request_id,
                    "dims": f"{width}x{height}",
                    "count": count,
                    "returned": len(result.colors),
                    "sampled_pixels": result.sampled_pixels,
                    "distinct_colors": result.distinct_colors,
                    "ms_decode": decode_time * 1000,
                    "ms_extract": extract_time * 1000,
                    "ms_total": total_time * 1000,
                    "result": "ok"
                })

    return ExtractResponse(
        width=width,
        height=height,
        count=count,
        sampled_pixels=result.sampled_pixels,
        distinct_colors=result.distinct_colors,
        palette=result.colors,
        counts=result.counts,
        swatch_png_b64=swatch_b64
    )


def handle_harmony(request: HarmonyRequest, include_swatch: bool = False) -> HarmonyResponse:
    """
    Generate a harmony palette for a base color or the first swatch of a palette.

    Raises:
        InvalidInputError: For a malformed base color
    """
    request_id = generate_request_id("harmony")
    start_time = time.time()
    base_hex = request.resolve_base()
    kind = parse_harmony_kind(request.kind)

    try:
        colors = generate_harmony(base_hex, kind)
    except InvalidInputError as e:
        _record_failure("harmony", e)
        logger.warning(f"Harmony generation failed: {str(e)}", extra={"request_id": request_id})
        raise

    swatch_b64 = None
    if include_swatch:
        swatch_b64 = render_swatch_strip(colors, chip_size=_chip_size(),
                                         highlight_index=BASE_POSITIONS[kind])

    total_time = time.time() - start_time
    _record("harmony", total_time * 1000)
    logger.info("Harmony generation completed",
                extra={
                    "request_id": request_id,
                    "base_hex": base_hex,
                    "kind": kind.value,
                    "ms_total": total_time * 1000
                })

    return HarmonyResponse(
        base_hex=rgb_to_hex(*hex_to_rgb(base_hex)),
        kind=kind,
        palette=colors,
        swatch_png_b64=swatch_b64
    )
