"""
Palette Studio Imaging Utilities
Handles upload validation and decoding images into pixel buffers.
"""
import io
import math
from typing import Optional, Tuple

import numpy as np
from fastapi import HTTPException, UploadFile
from PIL import Image, UnidentifiedImageError

from palette_studio.config import config

# Leading bytes of the formats Pillow is asked to decode
_MAGIC_BYTES = (
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
)


def validate_file_upload(file: UploadFile) -> None:
    """
    Validate uploaded file metadata before reading it.

    Args:
        file: FastAPI UploadFile object

    Raises:
        HTTPException: 400 for oversized files, 415 for unsupported formats
    """
    # file.size might be None for some clients
    if getattr(file, "size", None) and file.size > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    if file.content_type not in config.SUPPORTED_MIME_TYPES:
        raise HTTPException(
            status_code=415,
            detail=f"Unsupported media type. Supported: {', '.join(config.SUPPORTED_MIME_TYPES)}"
        )

    if file.filename and "." in file.filename:
        ext = "." + file.filename.lower().rsplit(".", 1)[-1]
        if ext not in config.SUPPORTED_EXTENSIONS:
            raise HTTPException(
                status_code=415,
                detail=f"Unsupported file extension. Supported: {', '.join(sorted(config.SUPPORTED_EXTENSIONS))}"
            )


def validate_magic_bytes(file_bytes: bytes) -> str:
    """
    Validate file magic bytes to ensure it's actually an image.

    Returns:
        Detected MIME type

    Raises:
        HTTPException: 400 for invalid/corrupt files
    """
    if len(file_bytes) < 12:
        raise HTTPException(status_code=400, detail="File too small or corrupt")

    for magic, mime in _MAGIC_BYTES:
        if file_bytes.startswith(magic):
            return mime
    if file_bytes[:4] == b"RIFF" and file_bytes[8:12] == b"WEBP":
        return "image/webp"

    raise HTTPException(
        status_code=400,
        detail="Invalid image file. Magic bytes don't match supported formats."
    )


def scaled_size(width: int, height: int, target_width: Optional[int] = None) -> Tuple[int, int]:
    """
    Size of the sampling canvas: fixed width, height scaled to keep aspect ratio.
    """
    if target_width is None:
        target_width = config.SAMPLE_WIDTH
    new_height = max(1, math.floor(height * target_width / width + 0.5))
    return target_width, new_height


def decode_to_pixel_buffer(file_bytes: bytes, target_width: Optional[int] = None) -> np.ndarray:
    """
    Decode image bytes into an (H, W, 4) RGBA uint8 pixel buffer.

    The image is drawn onto a canvas `target_width` pixels wide (aspect ratio
    preserved) before its pixels are read back.

    Raises:
        HTTPException: 400 for decode errors or out-of-range dimensions
    """
    try:
        pil_image = Image.open(io.BytesIO(file_bytes))
        pil_image.load()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        raise HTTPException(status_code=400, detail=f"Failed to decode image: {str(e)}")

    width, height = pil_image.size
    if width < 1 or height < 1 or max(width, height) > config.MAX_SOURCE_EDGE:
        raise HTTPException(
            status_code=400,
            detail=f"Image dimensions {width}x{height} out of range. Maximum edge: {config.MAX_SOURCE_EDGE}px"
        )

    if pil_image.mode != "RGBA":
        pil_image = pil_image.convert("RGBA")

    canvas = pil_image.resize(scaled_size(width, height, target_width), Image.LANCZOS)
    return np.asarray(canvas, dtype=np.uint8)


async def read_pixel_buffer(file: UploadFile) -> Tuple[np.ndarray, int, int]:
    """
    Safely read an uploaded image and decode it into a pixel buffer.

    Returns:
        Tuple of (pixel buffer, canvas width, canvas height)

    Raises:
        HTTPException: 400/415 for invalid uploads
    """
    validate_file_upload(file)

    try:
        file_bytes = await file.read()
    except OSError as e:
        raise HTTPException(status_code=400, detail=f"Failed to read file: {str(e)}")

    if len(file_bytes) > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    validate_magic_bytes(file_bytes)

    pixels = decode_to_pixel_buffer(file_bytes)
    height, width = pixels.shape[:2]
    return pixels, width, height
