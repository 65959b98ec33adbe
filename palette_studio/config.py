"""
Palette Studio Configuration
Manages environment variables and defaults for the palette service.
"""
import os
from typing import List


class Config:
    """Configuration class for Palette Studio services."""

    # Upload limits
    MAX_FILE_MB: int = int(os.environ.get("PALETTE_MAX_FILE_MB", "10"))
    MAX_SOURCE_EDGE: int = int(os.environ.get("PALETTE_MAX_SOURCE_EDGE", "8000"))

    # Images are scaled to this width before extraction
    SAMPLE_WIDTH: int = int(os.environ.get("PALETTE_SAMPLE_WIDTH", "300"))

    # Palette size bounds
    DEFAULT_COLOR_COUNT: int = int(os.environ.get("PALETTE_DEFAULT_COLOR_COUNT", "5"))
    MIN_COLOR_COUNT: int = int(os.environ.get("PALETTE_MIN_COLOR_COUNT", "2"))
    MAX_COLOR_COUNT: int = int(os.environ.get("PALETTE_MAX_COLOR_COUNT", "10"))

    # Logging and metrics
    LOG_LEVEL: str = os.environ.get("PALETTE_LOG_LEVEL", "INFO")
    METRICS_ENABLED: bool = bool(int(os.environ.get("PALETTE_METRICS_ENABLED", "1")))

    # Swatch rendering
    SWATCH_CHIP_SIZE: int = int(os.environ.get("PALETTE_SWATCH_CHIP_SIZE", "40"))

    # CORS settings
    ALLOWED_ORIGINS: str = os.environ.get("PALETTE_ALLOWED_ORIGINS", "")

    # Supported image formats
    SUPPORTED_MIME_TYPES = ["image/jpeg", "image/png", "image/gif", "image/webp"]
    SUPPORTED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}

    @classmethod
    def validate_color_count(cls, count: int) -> bool:
        """Validate requested palette size."""
        return cls.MIN_COLOR_COUNT <= count <= cls.MAX_COLOR_COUNT

    @classmethod
    def validate_chip_size(cls, chip_size: int) -> bool:
        """Validate swatch chip size in pixels."""
        return 8 <= chip_size <= 256

    @classmethod
    def allowed_origins(cls) -> List[str]:
        """Parse the comma-separated CORS origin list."""
        return [origin.strip() for origin in cls.ALLOWED_ORIGINS.split(",") if origin.strip()]


# Global config instance
config = Config()
