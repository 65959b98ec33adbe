"""
Palette Studio API Schemas
Pydantic models for extraction, harmony and export request/response validation.
"""
from typing import List, Optional, Tuple
from pydantic import BaseModel, Field, model_validator

from palette_studio.services.colors.harmony import HarmonyKind

HEX_PATTERN = r"^#?[0-9A-Fa-f]{6}$"


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("palette-studio", description="Service name")


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str = Field(..., description="Error message")


# ============================================================================
# EXTRACTION SCHEMAS
# ============================================================================

class ExtractResponse(BaseModel):
    """Dominant colors extracted from an uploaded image."""
    width: int = Field(..., description="Sampling canvas width in pixels")
    height: int = Field(..., description="Sampling canvas height in pixels")
    count: int = Field(..., ge=1, description="Number of colors requested")
    sampled_pixels: int = Field(..., ge=0, description="Pixels examined after strided sampling")
    distinct_colors: int = Field(..., ge=0, description="Distinct quantized colors among sampled pixels")
    palette: List[str] = Field(
        ...,
        description="Hex colors (#rrggbb), most frequent first"
    )
    counts: List[int] = Field(
        ...,
        description="Sampled pixel count for each palette entry"
    )
    swatch_png_b64: Optional[str] = Field(
        None,
        description="Base64-encoded PNG showing the palette strip"
    )


# ============================================================================
# HARMONY SCHEMAS
# ============================================================================

class HarmonyRequest(BaseModel):
    """Harmony generation request: a base color or a palette whose first swatch is the base."""
    kind: HarmonyKind = Field(..., description="Harmony rule to apply")
    base_hex: Optional[str] = Field(
        None,
        pattern=HEX_PATTERN,
        description="Base color as #rrggbb"
    )
    palette: Optional[List[str]] = Field(
        None,
        min_length=1,
        description="Current palette; its first entry is used as the base color"
    )

    @model_validator(mode="after")
    def check_base_source(self):
        if self.base_hex is None and not self.palette:
            raise ValueError("Either 'base_hex' or 'palette' must be provided")
        if self.base_hex is not None and self.palette:
            raise ValueError("Cannot specify both 'base_hex' and 'palette'")
        return self

    def resolve_base(self) -> str:
        return self.base_hex if self.base_hex is not None else self.palette[0]


class HarmonyResponse(BaseModel):
    """Five-color harmony palette."""
    base_hex: str = Field(..., description="Base color the harmony was derived from")
    kind: HarmonyKind = Field(..., description="Harmony rule applied")
    palette: List[str] = Field(
        ...,
        min_length=5,
        max_length=5,
        description="Five hex colors"
    )
    swatch_png_b64: Optional[str] = Field(
        None,
        description="Base64-encoded PNG showing the harmony strip"
    )


# ============================================================================
# COLOR INFO / EXPORT SCHEMAS
# ============================================================================

class ColorInfo(BaseModel):
    """Per-channel information for a single color."""
    hex: str = Field(..., description="Canonical #rrggbb form")
    rgb: Tuple[int, int, int] = Field(..., description="Red, green, blue channels (0-255)")
    hsl: Tuple[float, float, float] = Field(
        ...,
        description="Hue (degrees), saturation and lightness (percent)"
    )


class PaletteExportRequest(BaseModel):
    """Palette to serialize."""
    palette: List[str] = Field(
        ...,
        min_length=1,
        description="Hex colors in display order"
    )


class CssExportResponse(BaseModel):
    """Palette rendered as CSS custom properties."""
    css: str = Field(..., description="One '--color-N: #rrggbb;' declaration per line")
