"""
Palette Studio v1 API Routes
Implements palette extraction, harmony, color info and export endpoints.
"""
from fastapi import APIRouter, File, Query, UploadFile
from fastapi.responses import Response

from palette_studio.config import config
from palette_studio.schemas import (
    ColorInfo, CssExportResponse, ErrorResponse, ExtractResponse,
    HarmonyRequest, HarmonyResponse, PaletteExportRequest
)
from palette_studio.services.colors.conversion import hex_to_rgb, rgb_to_hex, rgb_to_hsl
from palette_studio.services.colors.export import EXPORT_FILENAME, to_css_variables, to_json
from palette_studio.services.palette_api import handle_extract, handle_harmony

router = APIRouter(prefix="/v1", tags=["Palette"])

_ERRORS = {400: {"model": ErrorResponse}}


@router.post("/palette/extract",
             response_model=ExtractResponse,
             responses=_ERRORS,
             summary="Extract Dominant Colors",
             description="Decode an uploaded image and return its most frequent quantized colors")
async def extract_colors(
    file: UploadFile = File(..., description="JPG, PNG, GIF or WebP image"),
    count: int = Query(config.DEFAULT_COLOR_COUNT, ge=config.MIN_COLOR_COUNT,
                       le=config.MAX_COLOR_COUNT, description="Number of colors to extract"),
    include_swatch: bool = Query(False, description="Render a PNG strip of the palette")
) -> ExtractResponse:
    """
    - **file**: image to analyze
    - **count**: palette size; fewer colors are returned if the image has fewer
    - **include_swatch**: attach a base64 PNG preview strip
    """
    return await handle_extract(file, count, include_swatch=include_swatch)


@router.post("/palette/harmony",
             response_model=HarmonyResponse,
             responses=_ERRORS,
             summary="Generate Color Harmony",
             description="Derive five harmonic colors from a base color or a palette's first swatch")
def harmony(
    request: HarmonyRequest,
    include_swatch: bool = Query(False, description="Render a PNG strip of the harmony")
) -> HarmonyResponse:
    return handle_harmony(request, include_swatch=include_swatch)


@router.get("/colors/{hex_color}",
            response_model=ColorInfo,
            responses=_ERRORS,
            summary="Color Channel Info")
def color_info(hex_color: str) -> ColorInfo:
    """Per-channel RGB and HSL values for a color given as rrggbb (the '#' is optional)."""
    rgb = hex_to_rgb(hex_color)
    return ColorInfo(hex=rgb_to_hex(*rgb), rgb=rgb, hsl=rgb_to_hsl(*rgb))


@router.post("/palette/export/css",
             response_model=CssExportResponse,
             responses=_ERRORS,
             summary="Export CSS Variables")
def export_css(request: PaletteExportRequest) -> CssExportResponse:
    return CssExportResponse(css=to_css_variables(request.palette))


@router.post("/palette/export/json",
             responses=_ERRORS,
             summary="Download Palette JSON")
def export_json(request: PaletteExportRequest) -> Response:
    return Response(
        content=to_json(request.palette),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'}
    )
