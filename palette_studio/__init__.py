"""
Palette Studio

Dominant-color extraction and color harmony generation for raster images.
"""

__version__ = "1.0.0"
