"""Core processing algorithms for glyphatlas.

This module contains the core algorithms for:

- Distance queries (exact point-to-segment distance, ray crossings)
- Distance field rasterization
- Atlas packing
- Build orchestration with the atlas cache
- Text layout against a built font

All geometry and rasterization functions are designed to be:
- Stateless (safe for use in worker processes)
- Pure (no side effects)

Key functions:
- nearest: Distance and crossing count of a point against a contour
- rasterize: Signed distance field of one glyph
- pack_glyphs: Pack rasterized glyphs into one atlas
- layout_text: Quad geometry for a string

Key classes:
- FontBuilder: Cache lookup, rasterization, packing and persistence
"""

from glyphatlas.core.builder import FontBuilder, rasterize_glyph_task
from glyphatlas.core.distance import (
    INFINITE_DISTANCE,
    line_crossings,
    line_distance,
    nearest,
    quadratic_crossings,
    quadratic_distance,
)
from glyphatlas.core.layout import TextGeometry, layout_text
from glyphatlas.core.packer import pack_glyphs
from glyphatlas.core.rasterizer import quantize, rasterize, signed_distance

__all__ = [
    # Builder
    "FontBuilder",
    "INFINITE_DISTANCE",
    # Layout
    "TextGeometry",
    "layout_text",
    # Distance functions
    "line_crossings",
    "line_distance",
    "nearest",
    # Packing
    "pack_glyphs",
    "quadratic_crossings",
    "quadratic_distance",
    # Rasterization
    "quantize",
    "rasterize",
    "rasterize_glyph_task",
    "signed_distance",
]
