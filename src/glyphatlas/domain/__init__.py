"""Domain models for glyphatlas.

This module contains the data passed between pipeline stages: outlines,
glyph metrics, rasterized and placed glyphs, the atlas and the font.
All models are designed to be:

- Immutable (frozen dataclasses)
- Serializable for inter-process communication (parallel rasterization)
- Independent of fonttools implementation details

Key classes:
- Point, Line, QuadraticCurve, CubicCurve, Contour: Glyph outlines
- GlyphMetrics: Pixel metrics of a glyph's ink box
- UnplacedGlyph: A rasterized distance field awaiting packing
- PlacedGlyph: A glyph's atlas placement and rendering metrics
- Atlas: The packed single-channel bitmap
- Font: Atlas plus glyph table handed to the renderer
"""

from glyphatlas.domain.font import Atlas, Font
from glyphatlas.domain.glyph import GlyphMetrics, PlacedGlyph, UnplacedGlyph
from glyphatlas.domain.outline import Contour, CubicCurve, Line, Point, QuadraticCurve, Segment

__all__: list[str] = [
    # Outline types
    "Point",
    "Line",
    "QuadraticCurve",
    "CubicCurve",
    "Segment",
    "Contour",
    # Glyph types
    "GlyphMetrics",
    "UnplacedGlyph",
    "PlacedGlyph",
    # Atlas types
    "Atlas",
    "Font",
]
