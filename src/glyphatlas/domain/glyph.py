"""Glyph representation at each stage of the atlas pipeline.

A glyph goes through three shapes:
- GlyphMetrics: pixel metrics extracted from the font, next to its contours
- UnplacedGlyph: rasterized distance field waiting to be packed
- PlacedGlyph: atlas position and metrics, as persisted in the cache
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class GlyphMetrics:
    """Pixel metrics of a glyph's ink box.

    Values are grid-fitted to whole pixels in font space (y up).

    Attributes:
        char_code: Unicode code point
        width: Ink width in pixels
        height: Ink height in pixels
        bearing_x: Left edge of the ink relative to the origin
        bearing_y: Top edge of the ink relative to the baseline
        advance: Horizontal advance in pixels
    """

    char_code: int
    width: int
    height: int
    bearing_x: int
    bearing_y: int
    advance: float

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "char_code": self.char_code,
            "width": self.width,
            "height": self.height,
            "bearing_x": self.bearing_x,
            "bearing_y": self.bearing_y,
            "advance": self.advance,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GlyphMetrics":
        """Deserialize from dictionary."""
        return cls(**data)


@dataclass(frozen=True)
class UnplacedGlyph:
    """A rasterized glyph that has not been placed in an atlas yet.

    The bitmap is row-major with ``width * height`` bytes. Bearings are in
    the renderer's y-down convention and already account for the padding
    around the ink.
    """

    char_code: int
    bitmap: bytes
    width: int
    height: int
    bearing_x: float
    bearing_y: float
    advance: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Negative glyph size {self.width}x{self.height}")
        if len(self.bitmap) != self.width * self.height:
            raise ValueError(
                f"Bitmap holds {len(self.bitmap)} bytes, "
                f"expected {self.width}x{self.height}"
            )

    @property
    def area(self) -> int:
        return self.width * self.height

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "char_code": self.char_code,
            "bitmap": self.bitmap,
            "width": self.width,
            "height": self.height,
            "bearing_x": self.bearing_x,
            "bearing_y": self.bearing_y,
            "advance": self.advance,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UnplacedGlyph":
        """Deserialize from dictionary."""
        return cls(**data)


@dataclass(frozen=True)
class PlacedGlyph:
    """A glyph's placement in the atlas plus its rendering metrics.

    Every field is persisted as a 32-bit float (``char_code`` as u32), so
    values are kept exactly representable in single precision.

    Attributes:
        char_code: Unicode code point
        position_x: Atlas column of the bitmap's top-left texel
        position_y: Atlas row of the bitmap's top-left texel
        width: Bitmap width in texels
        height: Bitmap height in texels
        bearing_x: Horizontal offset from the pen position to the bitmap
        bearing_y: Vertical offset from the baseline to the bitmap top (y down)
        advance: Horizontal pen advance
    """

    char_code: int
    position_x: float
    position_y: float
    width: float
    height: float
    bearing_x: float
    bearing_y: float
    advance: float

    @classmethod
    def from_unplaced(cls, glyph: UnplacedGlyph, x: int, y: int) -> "PlacedGlyph":
        """Create the placed record for ``glyph`` at atlas texel (x, y)."""
        return cls(
            char_code=glyph.char_code,
            position_x=float(x),
            position_y=float(y),
            width=float(glyph.width),
            height=float(glyph.height),
            bearing_x=float(glyph.bearing_x),
            bearing_y=float(glyph.bearing_y),
            advance=float(glyph.advance),
        )

    def footprint(self) -> tuple[int, int, int, int]:
        """Get the occupied texel rectangle.

        Returns:
            Tuple of (x0, y0, x1, y1), half-open on the right and bottom
        """
        x0 = int(self.position_x)
        y0 = int(self.position_y)
        return (x0, y0, x0 + int(self.width), y0 + int(self.height))
