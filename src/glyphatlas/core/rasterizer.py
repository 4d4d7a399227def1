"""Signed distance field rasterization of glyph outlines.

This module turns a glyph's contours into an UnplacedGlyph: a byte bitmap
sampling the signed distance to the outline at every pixel centre of the
ink box grown by ``spread`` pixels on each side.

Key functions:
- rasterize: Build the distance field of one glyph
- signed_distance: Signed distance from a point to a set of contours
- quantize: Map a signed distance to a byte
"""

import math
from collections.abc import Sequence

from glyphatlas.core.distance import INFINITE_DISTANCE, nearest
from glyphatlas.domain import Contour, CubicCurve, GlyphMetrics, Point, UnplacedGlyph
from glyphatlas.exceptions import UnsupportedSegmentError


def signed_distance(point: Point, contours: Sequence[Contour]) -> float:
    """Signed distance from ``point`` to the outline formed by ``contours``.

    The sign follows the even-odd rule on the total crossing count of a +x
    ray: positive inside (odd), negative outside (even).

    Args:
        point: Query point in glyph pixel space
        contours: Closed contours of the glyph

    Returns:
        Signed distance; +/-INFINITE_DISTANCE when no segment owns a point

    Raises:
        UnsupportedSegmentError: If a contour holds a cubic segment
    """
    min_dist = INFINITE_DISTANCE
    crossings = 0

    for contour in contours:
        dist, contour_crossings = nearest(point, contour)
        crossings += contour_crossings
        if dist < min_dist:
            min_dist = dist

    return min_dist if crossings % 2 == 1 else -min_dist


def quantize(distance: float, spread: int) -> int:
    """Map a signed distance in [-spread, spread] onto 0..255.

    Distances are clamped first, so anything deeper than ``spread`` inside
    maps to 255 and anything farther than ``spread`` outside maps to 0. The
    outline itself maps to 127.5, rounded half up to 128.

    Args:
        distance: Signed distance in pixels (positive inside)
        spread: Field range in pixels

    Returns:
        Byte value
    """
    clamped = max(-spread, min(spread, distance))
    return math.floor((clamped + spread) * 255.0 / (2.0 * spread) + 0.5)


def rasterize(
    contours: Sequence[Contour],
    metrics: GlyphMetrics,
    spread: int,
) -> UnplacedGlyph:
    """Rasterize a glyph's signed distance field.

    The raster box is the ink box padded by ``spread`` pixels on every side
    so that the field is fully represented around the ink. Pixel (col, row)
    samples the point (left + col + 0.5, top - row - 0.5) in y-up glyph
    space. A glyph without contours gets an empty 0x0 bitmap.

    Args:
        contours: Closed contours in pixel units
        metrics: Grid-fitted ink metrics of the glyph
        spread: Field range and padding in pixels (>= 1)

    Returns:
        Rasterized glyph with bearings adjusted for the padding and
        expressed y-down

    Raises:
        ValueError: If spread is less than 1
        UnsupportedSegmentError: If a contour holds a cubic segment
    """
    if spread < 1:
        raise ValueError(f"spread must be at least 1, got {spread}")

    bearing_x = metrics.bearing_x - spread
    bearing_top = metrics.bearing_y + spread

    if not contours:
        return UnplacedGlyph(
            char_code=metrics.char_code,
            bitmap=b"",
            width=0,
            height=0,
            bearing_x=float(bearing_x),
            bearing_y=float(-bearing_top),
            advance=float(metrics.advance),
        )

    width = metrics.width + 2 * spread
    height = metrics.height + 2 * spread
    bitmap = bytearray(width * height)

    for contour in contours:
        for segment in contour.segments:
            if isinstance(segment, CubicCurve):
                raise UnsupportedSegmentError(segment.kind, metrics.char_code)

    for row in range(height):
        y = bearing_top - row - 0.5
        offset = row * width
        for col in range(width):
            point = Point(bearing_x + col + 0.5, y)
            bitmap[offset + col] = quantize(signed_distance(point, contours), spread)

    return UnplacedGlyph(
        char_code=metrics.char_code,
        bitmap=bytes(bitmap),
        width=width,
        height=height,
        bearing_x=float(bearing_x),
        bearing_y=float(-bearing_top),
        advance=float(metrics.advance),
    )
