"""Converters between fonttools outlines and domain models.

This module turns fonttools drawing commands into Contour objects scaled
to pixel units, and computes the grid-fitted metrics of a glyph.
"""

import math
from typing import Any

from fontTools.pens.basePen import BasePen
from fontTools.pens.boundsPen import BoundsPen
from fontTools.pens.transformPen import TransformPen

from glyphatlas.domain import Contour, CubicCurve, GlyphMetrics, Line, Point, QuadraticCurve, Segment


class ContourPen(BasePen):
    """Pen that records outlines as domain Contours.

    BasePen splits implied on-curve points of TrueType quadratic runs into
    single _qCurveToOne calls and resolves component references through the
    glyph set, so composite glyphs arrive here already decomposed.

    Example:
        pen = ContourPen(glyph_set)
        glyph_set["O"].draw(pen)
        contours = pen.contours
    """

    def __init__(self, glyph_set: Any = None) -> None:
        super().__init__(glyph_set)
        self.contours: list[Contour] = []
        self._start: Point | None = None
        self._segments: list[Segment] = []

    def _moveTo(self, pt: tuple[float, float]) -> None:
        self._finish()
        self._start = Point.from_tuple(pt)

    def _lineTo(self, pt: tuple[float, float]) -> None:
        self._segments.append(Line(Point.from_tuple(pt)))

    def _qCurveToOne(self, pt1: tuple[float, float], pt2: tuple[float, float]) -> None:
        self._segments.append(QuadraticCurve(Point.from_tuple(pt1), Point.from_tuple(pt2)))

    def _curveToOne(
        self,
        pt1: tuple[float, float],
        pt2: tuple[float, float],
        pt3: tuple[float, float],
    ) -> None:
        self._segments.append(
            CubicCurve(Point.from_tuple(pt1), Point.from_tuple(pt2), Point.from_tuple(pt3))
        )

    def _closePath(self) -> None:
        # Outlines close implicitly; make the closing edge explicit
        if self._start is not None and self._segments and self._segments[-1].end != self._start:
            self._segments.append(Line(self._start))
        self._finish()

    def _endPath(self) -> None:
        self._closePath()

    def _finish(self) -> None:
        if self._start is not None and self._segments:
            self.contours.append(Contour(start=self._start, segments=tuple(self._segments)))
        self._start = None
        self._segments = []


def extract_contours(glyph: Any, glyph_set: Any, scale: float) -> list[Contour]:
    """Draw a fonttools glyph into pixel-space contours.

    Args:
        glyph: Glyph object from a TTFont glyph set
        glyph_set: The glyph set, used to resolve components
        scale: Pixels per font unit

    Returns:
        Closed contours; empty for glyphs without outlines
    """
    pen = ContourPen(glyph_set)
    glyph.draw(TransformPen(pen, (scale, 0, 0, scale, 0, 0)))
    return pen.contours


def measure_glyph(
    char_code: int,
    glyph: Any,
    glyph_set: Any,
    scale: float,
    advance_width: int,
) -> GlyphMetrics:
    """Compute the grid-fitted pixel metrics of a glyph.

    The exact ink bounds (curve extrema included) are expanded outward to
    whole pixels.

    Args:
        char_code: Character code the glyph was looked up for
        glyph: Glyph object from a TTFont glyph set
        glyph_set: The glyph set, used to resolve components
        scale: Pixels per font unit
        advance_width: Advance width in font units

    Returns:
        GlyphMetrics in pixels, y up
    """
    advance = float(round(advance_width * scale))

    bounds_pen = BoundsPen(glyph_set)
    glyph.draw(TransformPen(bounds_pen, (scale, 0, 0, scale, 0, 0)))

    if bounds_pen.bounds is None:
        return GlyphMetrics(char_code, 0, 0, 0, 0, advance)

    x_min, y_min, x_max, y_max = bounds_pen.bounds
    left = math.floor(x_min)
    bottom = math.floor(y_min)
    right = math.ceil(x_max)
    top = math.ceil(y_max)

    return GlyphMetrics(
        char_code=char_code,
        width=right - left,
        height=top - bottom,
        bearing_x=left,
        bearing_y=top,
        advance=advance,
    )
