"""Unit tests for distance field rasterization."""

import pytest

from glyphatlas.core.rasterizer import quantize, rasterize, signed_distance
from glyphatlas.domain import Contour, CubicCurve, GlyphMetrics, Line, Point
from glyphatlas.exceptions import UnsupportedSegmentError

SPREAD = 4


@pytest.fixture
def square() -> list[Contour]:
    """10 x 10 pixel square with its bottom-left corner at the origin."""
    return [
        Contour(
            start=Point(0, 0),
            segments=(
                Line(Point(10, 0)),
                Line(Point(10, 10)),
                Line(Point(0, 10)),
                Line(Point(0, 0)),
            ),
        )
    ]


@pytest.fixture
def square_metrics() -> GlyphMetrics:
    return GlyphMetrics(char_code=65, width=10, height=10, bearing_x=0, bearing_y=10, advance=12.0)


def texel(glyph, col, row):
    return glyph.bitmap[row * glyph.width + col]


class TestQuantize:
    """Tests for quantize."""

    def test_outline_maps_to_middle(self):
        """Test 127.5 rounds half up."""
        assert quantize(0.0, SPREAD) == 128

    def test_range_ends(self):
        assert quantize(SPREAD, SPREAD) == 255
        assert quantize(-SPREAD, SPREAD) == 0

    def test_clamped(self):
        assert quantize(100.0, SPREAD) == 255
        assert quantize(-100.0, SPREAD) == 0
        assert quantize(float("-inf"), SPREAD) == 0

    def test_monotonic(self):
        values = [quantize(d / 4.0, SPREAD) for d in range(-20, 21)]
        assert values == sorted(values)


class TestSignedDistance:
    """Tests for signed_distance."""

    def test_inside_positive(self, square):
        assert signed_distance(Point(3, 5), square) == pytest.approx(3.0)

    def test_outside_negative(self, square):
        assert signed_distance(Point(-2, 5), square) == pytest.approx(-2.0)

    def test_hole_is_outside(self):
        """Test even-odd sign with a nested contour."""
        outer = Contour(
            start=Point(0, 0),
            segments=(Line(Point(10, 0)), Line(Point(10, 10)), Line(Point(0, 10)), Line(Point(0, 0))),
        )
        inner = Contour(
            start=Point(3, 3),
            segments=(Line(Point(3, 7)), Line(Point(7, 7)), Line(Point(7, 3)), Line(Point(3, 3))),
        )
        assert signed_distance(Point(5, 5), [outer, inner]) == pytest.approx(-2.0)
        assert signed_distance(Point(1.5, 5), [outer, inner]) == pytest.approx(1.5)


class TestRasterize:
    """Tests for rasterize."""

    def test_box_is_padded(self, square, square_metrics):
        """Test the raster box grows by spread on every side."""
        glyph = rasterize(square, square_metrics, SPREAD)
        assert (glyph.width, glyph.height) == (18, 18)
        assert len(glyph.bitmap) == 18 * 18

    def test_bearing_and_advance(self, square, square_metrics):
        """Test bearings are shifted by the padding and flipped to y-down."""
        glyph = rasterize(square, square_metrics, SPREAD)
        assert glyph.bearing_x == -4.0
        assert glyph.bearing_y == -14.0
        assert glyph.advance == 12.0
        assert glyph.char_code == 65

    def test_deep_inside_is_full(self, square, square_metrics):
        glyph = rasterize(square, square_metrics, SPREAD)
        assert texel(glyph, 9, 9) == 255

    def test_far_outside_is_empty(self, square, square_metrics):
        glyph = rasterize(square, square_metrics, SPREAD)
        assert texel(glyph, 0, 0) == 0
        assert texel(glyph, 17, 17) == 0

    def test_edge_straddles_middle(self, square, square_metrics):
        """Test pixels on either side of the left edge average to the outline value."""
        glyph = rasterize(square, square_metrics, SPREAD)
        inside = texel(glyph, 4, 9)
        outside = texel(glyph, 3, 9)
        assert outside < 128 <= inside
        assert (inside + outside) / 2 == pytest.approx(127.5, abs=0.5)

    def test_symmetric(self, square, square_metrics):
        """Test the field of a square is mirror symmetric."""
        glyph = rasterize(square, square_metrics, SPREAD)
        for row in range(glyph.height):
            line = glyph.bitmap[row * glyph.width : (row + 1) * glyph.width]
            assert line == line[::-1]

    def test_empty_glyph(self):
        """Test a glyph without contours gets a 0x0 box."""
        metrics = GlyphMetrics(char_code=32, width=0, height=0, bearing_x=0, bearing_y=0, advance=5.0)
        glyph = rasterize([], metrics, SPREAD)
        assert (glyph.width, glyph.height, glyph.bitmap) == (0, 0, b"")
        assert glyph.advance == 5.0

    def test_invalid_spread(self, square, square_metrics):
        with pytest.raises(ValueError, match="spread"):
            rasterize(square, square_metrics, 0)

    def test_cubic_rejected(self, square_metrics):
        """Test cubic outlines are rejected with the character code."""
        contour = Contour(
            start=Point(0, 0),
            segments=(CubicCurve(Point(0, 10), Point(10, 10), Point(10, 0)), Line(Point(0, 0))),
        )
        with pytest.raises(UnsupportedSegmentError) as exc_info:
            rasterize([contour], square_metrics, SPREAD)
        assert exc_info.value.char_code == 65
