"""Unit tests for the font I/O layer.

Tests for FontReader, the outline converter and atlas preview export.
"""

from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

import pytest
from PIL import Image

from glyphatlas.domain import Atlas, CubicCurve, GlyphMetrics, Line, Point, QuadraticCurve
from glyphatlas.io.converter import ContourPen
from glyphatlas.io.preview import atlas_to_image, save_atlas_preview
from glyphatlas.io.reader import FontReader


class TestFontReader:
    """Tests for FontReader class."""

    def test_init(self):
        """Test FontReader initialization."""
        path = Path("test.ttf")
        reader = FontReader(path)
        assert reader._font_path == path
        assert reader._font is None

    def test_load_nonexistent_file(self):
        """Test loading a nonexistent file raises FileNotFoundError."""
        reader = FontReader(Path("nonexistent.ttf"))
        with pytest.raises(FileNotFoundError):
            reader.load()

    def test_format_before_load(self):
        """Test accessing format before loading raises RuntimeError."""
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            _ = reader.format

    def test_extract_before_load(self):
        """Test extracting a glyph before loading raises RuntimeError."""
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            reader.extract_glyph(65, 32)

    @patch("glyphatlas.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_format_opentype(self, _mock_exists, mock_ttfont):  # noqa: ARG002
        """Test format property for CFF fonts."""
        mock_font = MagicMock()
        mock_font.__contains__ = Mock(side_effect=lambda key: key == "CFF ")
        mock_ttfont.return_value = mock_font

        reader = FontReader(Path("test.otf"))
        reader.load()

        assert reader.format == "OpenType"

    @patch("glyphatlas.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_context_manager(self, _mock_exists, mock_ttfont):  # noqa: ARG002
        """Test FontReader as context manager."""
        mock_font = MagicMock()
        mock_ttfont.return_value = mock_font

        with FontReader(Path("test.ttf")) as reader:
            assert reader._font is not None

        mock_font.close.assert_called_once()

    def test_real_font_properties(self, font_path):
        """Test properties of the synthesized font."""
        with FontReader(font_path) as reader:
            assert reader.format == "TrueType"
            assert reader.units_per_em == 1000
            assert reader.glyph_count == 5
            assert reader.scale(20) == pytest.approx(0.02)

    def test_glyph_name_fallback(self, font_path):
        """Test unmapped characters resolve to .notdef."""
        with FontReader(font_path) as reader:
            assert reader.glyph_name(ord("A")) == "A"
            assert reader.glyph_name(ord("Z")) == ".notdef"

    def test_advances(self, font_path):
        """Test advances are scaled and rounded to whole pixels."""
        with FontReader(font_path) as reader:
            assert reader.space_advance(20) == 5.0
            assert reader.advance(ord("A"), 20) == 14.0
            assert reader.advance(ord("A"), 15) == 10.0

    def test_extract_square(self, font_path):
        """Test extraction of a rectangle glyph."""
        with FontReader(font_path) as reader:
            glyph = reader.extract_glyph(ord("A"), 20)

        assert glyph.metrics == GlyphMetrics(65, 10, 14, 2, 14, 14.0)
        assert len(glyph.contours) == 1
        contour = glyph.contours[0]
        assert contour.is_closed()
        assert all(isinstance(s, Line) for s in contour.segments)
        corners = {s.end for s in contour.segments}
        assert corners == {Point(2, 0), Point(2, 14), Point(12, 14), Point(12, 0)}

    def test_extract_quadratic(self, font_path):
        """Test extraction of a glyph drawn with quadratic curves."""
        with FontReader(font_path) as reader:
            glyph = reader.extract_glyph(ord("O"), 20)

        assert glyph.metrics == GlyphMetrics(79, 16, 16, 2, 16, 20.0)
        assert len(glyph.contours) == 1
        assert glyph.contours[0].is_closed()
        assert any(isinstance(s, QuadraticCurve) for s in glyph.contours[0].segments)

    def test_extract_two_contours(self, font_path):
        with FontReader(font_path) as reader:
            glyph = reader.extract_glyph(ord("B"), 20)
        assert len(glyph.contours) == 2

    def test_extract_empty(self, font_path):
        """Test glyphs without outlines have no contours and zero ink."""
        with FontReader(font_path) as reader:
            glyph = reader.extract_glyph(ord("Z"), 20)

        assert glyph.contours == []
        assert glyph.metrics == GlyphMetrics(90, 0, 0, 0, 0, 10.0)


class TestContourPen:
    """Tests for the fonttools pen adapter."""

    def test_closes_implicit_edge(self):
        """Test the implicit closing edge becomes an explicit line."""
        pen = ContourPen()
        pen.moveTo((0, 0))
        pen.lineTo((10, 0))
        pen.lineTo((10, 10))
        pen.closePath()

        assert len(pen.contours) == 1
        contour = pen.contours[0]
        assert contour.start == Point(0, 0)
        assert contour.segments[-1] == Line(Point(0, 0))
        assert contour.is_closed()

    def test_no_duplicate_closing_edge(self):
        pen = ContourPen()
        pen.moveTo((0, 0))
        pen.lineTo((10, 0))
        pen.lineTo((0, 0))
        pen.closePath()
        assert len(pen.contours[0]) == 2

    def test_implied_on_curve_points(self):
        """Test TrueType runs of off-curve points are split at midpoints."""
        pen = ContourPen()
        pen.moveTo((0, 0))
        pen.qCurveTo((0, 10), (10, 10), (10, 0))
        pen.closePath()

        segments = pen.contours[0].segments
        assert segments[0] == QuadraticCurve(Point(0, 10), Point(5, 10))
        assert segments[1] == QuadraticCurve(Point(10, 10), Point(10, 0))
        assert segments[2] == Line(Point(0, 0))

    def test_cubic_recorded(self):
        pen = ContourPen()
        pen.moveTo((0, 0))
        pen.curveTo((0, 5), (5, 5), (5, 0))
        pen.closePath()
        assert isinstance(pen.contours[0].segments[0], CubicCurve)

    def test_multiple_contours(self):
        pen = ContourPen()
        for offset in (0, 20):
            pen.moveTo((offset, 0))
            pen.lineTo((offset + 5, 0))
            pen.lineTo((offset + 5, 5))
            pen.closePath()
        assert len(pen.contours) == 2
        assert pen.contours[1].start == Point(20, 0)


class TestPreview:
    """Tests for atlas preview export."""

    def test_atlas_to_image(self):
        atlas = Atlas(3, 2, bytes([0, 1, 2, 3, 4, 255]))
        image = atlas_to_image(atlas)
        assert image.mode == "L"
        assert image.size == (3, 2)
        assert image.getpixel((2, 1)) == 255

    def test_save_png(self, tmp_path):
        path = tmp_path / "out" / "atlas.png"
        save_atlas_preview(Atlas(2, 2, bytes([0, 64, 128, 255])), path)

        with Image.open(path) as image:
            assert image.size == (2, 2)
            assert image.getpixel((1, 0)) == 64

    def test_empty_atlas(self, tmp_path):
        with pytest.raises(ValueError, match="empty"):
            save_atlas_preview(Atlas.empty(), tmp_path / "atlas.png")
