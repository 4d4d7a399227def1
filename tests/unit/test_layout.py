"""Unit tests for text layout."""

import pytest

from glyphatlas.core.layout import TextGeometry, layout_text
from glyphatlas.domain import Atlas, Font, PlacedGlyph
from glyphatlas.exceptions import GlyphNotFoundError


@pytest.fixture
def font() -> Font:
    glyphs = {
        65: PlacedGlyph(65, 0.0, 0.0, 18.0, 22.0, -2.0, -18.0, 14.0),
        66: PlacedGlyph(66, 18.0, 0.0, 20.0, 22.0, -2.0, -18.0, 16.0),
    }
    return Font(
        name="AtlasTest",
        pixel_size=20,
        atlas=Atlas(38, 22, bytes(38 * 22)),
        space_advance=5.0,
        glyphs=glyphs,
    )


class TestLayoutText:
    """Tests for layout_text."""

    def test_single_quad(self, font):
        """Test vertex positions and atlas coordinates of one glyph."""
        geometry = layout_text(font, "A")

        assert geometry.quad_count == 1
        assert geometry.indices == [0, 1, 2, 0, 2, 3]
        assert geometry.attributes == [
            -2.0, -18.0, 0.0, 0.0,
            16.0, -18.0, 18.0, 0.0,
            16.0, 4.0, 18.0, 22.0,
            -2.0, 4.0, 0.0, 22.0,
        ]
        assert geometry.advance == 14.0

    def test_cursor_advances(self, font):
        """Test the second quad starts after the first glyph's advance."""
        geometry = layout_text(font, "AB")

        assert geometry.quad_count == 2
        assert geometry.indices[6:] == [4, 5, 6, 4, 6, 7]
        # left edge of B = 14 (advance of A) + bearing -2
        assert geometry.attributes[16] == 12.0
        # atlas x of B
        assert geometry.attributes[18] == 18.0
        assert geometry.advance == 30.0

    def test_space_only_advances(self, font):
        geometry = layout_text(font, "A B")

        assert geometry.quad_count == 2
        assert len(geometry.attributes) == 2 * 4 * 4
        assert geometry.attributes[16] == 14.0 + 5.0 - 2.0
        assert geometry.advance == 35.0

    def test_empty_string(self, font):
        assert layout_text(font, "") == TextGeometry()

    def test_unknown_character(self, font):
        with pytest.raises(GlyphNotFoundError):
            layout_text(font, "AZ")
