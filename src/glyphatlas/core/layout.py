"""Single-line text layout against a built Font.

Produces the indexed quad geometry a renderer uploads for a string: four
vertices per visible character, each vertex holding its screen position and
its atlas texel position.
"""

from dataclasses import dataclass, field

from glyphatlas.domain import Font

SPACE = " "

# Floats per vertex: screen_x, screen_y, atlas_x, atlas_y
VERTEX_STRIDE = 4


@dataclass
class TextGeometry:
    """Indexed quad mesh for a laid-out string.

    Attributes:
        indices: Two triangles per quad, six indices per character
        attributes: VERTEX_STRIDE floats per vertex, four vertices per quad
        advance: Pen position after the last character
    """

    indices: list[int] = field(default_factory=list)
    attributes: list[float] = field(default_factory=list)
    advance: float = 0.0

    @property
    def quad_count(self) -> int:
        return len(self.indices) // 6


def layout_text(font: Font, text: str) -> TextGeometry:
    """Lay out ``text`` on one baseline starting at x = 0.

    Spaces only advance the pen. Screen coordinates are y-down relative to
    the baseline, matching the glyph bearings stored in the atlas.

    Args:
        font: Font providing the glyph table
        text: String to lay out

    Returns:
        Quad geometry for every non-space character

    Raises:
        GlyphNotFoundError: If a character has no glyph in the font
    """
    geometry = TextGeometry()
    cursor = 0.0

    for char in text:
        if char == SPACE:
            cursor += font.space_advance
            continue

        glyph = font.glyph(char)
        base = geometry.quad_count * 4
        geometry.indices.extend([base, base + 1, base + 2, base, base + 2, base + 3])

        left = cursor + glyph.bearing_x
        right = left + glyph.width
        top = glyph.bearing_y
        bottom = top + glyph.height
        u0 = glyph.position_x
        u1 = u0 + glyph.width
        v0 = glyph.position_y
        v1 = v0 + glyph.height

        geometry.attributes.extend(
            [
                left, top, u0, v0,
                right, top, u1, v0,
                right, bottom, u1, v1,
                left, bottom, u0, v1,
            ]
        )
        cursor += glyph.advance

    geometry.advance = cursor
    return geometry
