"""Greedy atlas packing of rasterized glyphs.

Glyphs are placed largest first. Each glyph takes the first free position
in row-major scan order; when none exists the canvas grows along the axis
that keeps it closer to square and the glyph is placed flush in the new
region.

Key functions:
- pack_glyphs: Pack a set of UnplacedGlyphs into one Atlas
"""

from collections.abc import Iterable

from glyphatlas.domain import Atlas, PlacedGlyph, UnplacedGlyph


class _Canvas:
    """Growing texel grid with a parallel "written" mask.

    Both buffers are flat and indexed by ``row * width + col``. Texels that
    are never written stay zero.
    """

    def __init__(self) -> None:
        self.width = 0
        self.height = 0
        self.pixels = bytearray()
        self.written = bytearray()

    def is_free(self, x: int, y: int, width: int, height: int) -> bool:
        """Check that no texel of the rectangle has been written."""
        for row in range(y, y + height):
            start = row * self.width + x
            if self.written.find(1, start, start + width) != -1:
                return False
        return True

    def find_free(self, width: int, height: int) -> tuple[int, int] | None:
        """Find the first free top-left position in row-major order.

        Returns:
            Tuple of (x, y), or None if the glyph fits nowhere
        """
        row_bound = max(0, self.height - height + 1)
        col_bound = max(0, self.width - width + 1)

        for y in range(row_bound):
            for x in range(col_bound):
                if self.is_free(x, y, width, height):
                    return (x, y)
        return None

    def grow(self, add_rows: int, add_cols: int) -> None:
        """Extend the canvas by whole rows at the bottom and columns at the right."""
        if add_cols:
            new_width = self.width + add_cols
            pixels = bytearray(new_width * self.height)
            written = bytearray(new_width * self.height)
            for row in range(self.height):
                old = row * self.width
                new = row * new_width
                pixels[new : new + self.width] = self.pixels[old : old + self.width]
                written[new : new + self.width] = self.written[old : old + self.width]
            self.pixels = pixels
            self.written = written
            self.width = new_width

        if add_rows:
            self.pixels.extend(bytes(add_rows * self.width))
            self.written.extend(bytes(add_rows * self.width))
            self.height += add_rows

    def blit(self, glyph: UnplacedGlyph, x: int, y: int) -> None:
        """Copy the glyph bitmap to (x, y) and mark its texels written."""
        mask = b"\x01" * glyph.width
        for row in range(glyph.height):
            start = (y + row) * self.width + x
            src = row * glyph.width
            self.pixels[start : start + glyph.width] = glyph.bitmap[src : src + glyph.width]
            self.written[start : start + glyph.width] = mask

    def to_atlas(self) -> Atlas:
        return Atlas(self.width, self.height, bytes(self.pixels))


def _grow_for(canvas: _Canvas, glyph: UnplacedGlyph) -> tuple[int, int]:
    """Grow the canvas to make room for ``glyph``.

    If the canvas would end up wider than tall, rows are added and the
    glyph goes to the bottom-left corner of the new strip; otherwise columns
    are added and it goes to the top of the new strip. Each axis only grows
    by what is still missing.

    Returns:
        Tuple of (x, y) where the glyph fits
    """
    if canvas.width + glyph.width > canvas.height + glyph.height:
        position = (0, canvas.height)
        canvas.grow(add_rows=glyph.height, add_cols=max(0, glyph.width - canvas.width))
    else:
        position = (canvas.width, 0)
        canvas.grow(add_rows=max(0, glyph.height - canvas.height), add_cols=glyph.width)
    return position


def pack_glyphs(glyphs: Iterable[UnplacedGlyph]) -> tuple[Atlas, dict[int, PlacedGlyph]]:
    """Pack glyph bitmaps into a single atlas.

    Glyphs are processed by descending area, ties broken by character
    code, so identical input always produces an identical atlas. Zero-area
    glyphs occupy no texels and land at the first scan position.

    Args:
        glyphs: Rasterized glyphs with unique character codes

    Returns:
        Tuple of (atlas, placements keyed by character code in ascending
        order)

    Raises:
        ValueError: If two glyphs share a character code
    """
    ordered = sorted(glyphs, key=lambda g: (-g.area, g.char_code))

    seen: set[int] = set()
    for glyph in ordered:
        if glyph.char_code in seen:
            raise ValueError(f"Duplicate character code {glyph.char_code}")
        seen.add(glyph.char_code)

    canvas = _Canvas()
    placed: dict[int, PlacedGlyph] = {}

    for glyph in ordered:
        position = canvas.find_free(glyph.width, glyph.height)
        if position is None:
            position = _grow_for(canvas, glyph)

        x, y = position
        canvas.blit(glyph, x, y)
        placed[glyph.char_code] = PlacedGlyph.from_unplaced(glyph, x, y)

    return canvas.to_atlas(), {code: placed[code] for code in sorted(placed)}
