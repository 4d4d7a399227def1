"""Atlas and font models handed to the renderer."""

from collections.abc import Iterator
from dataclasses import dataclass, field

from glyphatlas.domain.glyph import PlacedGlyph
from glyphatlas.exceptions import GlyphNotFoundError


@dataclass(frozen=True)
class Atlas:
    """Single-channel atlas bitmap.

    Attributes:
        width: Width in texels
        height: Height in texels
        pixels: Row-major texel values, ``width * height`` bytes
    """

    width: int
    height: int
    pixels: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if len(self.pixels) != self.width * self.height:
            raise ValueError(
                f"Atlas holds {len(self.pixels)} bytes, "
                f"expected {self.width}x{self.height}"
            )

    @classmethod
    def empty(cls) -> "Atlas":
        return cls(0, 0, b"")

    def texel(self, x: int, y: int) -> int:
        """Get the value of the texel at column ``x``, row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Texel ({x}, {y}) outside {self.width}x{self.height} atlas")
        return self.pixels[y * self.width + x]

    def rows(self) -> Iterator[bytes]:
        """Iterate over atlas rows from top to bottom."""
        for y in range(self.height):
            yield self.pixels[y * self.width : (y + 1) * self.width]


@dataclass(frozen=True)
class Font:
    """An SDF font ready for rendering: the atlas plus its glyph table.

    Built once per font file and pixel size.

    Attributes:
        name: Font file stem
        pixel_size: Pixel size the atlas was built for
        atlas: Distance field atlas
        space_advance: Pen advance of the space character
        glyphs: Placement table keyed by character code, in ascending order
    """

    name: str
    pixel_size: int
    atlas: Atlas
    space_advance: float
    glyphs: dict[int, PlacedGlyph]

    @property
    def cache_key(self) -> str:
        """Identity of this font in the atlas cache."""
        return f"{self.name}{self.pixel_size}"

    @property
    def atlas_width(self) -> int:
        return self.atlas.width

    @property
    def atlas_height(self) -> int:
        return self.atlas.height

    def glyph(self, char: "str | int") -> PlacedGlyph:
        """Look up the placement of a character.

        Args:
            char: A one-character string or a character code

        Returns:
            The character's placed glyph

        Raises:
            GlyphNotFoundError: If the atlas has no glyph for the character
        """
        char_code = ord(char) if isinstance(char, str) else char
        try:
            return self.glyphs[char_code]
        except KeyError:
            raise GlyphNotFoundError(char_code) from None

    def __contains__(self, char: object) -> bool:
        if isinstance(char, str) and len(char) == 1:
            return ord(char) in self.glyphs
        return char in self.glyphs
