"""Font reader for extracting glyph outlines at a pixel size.

This module provides the FontReader class for loading font files and
extracting per-character contours and metrics as domain models.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from fontTools.ttLib import TTFont

from glyphatlas.domain import Contour, GlyphMetrics
from glyphatlas.io.converter import extract_contours, measure_glyph

NOTDEF = ".notdef"
SPACE = 32


@dataclass(frozen=True)
class ExtractedGlyph:
    """Outline and metrics of one character at a pixel size."""

    contours: list[Contour]
    metrics: GlyphMetrics


class FontReader:
    """Loads TTF/OTF fonts and extracts glyph outlines by character code.

    Characters missing from the font's cmap resolve to the .notdef glyph.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            glyph = reader.extract_glyph(ord("A"), pixel_size=32)
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = font_path
        self._font: TTFont | None = None
        self._cmap: dict[int, str] = {}
        self._glyph_set: Any = None

    def load(self) -> None:
        """Load the font file.

        Raises:
            FileNotFoundError: If font file does not exist
            Exception: If font file is invalid or cannot be loaded
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        self._font = TTFont(str(self._font_path))
        self._cmap = self._font.getBestCmap() or {}
        self._glyph_set = self._font.getGlyphSet()

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def format(self) -> str:
        """Return font format.

        Returns:
            'TrueType' for TTF fonts, 'OpenType' for CFF-flavoured fonts

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._require_font()
        if "CFF " in font or "CFF2" in font:
            return "OpenType"
        return "TrueType"

    @property
    def units_per_em(self) -> int:
        """Return font's units per em.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require_font()["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def glyph_count(self) -> int:
        """Return total number of glyphs in the font.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require_font()["maxp"].numGlyphs

    def scale(self, pixel_size: int) -> float:
        """Pixels per font unit when the em square is ``pixel_size`` pixels."""
        return pixel_size / self.units_per_em

    def glyph_name(self, char_code: int) -> str:
        """Map a character code to a glyph name, falling back to .notdef."""
        self._require_font()
        return self._cmap.get(char_code, NOTDEF)

    def advance(self, char_code: int, pixel_size: int) -> float:
        """Horizontal advance of a character in whole pixels.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._require_font()
        advance_width, _ = font["hmtx"][self.glyph_name(char_code)]
        return float(round(advance_width * self.scale(pixel_size)))

    def space_advance(self, pixel_size: int) -> float:
        """Advance of the space character in whole pixels."""
        return self.advance(SPACE, pixel_size)

    def extract_glyph(self, char_code: int, pixel_size: int) -> ExtractedGlyph:
        """Extract contours and metrics of a character.

        Args:
            char_code: Unicode code point
            pixel_size: Pixel size of the em square

        Returns:
            Pixel-space contours and grid-fitted metrics

        Raises:
            RuntimeError: If font has not been loaded yet
            KeyError: If the font has no glyph for the name the cmap yields
        """
        font = self._require_font()
        name = self.glyph_name(char_code)
        glyph_set = self._glyph_set
        glyph = glyph_set[name]
        scale = self.scale(pixel_size)
        advance_width, _ = font["hmtx"][name]

        return ExtractedGlyph(
            contours=extract_contours(glyph, glyph_set, scale),
            metrics=measure_glyph(char_code, glyph, glyph_set, scale, advance_width),
        )

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None
            self._cmap = {}
            self._glyph_set = None

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
