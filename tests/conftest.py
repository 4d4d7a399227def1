"""Shared fixtures: a small TrueType font synthesized with fontTools."""

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import TTFont

UNITS_PER_EM = 1000


def _square_glyph():
    """'A': a 500 x 700 unit rectangle (10 x 14 px at 20px)."""
    pen = TTGlyphPen(None)
    pen.moveTo((100, 0))
    pen.lineTo((100, 700))
    pen.lineTo((600, 700))
    pen.lineTo((600, 0))
    pen.closePath()
    return pen.glyph()


def _framed_glyph():
    """'B': a square with a square hole, two contours."""
    pen = TTGlyphPen(None)
    pen.moveTo((100, 0))
    pen.lineTo((100, 700))
    pen.lineTo((700, 700))
    pen.lineTo((700, 0))
    pen.closePath()
    pen.moveTo((300, 200))
    pen.lineTo((500, 200))
    pen.lineTo((500, 500))
    pen.lineTo((300, 500))
    pen.closePath()
    return pen.glyph()


def _round_glyph():
    """'O': four quadratic arcs through (500, 0), (100, 400), (500, 800), (900, 400)."""
    pen = TTGlyphPen(None)
    pen.moveTo((500, 0))
    pen.qCurveTo((100, 0), (100, 400))
    pen.qCurveTo((100, 800), (500, 800))
    pen.qCurveTo((900, 800), (900, 400))
    pen.qCurveTo((900, 0), (500, 0))
    pen.closePath()
    return pen.glyph()


def _empty_glyph():
    return TTGlyphPen(None).glyph()


def build_font(path: Path) -> Path:
    """Write the test font to ``path``.

    Glyphs: an empty .notdef, space (advance 250), A, B and O. Every other
    character maps to .notdef.
    """
    glyphs = {
        ".notdef": _empty_glyph(),
        "space": _empty_glyph(),
        "A": _square_glyph(),
        "B": _framed_glyph(),
        "O": _round_glyph(),
    }
    # (advance width, left side bearing)
    metrics = {
        ".notdef": (500, 0),
        "space": (250, 0),
        "A": (700, 100),
        "B": (800, 100),
        "O": (1000, 100),
    }

    fb = FontBuilder(UNITS_PER_EM, isTTF=True)
    fb.setupGlyphOrder(list(glyphs))
    fb.setupCharacterMap({32: "space", 65: "A", 66: "B", 79: "O"})
    fb.setupGlyf(glyphs)
    fb.setupHorizontalMetrics(metrics)
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "AtlasTest", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    fb.setupPost()
    fb.save(str(path))
    return path


@pytest.fixture
def font_path(tmp_path: Path) -> Path:
    """Path to a freshly built AtlasTest.ttf."""
    return build_font(tmp_path / "AtlasTest.ttf")


@pytest.fixture
def damaged_font_path(font_path: Path) -> Path:
    """AtlasTest.ttf with its glyf table overwritten by 0xFF bytes.

    The table directory stays intact, so the font still opens.
    """
    with TTFont(font_path) as font:
        entry = font.reader.tables["glyf"]
        offset, length = entry.offset, entry.length

    data = bytearray(font_path.read_bytes())
    data[offset : offset + length] = b"\xff" * length
    damaged = font_path.with_name("Damaged.ttf")
    damaged.write_bytes(bytes(data))
    return damaged
