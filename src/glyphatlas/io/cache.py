"""Binary atlas cache codec.

Layout (little-endian)::

    u32 atlas_width
    u32 atlas_height
    u8[atlas_width * atlas_height]   atlas pixels, row-major
    u8[pad]                          pad = (4 - (w * h) % 4) % 4
    f32 space_advance
    u32 glyph_count
    glyph_count x {u32 char_code, f32 position_x, f32 position_y,
                   f32 width, f32 height, f32 bearing_x, f32 bearing_y,
                   f32 advance}

A missing file is a cache miss and loads as None. Anything that does not
match the layout raises CacheCorruptError.
"""

import os
import struct
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from glyphatlas.domain import Atlas, PlacedGlyph
from glyphatlas.exceptions import CacheCorruptError, CacheReadError, CacheWriteError

CACHE_SUFFIX = ".cache"

_HEADER = struct.Struct("<II")
_TABLE_HEADER = struct.Struct("<fI")
_GLYPH = struct.Struct("<I7f")


@dataclass(frozen=True)
class CachedAtlas:
    """Contents of an atlas cache file."""

    atlas: Atlas
    space_advance: float
    glyphs: dict[int, PlacedGlyph]

    @property
    def width(self) -> int:
        return self.atlas.width

    @property
    def height(self) -> int:
        return self.atlas.height


def cache_path(cache_dir: Path, font_path: Path, pixel_size: int) -> Path:
    """Derive the cache file for a font and pixel size.

    Converts: fonts/Roboto-Regular.ttf, 32 -> <cache_dir>/Roboto-Regular32.cache

    Args:
        cache_dir: Cache root directory
        font_path: Source font file
        pixel_size: Pixel size of the atlas

    Returns:
        Path of the cache file
    """
    return cache_dir / f"{font_path.stem}{pixel_size}{CACHE_SUFFIX}"


def _padding(pixel_count: int) -> int:
    return (4 - pixel_count % 4) % 4


def encode_cache(
    atlas: Atlas,
    space_advance: float,
    glyphs: Iterable[PlacedGlyph],
) -> bytes:
    """Serialize an atlas and its glyph table.

    Glyphs are written in ascending character code order.

    Args:
        atlas: Packed atlas
        space_advance: Pen advance of the space character
        glyphs: Placed glyphs with unique character codes

    Returns:
        Encoded cache bytes
    """
    ordered = sorted(glyphs, key=lambda g: g.char_code)
    pixel_count = atlas.width * atlas.height

    parts = [
        _HEADER.pack(atlas.width, atlas.height),
        atlas.pixels,
        bytes(_padding(pixel_count)),
        _TABLE_HEADER.pack(space_advance, len(ordered)),
    ]
    for glyph in ordered:
        parts.append(
            _GLYPH.pack(
                glyph.char_code,
                glyph.position_x,
                glyph.position_y,
                glyph.width,
                glyph.height,
                glyph.bearing_x,
                glyph.bearing_y,
                glyph.advance,
            )
        )
    return b"".join(parts)


def decode_cache(data: bytes, source: str = "<bytes>") -> CachedAtlas:
    """Deserialize cache bytes.

    Args:
        data: Encoded cache bytes
        source: Name used in error messages

    Returns:
        Decoded cache contents

    Raises:
        CacheCorruptError: If data is truncated, has trailing bytes or
            repeats a character code
    """
    if len(data) < _HEADER.size:
        raise CacheCorruptError(source, f"header truncated at {len(data)} bytes")

    width, height = _HEADER.unpack_from(data, 0)
    pixel_count = width * height
    offset = _HEADER.size
    table_offset = offset + pixel_count + _padding(pixel_count)

    if len(data) < table_offset + _TABLE_HEADER.size:
        raise CacheCorruptError(
            source, f"atlas of {width}x{height} texels does not fit in {len(data)} bytes"
        )

    pixels = bytes(data[offset : offset + pixel_count])
    space_advance, glyph_count = _TABLE_HEADER.unpack_from(data, table_offset)
    offset = table_offset + _TABLE_HEADER.size

    expected = offset + glyph_count * _GLYPH.size
    if len(data) != expected:
        raise CacheCorruptError(
            source, f"{glyph_count} glyphs need {expected} bytes, file has {len(data)}"
        )

    glyphs: dict[int, PlacedGlyph] = {}
    for fields in _GLYPH.iter_unpack(data[offset:]):
        glyph = PlacedGlyph(*fields)
        if glyph.char_code in glyphs:
            raise CacheCorruptError(source, f"duplicate character code {glyph.char_code}")
        glyphs[glyph.char_code] = glyph

    return CachedAtlas(
        atlas=Atlas(width, height, pixels),
        space_advance=space_advance,
        glyphs={code: glyphs[code] for code in sorted(glyphs)},
    )


def save_cache(
    path: Path,
    atlas: Atlas,
    space_advance: float,
    glyphs: Iterable[PlacedGlyph],
) -> None:
    """Write an atlas cache file.

    Parent directories are created as needed. Data goes to a temporary
    sibling first and replaces ``path`` in one step, so readers never see a
    partially written cache.

    Raises:
        CacheWriteError: If the file cannot be written
    """
    data = encode_cache(atlas, space_advance, glyphs)
    tmp_path = path.with_name(path.name + ".tmp")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_bytes(data)
        os.replace(tmp_path, path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise CacheWriteError(str(path), str(e)) from e


def load_cache(path: Path) -> CachedAtlas | None:
    """Read an atlas cache file.

    Returns:
        Decoded cache contents, or None if the file does not exist

    Raises:
        CacheReadError: If the file exists but cannot be read
        CacheCorruptError: If the file contents are malformed
    """
    try:
        data = path.read_bytes()
    except FileNotFoundError:
        return None
    except OSError as e:
        raise CacheReadError(str(path), str(e)) from e

    return decode_cache(data, source=str(path))
