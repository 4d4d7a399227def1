"""Unit tests for the binary atlas cache codec."""

import struct
from pathlib import Path
from unittest.mock import patch

import pytest

from glyphatlas.domain import Atlas, PlacedGlyph
from glyphatlas.exceptions import CacheCorruptError, CacheReadError, CacheWriteError
from glyphatlas.io.cache import cache_path, decode_cache, encode_cache, load_cache, save_cache


@pytest.fixture
def atlas() -> Atlas:
    """3x3 atlas, so the pixel block needs 3 bytes of padding."""
    return Atlas(3, 3, bytes(range(10, 19)))


@pytest.fixture
def glyphs() -> list[PlacedGlyph]:
    return [
        PlacedGlyph(66, 1.0, 0.0, 2.0, 3.0, -4.0, -13.5, 9.0),
        PlacedGlyph(65, 0.0, 0.0, 1.0, 3.0, -4.0, -14.0, 12.0),
    ]


class TestCachePath:
    """Tests for cache file naming."""

    def test_stem_and_size(self):
        path = cache_path(Path("target/fonts"), Path("/fonts/Roboto-Regular.ttf"), 32)
        assert path == Path("target/fonts/Roboto-Regular32.cache")


class TestEncode:
    """Tests for the encoded layout."""

    def test_layout(self, atlas, glyphs):
        """Test header, padded pixel block and glyph table sizes."""
        data = encode_cache(atlas, 5.0, glyphs)
        assert len(data) == 8 + 9 + 3 + 8 + 2 * 32
        assert struct.unpack_from("<II", data, 0) == (3, 3)
        assert data[8:17] == atlas.pixels
        assert data[17:20] == b"\x00\x00\x00"
        assert struct.unpack_from("<fI", data, 20) == (5.0, 2)

    def test_glyphs_sorted_by_code(self, atlas, glyphs):
        data = encode_cache(atlas, 5.0, glyphs)
        first = struct.unpack_from("<I7f", data, 28)
        second = struct.unpack_from("<I7f", data, 60)
        assert first == (65, 0.0, 0.0, 1.0, 3.0, -4.0, -14.0, 12.0)
        assert second[0] == 66

    def test_no_padding_when_aligned(self, glyphs):
        data = encode_cache(Atlas(2, 2, bytes(4)), 5.0, glyphs)
        assert len(data) == 8 + 4 + 8 + 2 * 32


class TestDecode:
    """Tests for decoding and corruption detection."""

    def test_round_trip(self, atlas, glyphs):
        cached = decode_cache(encode_cache(atlas, 5.0, glyphs))
        assert cached.atlas == atlas
        assert cached.space_advance == 5.0
        assert list(cached.glyphs) == [65, 66]
        assert cached.glyphs[66] == glyphs[0]
        assert (cached.width, cached.height) == (3, 3)

    def test_empty_atlas(self):
        cached = decode_cache(encode_cache(Atlas.empty(), 0.0, []))
        assert cached.atlas == Atlas.empty()
        assert cached.glyphs == {}

    def test_truncated_header(self):
        with pytest.raises(CacheCorruptError, match="header truncated"):
            decode_cache(b"\x01\x00")

    def test_truncated_pixels(self, atlas, glyphs):
        data = encode_cache(atlas, 5.0, glyphs)
        with pytest.raises(CacheCorruptError):
            decode_cache(data[:15])

    def test_truncated_glyph_table(self, atlas, glyphs):
        data = encode_cache(atlas, 5.0, glyphs)
        with pytest.raises(CacheCorruptError):
            decode_cache(data[:-1])

    def test_trailing_bytes(self, atlas, glyphs):
        data = encode_cache(atlas, 5.0, glyphs)
        with pytest.raises(CacheCorruptError):
            decode_cache(data + b"\x00")

    def test_huge_declared_size(self):
        """Test a header claiming a huge atlas is rejected, not allocated."""
        with pytest.raises(CacheCorruptError):
            decode_cache(struct.pack("<II", 0xFFFF, 0xFFFF))

    def test_duplicate_code(self, atlas):
        glyph = PlacedGlyph(65, 0.0, 0.0, 1.0, 1.0, 0.0, 0.0, 1.0)
        data = encode_cache(atlas, 5.0, [glyph, glyph])
        with pytest.raises(CacheCorruptError, match="duplicate"):
            decode_cache(data)

    def test_source_in_message(self):
        with pytest.raises(CacheCorruptError) as exc_info:
            decode_cache(b"", source="fonts/x.cache")
        assert exc_info.value.path == "fonts/x.cache"


class TestFiles:
    """Tests for save_cache and load_cache."""

    def test_missing_file_is_miss(self, tmp_path):
        assert load_cache(tmp_path / "nope.cache") is None

    def test_save_and_load(self, tmp_path, atlas, glyphs):
        path = tmp_path / "nested" / "dir" / "Font12.cache"
        save_cache(path, atlas, 5.0, glyphs)

        assert path.exists()
        assert not path.with_name(path.name + ".tmp").exists()

        cached = load_cache(path)
        assert cached is not None
        assert cached.atlas == atlas
        assert cached.glyphs[65] == glyphs[1]

    def test_overwrite(self, tmp_path, atlas, glyphs):
        path = tmp_path / "Font12.cache"
        path.write_bytes(b"garbage")
        save_cache(path, atlas, 5.0, glyphs)
        assert load_cache(path) is not None

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "Font12.cache"
        path.write_bytes(b"garbage")
        with pytest.raises(CacheCorruptError):
            load_cache(path)

    def test_unreadable_file(self, tmp_path):
        """Test OS errors other than a missing file are reported."""
        path = tmp_path / "Font12.cache"
        with patch.object(Path, "read_bytes", side_effect=PermissionError("denied")):
            with pytest.raises(CacheReadError, match="denied"):
                load_cache(path)

    def test_write_failure(self, tmp_path, atlas, glyphs):
        path = tmp_path / "Font12.cache"
        with patch.object(Path, "write_bytes", side_effect=OSError("disk full")):
            with pytest.raises(CacheWriteError, match="disk full"):
                save_cache(path, atlas, 5.0, glyphs)
        assert not path.exists()
