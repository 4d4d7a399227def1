"""Font and cache I/O layer for glyphatlas.

This module handles reading fonts with fonttools and reading/writing the
binary atlas cache. It provides a clean abstraction layer between fonttools
and the domain models.

Key responsibilities:
- Load TTF/OTF fonts and extract pixel-space outlines and metrics
- Encode and decode the atlas cache format
- Export atlas previews as images

Key classes and functions:
- FontReader: Load fonts and extract glyphs by character code
- load_cache / save_cache: Atlas cache codec
- save_atlas_preview: Greyscale image export
"""

from glyphatlas.io.cache import CachedAtlas, cache_path, load_cache, save_cache
from glyphatlas.io.preview import save_atlas_preview
from glyphatlas.io.reader import ExtractedGlyph, FontReader

__all__ = [
    "CachedAtlas",
    "ExtractedGlyph",
    "FontReader",
    "cache_path",
    "load_cache",
    "save_atlas_preview",
    "save_cache",
]
