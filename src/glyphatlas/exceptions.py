"""Exception hierarchy for glyphatlas."""


class GlyphAtlasError(Exception):
    """Base exception for all glyphatlas errors."""

    pass


class FontError(GlyphAtlasError):
    """Errors related to reading the source font."""

    pass


class FontLoadError(FontError):
    """Error loading or parsing a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class GlyphError(GlyphAtlasError):
    """Errors related to glyph processing."""

    pass


class GlyphNotFoundError(GlyphError):
    """Requested character has no glyph in the font or atlas."""

    def __init__(self, char_code: int) -> None:
        self.char_code = char_code
        super().__init__(f"No glyph for character {char_code} ({chr(char_code)!r})")


class UnsupportedSegmentError(GlyphError):
    """Outline contains a segment type the distance evaluator cannot handle.

    Only lines and quadratic Bezier curves have a closed-form distance
    query; cubic curves (CFF outlines) are rejected.
    """

    def __init__(self, kind: str, char_code: int | None = None) -> None:
        self.kind = kind
        self.char_code = char_code
        where = f" in character {char_code}" if char_code is not None else ""
        super().__init__(f"Unsupported outline segment '{kind}'{where}")


class GlyphRasterizationError(GlyphError):
    """Error rasterizing a specific glyph in a worker process."""

    def __init__(self, char_code: int, reason: str) -> None:
        self.char_code = char_code
        self.reason = reason
        super().__init__(f"Error rasterizing character {char_code}: {reason}")


class CacheError(GlyphAtlasError):
    """Errors related to the atlas cache file."""

    pass


class CacheCorruptError(CacheError):
    """Cache file is truncated or internally inconsistent."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Corrupt atlas cache '{path}': {reason}")


class CacheReadError(CacheError):
    """Cache file exists but could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read atlas cache '{path}': {reason}")


class CacheWriteError(CacheError):
    """Cache file could not be written."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write atlas cache '{path}': {reason}")
