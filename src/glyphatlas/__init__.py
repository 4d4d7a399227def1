"""glyphatlas - Offline signed-distance-field glyph atlas builder.

glyphatlas rasterizes the outlines of a TrueType font into signed distance
fields, packs them into a single greyscale atlas and caches the result in a
compact binary file so that renderers can skip rasterization on later runs.

Example:
    $ glyphatlas build Roboto-Regular.ttf --size 32

This will create target/fonts/Roboto-Regular32.cache holding the atlas and
the placement table for characters 33..126.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
