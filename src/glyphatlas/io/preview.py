"""Greyscale image export of an atlas for visual inspection."""

from pathlib import Path

from PIL import Image

from glyphatlas.domain import Atlas


def atlas_to_image(atlas: Atlas) -> Image.Image:
    """Wrap atlas texels in an 8-bit greyscale Pillow image."""
    return Image.frombytes("L", (atlas.width, atlas.height), atlas.pixels)


def save_atlas_preview(atlas: Atlas, path: Path) -> None:
    """Write the atlas as a greyscale image.

    The format follows the file extension (PNG, BMP, ...).

    Args:
        atlas: Atlas to export
        path: Output image path

    Raises:
        ValueError: If the atlas is empty
    """
    if atlas.width == 0 or atlas.height == 0:
        raise ValueError("Cannot export an empty atlas")

    path.parent.mkdir(parents=True, exist_ok=True)
    atlas_to_image(atlas).save(str(path))
