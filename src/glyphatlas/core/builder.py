"""Font atlas build orchestration.

This module coordinates the full pipeline for one font and pixel size:
cache lookup, outline extraction, distance field rasterization (optionally
in worker processes), packing, and persisting the cache.

Key components:
- rasterize_glyph_task: Top-level picklable function for parallel execution
- FontBuilder: Main orchestrator class
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Any

import structlog

from glyphatlas.config import GlyphAtlasSettings, get_default_settings
from glyphatlas.core.packer import pack_glyphs
from glyphatlas.core.rasterizer import rasterize
from glyphatlas.domain import Atlas, Contour, Font, GlyphMetrics, PlacedGlyph, UnplacedGlyph
from glyphatlas.exceptions import (
    CacheCorruptError,
    FontLoadError,
    GlyphRasterizationError,
    UnsupportedSegmentError,
)
from glyphatlas.io import CachedAtlas, FontReader, cache_path, load_cache, save_cache
from glyphatlas.utils import BuildLogger, BuildStats

ProgressCallback = Callable[[int, int, int], None]


def rasterize_glyph_task(task: dict[str, Any]) -> dict[str, Any]:
    """Rasterize a single glyph.

    Top-level function designed to be picklable for use with
    ProcessPoolExecutor. Failures are returned as data so that the parent
    can raise a precise error; custom exceptions do not survive pickling.

    Args:
        task: {"contours": [...], "metrics": {...}, "spread": int}

    Returns:
        Dictionary containing either:
        - Success: {"glyph": glyph_dict, "duration_ms": float}
        - Unsupported outline: {"unsupported": kind, "char_code": int, ...}
        - Error: {"error": str, "char_code": int, "traceback": str, ...}
    """
    start_time = time.time()
    char_code = task["metrics"]["char_code"]

    try:
        contours = [Contour.from_dict(c) for c in task["contours"]]
        metrics = GlyphMetrics.from_dict(task["metrics"])
        glyph = rasterize(contours, metrics, task["spread"])

        return {
            "glyph": glyph.to_dict(),
            "duration_ms": (time.time() - start_time) * 1000,
        }

    except UnsupportedSegmentError as e:
        return {
            "unsupported": e.kind,
            "char_code": char_code,
            "duration_ms": (time.time() - start_time) * 1000,
        }

    except Exception as e:
        return {
            "error": str(e),
            "char_code": char_code,
            "traceback": traceback.format_exc(),
            "duration_ms": (time.time() - start_time) * 1000,
        }


class FontBuilder:
    """Builds SDF fonts, reusing the atlas cache when possible.

    Manages the complete workflow:
    1. Look up <cache_dir>/<stem><size>.cache
    2. On a miss, extract every character in the configured range
    3. Rasterize glyphs, in worker processes unless max_workers is 1
    4. Pack all glyphs into one atlas
    5. Persist the cache and return the Font

    A build either produces a complete Font or raises; nothing partial is
    cached.

    Example:
        builder = FontBuilder(GlyphAtlasSettings())
        font = builder.build_or_load(Path("Roboto-Regular.ttf"), 32)
    """

    def __init__(
        self,
        config: GlyphAtlasSettings | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            config: Settings for rasterization, cache and processing
            logger: Logger to report to (module logger if None)
        """
        self.config = config if config is not None else get_default_settings()
        self.logger = logger if logger is not None else structlog.get_logger("glyphatlas")
        self.last_stats: BuildStats | None = None

    def cache_path_for(self, font_path: Path, pixel_size: int) -> Path:
        """Cache file used for ``font_path`` at ``pixel_size``."""
        return cache_path(self.config.cache.cache_dir, font_path, pixel_size)

    def build_or_load(
        self,
        font_path: Path,
        pixel_size: int,
        force: bool = False,
        progress_callback: ProgressCallback | None = None,
    ) -> Font:
        """Return the SDF font for a font file and pixel size.

        Args:
            font_path: Path to the TTF font file
            pixel_size: Pixel size of the em square
            force: Skip the cache lookup and rebuild
            progress_callback: Optional callback(completed, total, char_code)
                called after each rasterized glyph

        Returns:
            Assembled Font

        Raises:
            ValueError: If pixel_size is not positive
            FontLoadError: If the font cannot be read
            UnsupportedSegmentError: If an outline holds cubic curves
            CacheCorruptError: If the cache is corrupt and rebuilding is
                disabled
            CacheReadError, CacheWriteError: On cache I/O failures
        """
        if pixel_size < 1:
            raise ValueError(f"pixel_size must be positive, got {pixel_size}")

        build_logger = BuildLogger(self.logger)
        stats = build_logger.stats
        stats.start_time = time.time()
        self.last_stats = stats

        path = self.cache_path_for(font_path, pixel_size)
        name = font_path.stem

        if not force:
            cached = self._try_load(path, build_logger)
            if cached is not None:
                build_logger.log_cache_hit(path, len(cached.glyphs))
                stats.atlas_width = cached.width
                stats.atlas_height = cached.height
                stats.end_time = time.time()
                return Font(
                    name=name,
                    pixel_size=pixel_size,
                    atlas=cached.atlas,
                    space_advance=cached.space_advance,
                    glyphs=cached.glyphs,
                )

        self.logger.info(
            "Building font atlas",
            font=str(font_path),
            pixel_size=pixel_size,
            spread=self.config.raster.spread,
        )

        atlas, space_advance, glyphs = self.build(
            font_path,
            pixel_size,
            build_logger=build_logger,
            progress_callback=progress_callback,
        )
        save_cache(path, atlas, space_advance, glyphs.values())

        stats.end_time = time.time()
        self.logger.info(
            "Atlas cache written",
            cache=str(path),
            glyphs=len(glyphs),
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return Font(
            name=name,
            pixel_size=pixel_size,
            atlas=atlas,
            space_advance=space_advance,
            glyphs=glyphs,
        )

    def _try_load(self, path: Path, build_logger: BuildLogger) -> CachedAtlas | None:
        try:
            cached = load_cache(path)
        except CacheCorruptError as e:
            if not self.config.cache.rebuild_on_corrupt:
                raise
            build_logger.log_cache_corrupt(path, e)
            return None

        if cached is None:
            build_logger.log_cache_miss(path)
        return cached

    def build(
        self,
        font_path: Path,
        pixel_size: int,
        build_logger: BuildLogger | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> tuple[Atlas, float, dict[int, PlacedGlyph]]:
        """Rasterize and pack a font without touching the cache.

        Args:
            font_path: Path to the TTF font file
            pixel_size: Pixel size of the em square
            build_logger: Statistics sink (a fresh one if None)
            progress_callback: Optional callback(completed, total, char_code)

        Returns:
            Tuple of (atlas, space advance, placements by character code)
        """
        if build_logger is None:
            build_logger = BuildLogger(self.logger)

        space_advance, tasks = self._extract_tasks(font_path, pixel_size)
        unplaced = self._rasterize_all(tasks, build_logger, progress_callback)

        start_time = time.time()
        atlas, glyphs = pack_glyphs(unplaced)
        build_logger.log_atlas_packed(
            atlas.width, atlas.height, (time.time() - start_time) * 1000
        )

        return atlas, space_advance, glyphs

    def _extract_tasks(
        self, font_path: Path, pixel_size: int
    ) -> tuple[float, list[dict[str, Any]]]:
        """Read outlines for every configured character.

        Raises:
            FontLoadError: If the font cannot be loaded or a glyph is missing
        """
        spread = self.config.raster.spread
        reader = FontReader(font_path)

        try:
            reader.load()
        except Exception as e:
            raise FontLoadError(str(font_path), str(e)) from e

        try:
            self.logger.info(
                "Font loaded",
                format=reader.format,
                upm=reader.units_per_em,
                glyph_count=reader.glyph_count,
            )
            space_advance = reader.space_advance(pixel_size)

            tasks = []
            for char_code in self.config.raster.char_codes():
                extracted = reader.extract_glyph(char_code, pixel_size)
                tasks.append(
                    {
                        "contours": [c.to_dict() for c in extracted.contours],
                        "metrics": extracted.metrics.to_dict(),
                        "spread": spread,
                    }
                )
        except Exception as e:
            # Tables are decompiled lazily, so damage surfaces here
            raise FontLoadError(str(font_path), f"cannot extract outlines: {e}") from e
        finally:
            reader.close()

        return space_advance, tasks

    def _rasterize_all(
        self,
        tasks: list[dict[str, Any]],
        build_logger: BuildLogger,
        progress_callback: ProgressCallback | None,
    ) -> list[UnplacedGlyph]:
        """Rasterize all tasks, in process or in a worker pool.

        Results are reassembled in character code order, so the output does
        not depend on worker scheduling.
        """
        max_workers = self.config.processing.max_workers
        total = len(tasks)
        results: dict[int, UnplacedGlyph] = {}

        self.logger.info(
            "Rasterizing glyphs",
            glyph_count=total,
            max_workers=max_workers,
        )

        def collect(result: dict[str, Any]) -> None:
            glyph = self._unwrap_result(result)
            results[glyph.char_code] = glyph
            build_logger.log_glyph_rasterized(
                glyph.char_code, glyph.width, glyph.height, result["duration_ms"]
            )
            if progress_callback is not None:
                progress_callback(len(results), total, glyph.char_code)

        if max_workers == 1:
            for task in tasks:
                collect(rasterize_glyph_task(task))
        else:
            with ProcessPoolExecutor(max_workers=max_workers) as executor:
                futures = [executor.submit(rasterize_glyph_task, task) for task in tasks]
                try:
                    for future in as_completed(futures):
                        collect(future.result())
                except BaseException:
                    executor.shutdown(wait=True, cancel_futures=True)
                    raise

        return [results[code] for code in sorted(results)]

    def _unwrap_result(self, result: dict[str, Any]) -> UnplacedGlyph:
        if "unsupported" in result:
            raise UnsupportedSegmentError(result["unsupported"], result["char_code"])
        if "error" in result:
            self.logger.error(
                "Glyph rasterization failed",
                char_code=result["char_code"],
                error=result["error"],
                traceback=result.get("traceback"),
            )
            raise GlyphRasterizationError(result["char_code"], result["error"])
        return UnplacedGlyph.from_dict(result["glyph"])
