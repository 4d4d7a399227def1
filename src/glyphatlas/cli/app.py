"""CLI application entry point for glyphatlas.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from glyphatlas import __version__
from glyphatlas.cli.output import (
    console,
    create_progress,
    print_build_info,
    print_cache_info,
    print_error,
    print_glyph_table,
    print_header,
    print_step,
    print_success,
    print_warning,
)
from glyphatlas.config import (
    CacheConfig,
    GlyphAtlasSettings,
    LoggingConfig,
    ProcessingConfig,
    RasterConfig,
)
from glyphatlas.core import FontBuilder
from glyphatlas.exceptions import CacheError, FontLoadError, GlyphAtlasError
from glyphatlas.io import load_cache, save_atlas_preview
from glyphatlas.utils import configure_logging

DEFAULT_SPREAD = 4
DEFAULT_FIRST_CHAR = 33
DEFAULT_LAST_CHAR = 127

# Create the Typer app
app = typer.Typer(
    name="glyphatlas",
    help="Build signed distance field glyph atlases from TrueType fonts.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]glyphatlas[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Build signed distance field glyph atlases from TrueType fonts."""


@app.command()
def build(
    font: Annotated[
        Path,
        typer.Argument(
            help="Path to input TTF font file",
            show_default=False,
        ),
    ],
    size: Annotated[
        int,
        typer.Option(
            "--size",
            "-s",
            help="Pixel size of the em square",
            min=1,
        ),
    ],
    spread: Annotated[
        int,
        typer.Option(
            "--spread",
            help="Distance field spread in pixels (1-64)",
            min=1,
            max=64,
        ),
    ] = DEFAULT_SPREAD,
    first: Annotated[
        int,
        typer.Option(
            "--first",
            help="First character code (inclusive)",
            min=0,
        ),
    ] = DEFAULT_FIRST_CHAR,
    last: Annotated[
        int,
        typer.Option(
            "--last",
            help="Last character code (exclusive)",
            min=1,
        ),
    ] = DEFAULT_LAST_CHAR,
    cache_dir: Annotated[
        Path,
        typer.Option(
            "--cache-dir",
            "-c",
            help="Directory for atlas cache files",
        ),
    ] = Path("target/fonts"),
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Rebuild even if a cache file exists",
        ),
    ] = False,
    preview: Annotated[
        Path | None,
        typer.Option(
            "--preview",
            help="Also write the atlas as a greyscale image",
        ),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto, 1: in-process)",
            min=1,
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Build (or load from cache) the distance field atlas of a font.

    Example:
        glyphatlas build Roboto-Regular.ttf --size 32

    This writes target/fonts/Roboto-Regular32.cache, or reuses it if it
    already exists.
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not font.is_file():
        print_error(
            f"Input file not found: {font}",
            details="Please provide a path to a TrueType font file.",
        )
        raise typer.Exit(code=1)

    try:
        settings = GlyphAtlasSettings(
            raster=RasterConfig(spread=spread, first_char=first, last_char=last),
            cache=CacheConfig(cache_dir=cache_dir),
            processing=ProcessingConfig(max_workers=workers),
            logging=LoggingConfig(
                log_file=log_file,
                log_level="DEBUG" if verbose else log_level,
            ),
        )
    except ValidationError as e:
        print_error("Invalid options", details=str(e.errors()[0]["msg"]))
        raise typer.Exit(code=1)

    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    if not quiet:
        print_header(__version__)
        print_step("Building atlas")
        print_build_info(
            font_path=str(font),
            pixel_size=size,
            spread=spread,
            char_count=len(settings.raster.char_codes()),
        )

    builder = FontBuilder(settings, logger=logger)

    try:
        if not quiet:
            with create_progress() as progress:
                task_id = progress.add_task(
                    "Rasterizing", total=len(settings.raster.char_codes())
                )

                def update_progress(completed: int, *_: object) -> None:
                    progress.update(task_id, completed=completed)

                result = builder.build_or_load(
                    font, size, force=force, progress_callback=update_progress
                )
                progress.update(task_id, completed=len(settings.raster.char_codes()))
        else:
            result = builder.build_or_load(font, size, force=force)

        if preview is not None:
            save_atlas_preview(result.atlas, preview)

    except KeyboardInterrupt:
        print_error("Cancelled")
        raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code
    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except GlyphAtlasError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except (ValueError, OSError) as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    cache_file = builder.cache_path_for(font, size)
    stats = builder.last_stats

    # The cache key is font stem and pixel size only
    raster_options = (spread, first, last)
    defaults = (DEFAULT_SPREAD, DEFAULT_FIRST_CHAR, DEFAULT_LAST_CHAR)
    if stats is not None and stats.cache_hit and raster_options != defaults:
        logger.warning(
            "Raster options ignored on cache hit",
            cache=str(cache_file),
            spread=spread,
            first_char=first,
            last_char=last,
        )
        if not quiet:
            print_warning(
                "--spread/--first/--last do not apply to a cached atlas; "
                "pass --force to rebuild with them"
            )

    if not quiet and stats is not None:
        print_success(
            cache_path=str(cache_file),
            file_size=_format_file_size(cache_file),
            total_time_s=stats.duration_seconds,
            glyph_count=len(result.glyphs),
            atlas_width=result.atlas_width,
            atlas_height=result.atlas_height,
            cache_hit=stats.cache_hit,
            avg_time_ms=stats.avg_glyph_time_ms,
            max_time_ms=stats.max_glyph_time_ms,
        )
        if preview is not None:
            console.print(f"  preview {preview}")
        if verbose:
            print_glyph_table(result.glyphs.values())


@app.command()
def inspect(
    cache_file: Annotated[
        Path,
        typer.Argument(
            help="Path to an atlas cache file",
            show_default=False,
        ),
    ],
    preview: Annotated[
        Path | None,
        typer.Option(
            "--preview",
            help="Write the atlas as a greyscale image",
        ),
    ] = None,
) -> None:
    """Print the contents of an atlas cache file."""
    try:
        cached = load_cache(cache_file)
        if cached is None:
            print_error(f"Cache file not found: {cache_file}")
            raise typer.Exit(code=1)

        if preview is not None:
            save_atlas_preview(cached.atlas, preview)

    except CacheError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except (ValueError, OSError) as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    print_cache_info(
        cache_path=str(cache_file),
        atlas_width=cached.width,
        atlas_height=cached.height,
        space_advance=cached.space_advance,
        glyph_count=len(cached.glyphs),
    )
    print_glyph_table(cached.glyphs.values())


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "428 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"

    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
