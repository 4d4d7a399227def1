"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from collections.abc import Iterable

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from glyphatlas.domain import PlacedGlyph

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for glyph rasterization.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]glyphatlas[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_build_info(font_path: str, pixel_size: int, spread: int, char_count: int) -> None:
    """Print what is about to be built.

    Args:
        font_path: Path to the font file
        pixel_size: Requested pixel size
        spread: Distance field spread in pixels
        char_count: Number of characters in the configured range
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(font_path)
    console.print(line)
    console.print(
        f"  {pixel_size}px {SYM_DOT} spread {spread} {SYM_DOT} {char_count} characters"
    )


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(
    cache_path: str,
    file_size: str,
    total_time_s: float,
    glyph_count: int,
    atlas_width: int,
    atlas_height: int,
    cache_hit: bool,
    avg_time_ms: float | None = None,
    max_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        cache_path: Path to the cache file
        file_size: Human-readable file size string
        total_time_s: Total build time in seconds
        glyph_count: Number of glyphs in the atlas
        atlas_width: Atlas width in texels
        atlas_height: Atlas height in texels
        cache_hit: Whether the atlas came from the cache
        avg_time_ms: Average rasterization time per glyph in milliseconds
        max_time_ms: Slowest single glyph in milliseconds
    """
    time_str = _format_time(total_time_s)
    source = "Loaded from cache" if cache_hit else "Built"

    console.print(f"\n[bold green]{SYM_OK} {source}[/bold green] in {time_str}")

    line = Text("  ")
    line.append(cache_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)

    console.print(
        f"  {glyph_count} glyphs {SYM_DOT} atlas {atlas_width}x{atlas_height}"
    )

    if avg_time_ms is not None:
        timing = f"  {avg_time_ms:.1f}ms avg per glyph"
        if max_time_ms is not None:
            timing += f" {SYM_DOT} {max_time_ms:.1f}ms max"
        console.print(timing)


def print_cache_info(
    cache_path: str,
    atlas_width: int,
    atlas_height: int,
    space_advance: float,
    glyph_count: int,
) -> None:
    """Print the header of a cache file."""
    line = Text("  ")
    line.append(cache_path, style="bold")
    console.print(line)
    console.print(
        f"  atlas {atlas_width}x{atlas_height} {SYM_DOT} space advance "
        f"{space_advance:g} {SYM_DOT} {glyph_count} glyphs"
    )


def print_glyph_table(glyphs: Iterable[PlacedGlyph]) -> None:
    """Print the placement table of an atlas."""
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("char")
    table.add_column("code", justify="right")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    table.add_column("w", justify="right")
    table.add_column("h", justify="right")
    table.add_column("bearing", justify="right")
    table.add_column("advance", justify="right")

    for glyph in glyphs:
        table.add_row(
            repr(chr(glyph.char_code)),
            str(glyph.char_code),
            f"{glyph.position_x:g}",
            f"{glyph.position_y:g}",
            f"{glyph.width:g}",
            f"{glyph.height:g}",
            f"{glyph.bearing_x:g},{glyph.bearing_y:g}",
            f"{glyph.advance:g}",
        )

    console.print(table)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_warning(message: str) -> None:
    """Print a non-fatal warning."""
    console.print(f"[bold yellow]! Warning:[/bold yellow] {message}")
