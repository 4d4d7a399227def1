"""Command-line interface for glyphatlas.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bar for glyph rasterization
- Verbose/quiet output modes
- Atlas preview export
- Cache file inspection
"""

from glyphatlas.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
