"""Utility functions for glyphatlas.

This module provides utility functions including:

- Logging setup and configuration
- Build statistics tracking
"""

from glyphatlas.utils.logging import (
    BuildLogger,
    BuildStats,
    configure_logging,
)

__all__ = [
    "BuildLogger",
    "BuildStats",
    "configure_logging",
]
