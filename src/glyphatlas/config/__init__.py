"""Configuration management for glyphatlas.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- RasterConfig: Distance field and character range settings
- CacheConfig: Atlas cache location and corruption policy
- ProcessingConfig: Worker pool settings
- LoggingConfig: Logging settings
- GlyphAtlasSettings: Main application settings
"""

from glyphatlas.config.settings import (
    CacheConfig,
    GlyphAtlasSettings,
    LoggingConfig,
    ProcessingConfig,
    RasterConfig,
    get_default_settings,
)

__all__ = [
    "CacheConfig",
    "GlyphAtlasSettings",
    "LoggingConfig",
    "ProcessingConfig",
    "RasterConfig",
    "get_default_settings",
]
