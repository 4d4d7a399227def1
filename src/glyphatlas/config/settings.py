"""Configuration settings for glyphatlas."""

from pathlib import Path

from pydantic import BaseModel, Field, model_validator

MAX_CODE_POINT = 0x10FFFF


class RasterConfig(BaseModel):
    """Configuration for distance field rasterization.

    The character range is half-open: ``first_char`` is rasterized,
    ``last_char`` is not.
    """

    spread: int = Field(
        default=4,
        ge=1,
        le=64,
        description="Distance in pixels represented by the field before clamping",
    )
    first_char: int = Field(
        default=33,
        ge=0,
        le=MAX_CODE_POINT,
        description="First character code to rasterize (inclusive)",
    )
    last_char: int = Field(
        default=127,
        ge=1,
        le=MAX_CODE_POINT + 1,
        description="Last character code to rasterize (exclusive)",
    )

    @model_validator(mode="after")
    def _check_char_range(self) -> "RasterConfig":
        if self.first_char >= self.last_char:
            raise ValueError(
                f"Empty character range: first_char={self.first_char}, "
                f"last_char={self.last_char}"
            )
        return self

    def char_codes(self) -> range:
        """Get the configured character codes.

        Returns:
            Range of character codes to rasterize
        """
        return range(self.first_char, self.last_char)


class CacheConfig(BaseModel):
    """Configuration for the atlas cache."""

    cache_dir: Path = Field(
        default=Path("target/fonts"),
        description="Directory holding <stem><size>.cache files",
    )
    rebuild_on_corrupt: bool = Field(
        default=True,
        description="Treat a corrupt cache file as a miss and overwrite it",
    )


class ProcessingConfig(BaseModel):
    """Configuration for glyph rasterization."""

    max_workers: int | None = Field(
        default=None,
        ge=1,
        description="Max worker processes (None = auto, 1 = in-process)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class GlyphAtlasSettings(BaseModel):
    """Main application settings."""

    raster: RasterConfig = Field(default_factory=RasterConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> GlyphAtlasSettings:
    """Get default application settings."""
    return GlyphAtlasSettings()
