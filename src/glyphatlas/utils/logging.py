"""Logging utilities for glyphatlas."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Handlers installed by the last configure_logging call
_installed_handlers: list[logging.Handler] = []


@dataclass
class BuildStats:
    """Statistics from one font build."""

    cache_hit: bool = False
    rebuilt_corrupt_cache: bool = False
    glyph_count: int = 0
    atlas_width: int = 0
    atlas_height: int = 0
    glyph_timings_ms: list[float] = field(default_factory=list)
    pack_time_ms: float = 0.0
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate build duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_glyph_time_ms(self) -> float | None:
        if not self.glyph_timings_ms:
            return None
        return sum(self.glyph_timings_ms) / len(self.glyph_timings_ms)

    @property
    def max_glyph_time_ms(self) -> float | None:
        if not self.glyph_timings_ms:
            return None
        return max(self.glyph_timings_ms)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Handlers installed by a previous call are removed first.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("glyphatlas")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level if log_file else console_level,
    )

    return logger


class BuildLogger:
    """Logger for tracking build progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = BuildStats()

    def log_cache_hit(self, path: Path, glyph_count: int) -> None:
        """Log a font served from the cache."""
        self._logger.info("Atlas cache hit", cache=str(path), glyphs=glyph_count)
        self._stats.cache_hit = True
        self._stats.glyph_count = glyph_count

    def log_cache_miss(self, path: Path) -> None:
        """Log a missing cache file."""
        self._logger.info("Atlas cache miss", cache=str(path))

    def log_cache_corrupt(self, path: Path, error: Exception) -> None:
        """Log a corrupt cache file that will be rebuilt."""
        self._logger.warning(
            "Atlas cache corrupt, rebuilding",
            cache=str(path),
            error=str(error),
        )
        self._stats.rebuilt_corrupt_cache = True

    def log_glyph_rasterized(
        self,
        char_code: int,
        width: int,
        height: int,
        duration_ms: float,
    ) -> None:
        """Log a rasterized glyph."""
        self._logger.debug(
            "Glyph rasterized",
            char_code=char_code,
            width=width,
            height=height,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.glyph_count += 1
        self._stats.glyph_timings_ms.append(duration_ms)

    def log_atlas_packed(self, width: int, height: int, duration_ms: float) -> None:
        """Log the packed atlas size."""
        self._logger.info(
            "Atlas packed",
            width=width,
            height=height,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.atlas_width = width
        self._stats.atlas_height = height
        self._stats.pack_time_ms = duration_ms

    @property
    def stats(self) -> BuildStats:
        """Get current build statistics."""
        return self._stats
