"""Logging utilities for Glyphfield."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import structlog


@dataclass
class BakeStats:
    """Statistics from a baking run."""

    baked_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    cancelled_count: int = 0
    was_cancelled: bool = False
    errors: list[tuple[str, str]] = field(default_factory=list)
    glyph_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate baking duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_glyph_time_ms(self) -> float | None:
        if not self.glyph_timings_ms:
            return None
        return sum(self.glyph_timings_ms) / len(self.glyph_timings_ms)

    @property
    def min_glyph_time_ms(self) -> float | None:
        return min(self.glyph_timings_ms) if self.glyph_timings_ms else None

    @property
    def max_glyph_time_ms(self) -> float | None:
        return max(self.glyph_timings_ms) if self.glyph_timings_ms else None


def _configure_structlog() -> None:
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


def configure_worker_logging(level: str = "WARNING") -> None:
    """Route structlog events of a worker process through stdlib logging.

    Worker processes do not inherit the parent's handlers; without this,
    structlog's default configuration would print every debug event.

    Args:
        level: Minimum level emitted by the worker
    """
    logging.getLogger().setLevel(getattr(logging, level.upper()))
    _configure_structlog()


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (auto-generated if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    if log_file is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = Path(f"glyphfield_{timestamp}.log")

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(getattr(logging, file_level.upper()))
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    _configure_structlog()

    logger = structlog.get_logger("glyphfield")
    logger.info("Logging initialized", log_file=str(log_file), level=file_level)

    return logger


class BakeLogger:
    """Logger for tracking baking progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = BakeStats()

    def log_glyph_start(self, glyph_name: str) -> None:
        """Log start of glyph baking."""
        self._logger.debug("Baking glyph", glyph=glyph_name)

    def log_glyph_complete(
        self,
        glyph_name: str,
        edges: int,
        duration_ms: float,
    ) -> None:
        """Log successful glyph bake."""
        self._logger.info(
            "Glyph baked",
            glyph=glyph_name,
            edges=edges,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.baked_count += 1
        self._stats.glyph_timings_ms.append(duration_ms)

    def log_glyph_skipped(self, glyph_name: str, reason: str) -> None:
        """Log skipped glyph."""
        self._logger.debug("Glyph skipped", glyph=glyph_name, reason=reason)
        self._stats.skipped_count += 1

    def log_glyph_error(
        self,
        glyph_name: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log glyph baking error."""
        self._logger.error(
            "Glyph baking failed",
            glyph=glyph_name,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((glyph_name, str(error)))

    def log_shape_summary(
        self,
        glyph_name: str,
        contours: int,
        edges: int,
        closed: bool,
    ) -> None:
        """Log decoded shape structure."""
        log = self._logger.debug if closed else self._logger.warning
        log(
            "Shape decoded",
            glyph=glyph_name,
            contours=contours,
            edges=edges,
            closed=closed,
        )

    @property
    def stats(self) -> BakeStats:
        """Get current baking statistics."""
        return self._stats
