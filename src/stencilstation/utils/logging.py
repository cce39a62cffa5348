"""Logging utilities for Stencil Station."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import structlog


@dataclass
class BuildStats:
    """Statistics from a build run."""

    parts_built: int = 0
    error_count: int = 0
    cutters_placed: int = 0
    samples_skipped: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    part_times_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate build duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_part_time_ms(self) -> float | None:
        if not self.part_times_ms:
            return None
        return sum(self.part_times_ms) / len(self.part_times_ms)


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
        log_file = Path(f"stencilstation_{timestamp}.log")

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

    # trimesh logs every triangulation at debug level
    logging.getLogger("trimesh").setLevel(logging.WARNING)

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

    logger = structlog.get_logger("stencilstation")
    logger.info("Logging initialized", log_file=str(log_file), level=file_level)

    return logger


class BuildLogger:
    """Logger for tracking build progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = BuildStats()

    def log_part_start(self, part: str) -> None:
        """Log start of part construction."""
        self._logger.debug("Building part", part=part)

    def log_part_complete(self, part: str, cutters: int, duration_ms: float) -> None:
        """Log successful part construction."""
        self._logger.info(
            "Part built",
            part=part,
            cutters=cutters,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.parts_built += 1
        self._stats.cutters_placed += cutters
        self._stats.part_times_ms.append(duration_ms)

    def log_part_error(
        self,
        part: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log part construction error."""
        self._logger.error(
            "Part construction failed",
            part=part,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((part, str(error)))

    def log_samples_skipped(self, part: str, count: int) -> None:
        """Log curve samples dropped or culled while building a part."""
        if count:
            self._logger.debug("Curve samples skipped", part=part, count=count)
        self._stats.samples_skipped += count

    @property
    def stats(self) -> BuildStats:
        """Get current build statistics."""
        return self._stats
