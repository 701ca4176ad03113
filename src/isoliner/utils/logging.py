"""Logging utilities for Isoliner."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

import structlog

LOGGER_NAME = "isoliner"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


@dataclass
class ProcessingStats:
    """Statistics from processing run."""

    processed_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    path_count: int = 0
    closed_count: int = 0
    errors: list[tuple[float, str]] = field(default_factory=list)
    threshold_timings_ms: list[float] = field(default_factory=list)
    was_cancelled: bool = False
    cancelled_count: int = 0
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_threshold_time_ms(self) -> float | None:
        """Average extraction time per threshold."""
        if not self.threshold_timings_ms:
            return None
        return sum(self.threshold_timings_ms) / len(self.threshold_timings_ms)

    @property
    def min_threshold_time_ms(self) -> float | None:
        """Fastest extraction time for a threshold."""
        return min(self.threshold_timings_ms) if self.threshold_timings_ms else None

    @property
    def max_threshold_time_ms(self) -> float | None:
        """Slowest extraction time for a threshold."""
        return max(self.threshold_timings_ms) if self.threshold_timings_ms else None


def _replace_handlers(logger: logging.Logger, handlers: list[logging.Handler]) -> None:
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    for handler in handlers:
        logger.addHandler(handler)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Handlers are attached to the "isoliner" logger and replace any installed
    by an earlier call, so one process can run several traces.

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
        log_file = Path(f"isoliner_{timestamp}.log")

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(file_level.upper())
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
    handlers: list[logging.Handler] = [file_handler]

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(console_level.upper())
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(console_handler)

    base_logger = logging.getLogger(LOGGER_NAME)
    base_logger.setLevel(logging.DEBUG)
    base_logger.propagate = False
    _replace_handlers(base_logger, handlers)

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

    logger = structlog.get_logger(LOGGER_NAME)
    logger.info("Logging initialized", log_file=str(log_file), level=file_level)

    return logger


class ProcessingLogger:
    """Logger for tracking processing progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_threshold_start(self, threshold: float) -> None:
        """Log start of threshold extraction."""
        self._logger.debug("Extracting threshold", threshold=threshold)

    def log_threshold_complete(
        self,
        threshold: float,
        path_count: int,
        closed_count: int,
        duration_ms: float,
    ) -> None:
        """Log successful threshold extraction."""
        self._logger.info(
            "Threshold extracted",
            threshold=threshold,
            paths=path_count,
            closed=closed_count,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.path_count += path_count
        self._stats.closed_count += closed_count
        self._stats.threshold_timings_ms.append(duration_ms)

    def log_threshold_skipped(self, threshold: float, reason: str) -> None:
        """Log skipped threshold."""
        self._logger.debug("Threshold skipped", threshold=threshold, reason=reason)
        self._stats.skipped_count += 1

    def log_threshold_error(
        self,
        threshold: float,
        error: str,
        error_type: str,
        traceback: str | None = None,
        diagnostic: dict[str, Any] | None = None,
    ) -> None:
        """Log threshold extraction error."""
        self._logger.error(
            "Threshold extraction failed",
            threshold=threshold,
            error=error,
            error_type=error_type,
            diagnostic=diagnostic,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((threshold, error))

    def log_field_summary(
        self,
        width: int,
        height: int,
        cells: int,
        min_value: float,
        max_value: float,
    ) -> None:
        """Log scalar field dimensions and range."""
        self._logger.debug(
            "Field loaded",
            width=width,
            height=height,
            cells=cells,
            min=min_value,
            max=max_value,
        )

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
