"""Logging utilities for Patterin."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class ProcessingStats:
    """Statistics from a processing run."""

    processed_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    loops_produced: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    shape_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None
    was_cancelled: bool = False
    cancelled_count: int = 0

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_shape_time_ms(self) -> float | None:
        if not self.shape_timings_ms:
            return None
        return sum(self.shape_timings_ms) / len(self.shape_timings_ms)


_installed_handlers: list[logging.Handler] = []


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Repeated configuration replaces the handlers from the previous call
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root_logger.removeHandler(handler)
        handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
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

    logger = structlog.get_logger("patterin")
    logger.debug(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class ProcessingLogger:
    """Logger for tracking processing progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_shape_complete(
        self,
        label: str,
        outputs: int,
        duration_ms: float,
    ) -> None:
        """Log a successfully processed shape."""
        self._logger.info(
            "Shape processed",
            shape=label,
            outputs=outputs,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.loops_produced += outputs
        self._stats.shape_timings_ms.append(duration_ms)

    def log_shape_skipped(self, label: str, reason: str) -> None:
        """Log skipped shape."""
        self._logger.debug("Shape skipped", shape=label, reason=reason)
        self._stats.skipped_count += 1

    def log_shape_error(
        self,
        label: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log shape processing error."""
        self._logger.error(
            "Shape processing failed",
            shape=label,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((label, str(error)))

    def log_boolean_result(
        self,
        operation: str,
        inputs: int,
        outputs: int,
        duration_ms: float,
    ) -> None:
        """Log a completed boolean operation over a set of shapes."""
        self._logger.info(
            "Boolean operation complete",
            operation=operation,
            inputs=inputs,
            outputs=outputs,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += inputs
        self._stats.loops_produced += outputs
        self._stats.shape_timings_ms.append(duration_ms)

    def log_validation(self, label: str, violations: list[str]) -> None:
        """Log invariant violations found on a shape."""
        if violations:
            self._logger.warning("Shape has violations", shape=label, violations=violations)

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
