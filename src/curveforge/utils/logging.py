"""Logging utilities for curveforge."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Handlers added by configure_logging, replaced on every call
_installed_handlers: list[logging.Handler] = []


@dataclass
class FitStats:
    """Statistics from a batch of curve fits."""

    fitted_count: int = 0
    error_count: int = 0
    segment_count: int = 0
    total_length: float = 0.0
    errors: list[tuple[str, str]] = field(default_factory=list)
    fit_times_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate batch duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_fit_time_ms(self) -> float | None:
        if not self.fit_times_ms:
            return None
        return sum(self.fit_times_ms) / len(self.fit_times_ms)


def _level_number(level: str) -> int:
    number = logging.getLevelName(level.upper())
    if not isinstance(number, int):
        raise ValueError(f"Unknown log level: {level}")
    return number


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging.

    Library modules log through the standard `logging` package; this wires
    those records and the structlog logger returned here to a console
    handler and, when `log_file` is given, a file handler.

    Args:
        log_file: Path to log file (no file logging if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    while _installed_handlers:
        old = _installed_handlers.pop()
        root_logger.removeHandler(old)
        old.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(_level_number(file_level))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else _level_number(console_level))
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

    logger = structlog.get_logger("curveforge")
    logger.debug(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class FitLogger:
    """Logger for tracking batch fitting progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = FitStats()

    def log_fit_start(self, name: str, point_count: int) -> None:
        """Log start of a fit."""
        self._logger.debug("Fitting curve", curve=name, points=point_count)

    def log_fit_complete(
        self,
        name: str,
        segments: int,
        length: float,
        duration_ms: float,
    ) -> None:
        """Log successful fit."""
        self._logger.info(
            "Curve fitted",
            curve=name,
            segments=segments,
            length=round(length, 3),
            duration_ms=round(duration_ms, 2),
        )
        self._stats.fitted_count += 1
        self._stats.segment_count += segments
        self._stats.total_length += length
        self._stats.fit_times_ms.append(duration_ms)

    def log_fit_error(
        self,
        name: str,
        error: Exception,
    ) -> None:
        """Log failed fit."""
        self._logger.error(
            "Curve fitting failed",
            curve=name,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._stats.error_count += 1
        self._stats.errors.append((name, str(error)))

    def log_intersections(self, name: str, count: int) -> None:
        """Log self-intersection analysis results."""
        self._logger.debug("Self-intersections", curve=name, count=count)

    @property
    def stats(self) -> FitStats:
        """Get current fitting statistics."""
        return self._stats
