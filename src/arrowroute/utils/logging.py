"""Logging utilities for Arrowroute."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class RoutingStats:
    """Statistics from a rendering run."""

    arrows_routed: int = 0
    strategies: dict[str, int] = field(default_factory=dict)
    fallbacks: int = 0
    labels_generated: int = 0
    labels_failed: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None
    route_times_ms: list[float] = field(default_factory=list)

    @property
    def duration_seconds(self) -> float:
        """Calculate run duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_route_time_ms(self) -> float | None:
        """Average time to route one arrow in milliseconds."""
        if not self.route_times_ms:
            return None
        return sum(self.route_times_ms) / len(self.route_times_ms)


_installed_handlers: list[logging.Handler] = []


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

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

    # Reconfiguring replaces the handlers installed by an earlier call
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

    logger = structlog.get_logger("arrowroute")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class RoutingLogger:
    """Logger for tracking routing progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = RoutingStats()

    def log_arrow_routed(
        self,
        arrow_idx: int,
        strategy: str,
        points: int,
        fell_back: bool,
        duration_ms: float,
    ) -> None:
        """Log a routed arrow."""
        self._logger.debug(
            "Arrow routed",
            arrow=arrow_idx,
            strategy=strategy,
            points=points,
            fell_back=fell_back,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.arrows_routed += 1
        self._stats.strategies[strategy] = self._stats.strategies.get(strategy, 0) + 1
        self._stats.route_times_ms.append(duration_ms)
        if fell_back:
            self._stats.fallbacks += 1

    def log_label(self, arrow_idx: int, outcome: str, reason: str | None = None) -> None:
        """Log the outcome of label generation."""
        if outcome == "ok":
            self._logger.debug("Label generated", arrow=arrow_idx)
            self._stats.labels_generated += 1
        elif outcome == "error":
            self._logger.warning("Label omitted", arrow=arrow_idx, reason=reason)
            self._stats.labels_failed += 1
        else:
            self._logger.debug("Label skipped", arrow=arrow_idx, reason=reason)

    def log_arrow_error(
        self,
        arrow_idx: int,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log an arrow that could not be rendered."""
        self._logger.error(
            "Arrow rendering failed",
            arrow=arrow_idx,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.errors.append((str(arrow_idx), str(error)))

    @property
    def stats(self) -> RoutingStats:
        """Get current routing statistics."""
        return self._stats
