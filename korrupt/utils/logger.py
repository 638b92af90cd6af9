"""Korrupt Structured Logging System

Provides structured logging with corruption event tracking.
Uses structlog for consistent, analyzable log output.
"""

import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger


def add_timestamp(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Processor to add ISO-formatted timestamp to log entries.

    Args:
        logger: The wrapped logger instance
        method_name: The name of the method being called
        event_dict: The event dictionary to process

    Returns:
        Event dictionary with timestamp added

    """
    event_dict["timestamp"] = datetime.now(UTC).isoformat()
    return event_dict


def add_corruption_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Processor to tag corruption events so runs can be replayed from logs.

    Events flagged with ``corruption_event=True`` get an event category and
    keep their seed at the top level of the entry.

    """
    if event_dict.pop("corruption_event", False):
        event_dict["event_category"] = "CORRUPTION"
        if "seed" in event_dict:
            event_dict["replayable"] = True

    return event_dict


def configure_logging(
    log_level: str = "INFO", json_format: bool = True, log_file: Path | None = None
) -> None:
    """Configure structlog for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Whether to output JSON format (True) or human-readable (False)
        log_file: Optional file path to write logs to

    Example:
        >>> configure_logging(log_level="DEBUG", json_format=False)
        >>> logger = structlog.get_logger("korrupt")
        >>> logger.info("run_started", seed=42)

    """
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    # Corrupted output may go to stdout, keep logs on stderr
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper()),
        force=True,
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_timestamp,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        add_corruption_context,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(getattr(logging, log_level.upper()))
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        logging.root.addHandler(file_handler)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a configured structlog logger.

    Args:
        name: Logger name (typically module name using __name__)

    Returns:
        Configured structlog BoundLogger instance

    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger


class CorruptionEventLogger:
    """Specialized logger for corruption plan events."""

    def __init__(self, logger: structlog.stdlib.BoundLogger):
        self.logger = logger

    def log_plan_built(
        self, seed: int, methods: list[dict[str, Any]], ranges: list[dict[str, int]]
    ) -> None:
        """Log a validated plan.

        Args:
            seed: Master seed of the plan
            methods: Method name, rounds and length bounds, in order
            ranges: Range start and length, in order

        """
        self.logger.info(
            "plan_built",
            corruption_event=True,
            seed=seed,
            methods=methods,
            ranges=ranges,
        )

    def log_run_started(self, seed: int, bit_length: int) -> None:
        self.logger.info(
            "run_started", corruption_event=True, seed=seed, bit_length=bit_length
        )

    def log_run_completed(self, seed: int, stats: dict[str, Any]) -> None:
        self.logger.info(
            "run_completed", corruption_event=True, seed=seed, stats=stats
        )

    def log_output_written(self, path: str, seed: int, size: int) -> None:
        self.logger.info(
            "output_written", corruption_event=True, path=path, seed=seed, size=size
        )
