"""
Centralized logging configuration for the backtester.

This module provides standardized logging configuration using structlog
for all components. Pipeline stages log through loggers obtained here so
that a backtest run produces one consistent structured event stream.
"""
import logging
import sys
from datetime import date
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    # Log to stderr so stdout stays free for the summary report
    logging.basicConfig(
        level=log_level,
        stream=sys.stderr,
        format="%(message)s"
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_ledger_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for account ledger events.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for ledger replay
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="ledger",
        audit_trail=True
    )


def log_trade_event(
    logger: FilteringBoundLogger,
    action: str,
    day: date,
    strike: float,
    cash: float,
    collateral: float,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a trade opening or expiring in the ledger with standardized format.

    Args:
        logger: Structlog logger instance
        action: "open" or "expire"
        day: Calendar day the event is applied on
        strike: Strike of the trade (collateral posted or released)
        cash: Cash balance after the event
        collateral: Collateral balance after the event
        context: Additional context data
    """
    bound_logger = logger.bind(
        action=action,
        day=day.isoformat(),
        strike=strike,
        cash=cash,
        collateral=collateral,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.debug("Trade event applied")
