"""
Error classification for the backtesting pipeline.

This module provides a structured exception hierarchy so callers and tests
can tell apart bad market data, insufficient history and misuse of the core
functions.
"""

from .data_quality import (
    DataQualityError,
    MisalignedSeriesError,
    MalformedDataError,
    InsufficientDataError,
    EmptyInputError,
)
from .system_failures import (
    SystemFailureError,
    InvalidInputError,
    ReportingError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MisalignedSeriesError",
    "MalformedDataError",
    "InsufficientDataError",
    "EmptyInputError",
    # System Failures
    "SystemFailureError",
    "InvalidInputError",
    "ReportingError",
]
