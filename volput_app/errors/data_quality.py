"""
Data quality error classifications for market history processing.

These exceptions categorize problems with the price/IV series and the
derived series (trades, ledger) that make a backtest impossible to run.
"""

from datetime import date
from typing import Any, Dict, Optional


class DataQualityError(Exception):
    """Base class for problems with the data fed into the pipeline."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class MisalignedSeriesError(DataQualityError):
    """Price and IV series disagree on dates, or dates are not strictly increasing."""

    def __init__(self, message: str, index: Optional[int] = None,
                 date: Optional[date] = None,
                 previous_date: Optional[date] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.index = index
        self.date = date
        self.previous_date = previous_date


class MalformedDataError(DataQualityError):
    """Data exists but has missing columns or out-of-range values."""

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


class InsufficientDataError(DataQualityError):
    """Not enough history for the requested statistic."""

    def __init__(self, message: str, required_count: Optional[int] = None,
                 available_count: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.required_count = required_count
        self.available_count = available_count


class EmptyInputError(DataQualityError):
    """A stage received an empty collection it cannot work with."""

    def __init__(self, message: str, data_type: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.data_type = data_type
