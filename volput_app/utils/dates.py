"""
Calendar and trading-day helpers.

The pipeline mixes two clocks: option tenor is measured in trading-day rows
of the observation series, while the account ledger is date-driven and
walks every calendar day.
"""

from collections.abc import Iterator
from datetime import date, timedelta


def calendar_days(start: date, end: date) -> Iterator[date]:
    """
    Yield every calendar day from start to end inclusive.

    Args:
        start: First day
        end: Last day; nothing is yielded when it precedes start
    """
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def trading_days_to_years(trading_days: int, trading_days_per_year: int = 252) -> float:
    """Convert a tenor in trading days to a year fraction."""
    return trading_days / trading_days_per_year

